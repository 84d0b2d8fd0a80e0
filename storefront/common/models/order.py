from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils.validators import optional_str, require_int, require_number, require_str

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")


def validate_status(value: Any) -> str:
    status = require_str(value, "status")
    if status not in ORDER_STATUSES:
        raise ValueError(f"status must be one of {', '.join(ORDER_STATUSES)}")
    return status


@dataclass
class OrderItem:
    product_id: int
    quantity: int
    price: float
    product_name: Optional[str] = None
    product_image: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "OrderItem":
        if not isinstance(data, dict):
            raise ValueError("order item must be an object")
        return cls(
            product_id=require_int(data.get("productId"), "productId"),
            quantity=require_int(data.get("quantity"), "quantity"),
            price=require_number(data.get("price"), "price"),
            product_name=optional_str(data.get("productName"), "productName"),
            product_image=optional_str(data.get("productImage"), "productImage"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "quantity": self.quantity,
            "price": self.price,
            "productName": self.product_name,
            "productImage": self.product_image,
        }


@dataclass
class Order:
    id: int
    user_id: int
    total_price: float
    status: str
    order_date: str = ""
    ship_address: str = ""
    ship_city: str = ""
    ship_postal_code: Optional[int] = None
    customer_name: Optional[str] = None
    items: List[OrderItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Order":
        if not isinstance(data, dict):
            raise ValueError("order must be an object")
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise ValueError("items must be a list")
        postal = data.get("shipPostalCode")
        return cls(
            id=require_int(data.get("id"), "id"),
            user_id=require_int(data.get("userId"), "userId"),
            total_price=require_number(data.get("totalPrice"), "totalPrice"),
            status=validate_status(data.get("status")),
            order_date=optional_str(data.get("orderDate"), "orderDate") or "",
            ship_address=optional_str(data.get("shipAddress"), "shipAddress") or "",
            ship_city=optional_str(data.get("shipCity"), "shipCity") or "",
            ship_postal_code=None if postal is None else require_int(postal, "shipPostalCode"),
            customer_name=optional_str(data.get("customerName"), "customerName"),
            items=[OrderItem.from_dict(it) for it in raw_items],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "totalPrice": self.total_price,
            "orderDate": self.order_date,
            "shipAddress": self.ship_address,
            "shipCity": self.ship_city,
            "shipPostalCode": self.ship_postal_code,
            "status": self.status,
            "customerName": self.customer_name,
            "items": [it.to_dict() for it in self.items],
        }
