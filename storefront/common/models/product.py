from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.validators import optional_str, require_int, require_number, require_str

PLACEHOLDER_IMAGE = "/placeholder.svg"


def _optional_int(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    return require_int(value, field)


@dataclass
class Product:
    id: int
    name: str
    price: float
    description: str = ""
    amount: int = 0
    sold: int = 0
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    subcategory_id: Optional[int] = None
    subcategory_name: Optional[str] = None
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Product":
        if not isinstance(data, dict):
            raise ValueError("product must be an object")
        return cls(
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            price=require_number(data.get("price"), "price", minimum=0),
            description=optional_str(data.get("description"), "description") or "",
            amount=_optional_int(data.get("amount"), "amount") or 0,
            sold=_optional_int(data.get("sold"), "sold") or 0,
            image_url=optional_str(data.get("imageUrl"), "imageUrl"),
            category_id=_optional_int(data.get("categoryId"), "categoryId"),
            category_name=optional_str(data.get("categoryName"), "categoryName"),
            subcategory_id=_optional_int(data.get("subcategoryId"), "subcategoryId"),
            subcategory_name=optional_str(data.get("subcategoryName"), "subcategoryName"),
            supplier_id=_optional_int(data.get("supplierId"), "supplierId"),
            supplier_name=optional_str(data.get("supplierName"), "supplierName"),
        )

    def image_src(self, uploads_url: str) -> str:
        if not self.image_url:
            return PLACEHOLDER_IMAGE
        return f"{uploads_url.rstrip('/')}/{self.image_url.lstrip('/')}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "amount": self.amount,
            "sold": self.sold,
            "imageUrl": self.image_url,
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "subcategoryId": self.subcategory_id,
            "subcategoryName": self.subcategory_name,
            "supplierId": self.supplier_id,
            "supplierName": self.supplier_name,
        }
