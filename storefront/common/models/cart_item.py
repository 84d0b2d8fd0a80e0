from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.validators import ensure_positive_int, optional_str, require_int, require_number, require_str


@dataclass
class CartItem:
    id: int
    name: str
    price: float
    quantity: int
    image: Optional[str] = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    @classmethod
    def from_dict(cls, data: Any, *, stored: bool = False) -> "CartItem":
        """Build an item from a request body or, with stored=True, a persisted row.

        Persisted rows keep whatever integer quantity update_quantity wrote.
        """
        if not isinstance(data, dict):
            raise ValueError("cart item must be an object")
        check_quantity = require_int if stored else ensure_positive_int
        return cls(
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            price=require_number(data.get("price"), "price", minimum=0),
            quantity=check_quantity(data.get("quantity"), "quantity"),
            image=optional_str(data.get("image"), "image"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }
        if self.image is not None:
            out["image"] = self.image
        return out
