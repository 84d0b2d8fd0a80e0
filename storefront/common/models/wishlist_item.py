from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..utils.validators import optional_str, require_int, require_number, require_str


@dataclass
class WishlistItem:
    id: int
    name: str
    price: float
    image: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[Union[int, str]] = None
    category_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "WishlistItem":
        if not isinstance(data, dict):
            raise ValueError("wishlist item must be an object")
        category_id = data.get("categoryId")
        if category_id is not None and (isinstance(category_id, bool) or not isinstance(category_id, (int, str))):
            raise ValueError("categoryId must be an integer or a string")
        return cls(
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            price=require_number(data.get("price"), "price"),
            image=optional_str(data.get("image"), "image"),
            description=optional_str(data.get("description"), "description"),
            category_id=category_id,
            category_name=optional_str(data.get("categoryName"), "categoryName"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "name": self.name, "price": self.price}
        optional = {
            "image": self.image,
            "description": self.description,
            "categoryId": self.category_id,
            "categoryName": self.category_name,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out
