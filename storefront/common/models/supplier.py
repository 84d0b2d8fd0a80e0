from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.validators import require_int, require_str


@dataclass
class Supplier:
    id: int
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    product_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Supplier":
        if not isinstance(data, dict):
            raise ValueError("supplier must be an object")
        count = data.get("productCount")
        return cls(
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            phone=require_str(data.get("phone") or "", "phone"),
            email=require_str(data.get("email") or "", "email"),
            address=require_str(data.get("address") or "", "address"),
            city=require_str(data.get("city") or "", "city"),
            product_count=None if count is None else require_int(count, "productCount"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "city": self.city,
            "productCount": self.product_count,
        }
