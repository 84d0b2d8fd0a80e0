from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.validators import optional_str, require_int, require_str


@dataclass
class Category:
    id: int
    name: str
    created_by: Optional[str] = None
    product_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Category":
        if not isinstance(data, dict):
            raise ValueError("category must be an object")
        count = data.get("productCount")
        return cls(
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            created_by=optional_str(data.get("createdBy"), "createdBy"),
            product_count=None if count is None else require_int(count, "productCount"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdBy": self.created_by,
            "productCount": self.product_count,
        }


@dataclass
class Subcategory:
    id: int
    name: str
    category_id: int
    category_name: Optional[str] = None
    product_count: Optional[int] = None
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Subcategory":
        if not isinstance(data, dict):
            raise ValueError("subcategory must be an object")
        count = data.get("productCount")
        return cls(
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            category_id=require_int(data.get("categoryId"), "categoryId"),
            category_name=optional_str(data.get("categoryName"), "categoryName"),
            product_count=None if count is None else require_int(count, "productCount"),
            image_url=optional_str(data.get("imageUrl"), "imageUrl"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "productCount": self.product_count,
            "imageUrl": self.image_url,
        }
