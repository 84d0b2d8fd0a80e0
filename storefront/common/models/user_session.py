from dataclasses import asdict, dataclass
from typing import Any, Dict

from ..utils.validators import require_int, require_str


@dataclass
class UserSession:
    token: str
    id: int
    name: str
    username: str
    email: str

    @classmethod
    def from_dict(cls, data: Any) -> "UserSession":
        if not isinstance(data, dict):
            raise ValueError("user data must be an object")
        token = require_str(data.get("token"), "token")
        if not token:
            raise ValueError("token must not be empty")
        return cls(
            token=token,
            id=require_int(data.get("id"), "id"),
            name=require_str(data.get("name"), "name"),
            username=require_str(data.get("username"), "username"),
            email=require_str(data.get("email"), "email"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def public_dict(self) -> Dict[str, Any]:
        """Profile fields without the token."""
        out = self.to_dict()
        out.pop("token", None)
        return out
