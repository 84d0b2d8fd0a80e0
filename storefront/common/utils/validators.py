from typing import Any, Optional


def require_int(value: Any, field: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer")
    return value


def require_number(value: Any, field: str, *, minimum: Optional[float] = None) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number")
    if minimum is not None and value < minimum:
        raise ValueError(f"{field} must be >= {minimum}")
    return float(value)


def require_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value


def optional_str(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    return require_str(value, field)


def ensure_positive_int(value: Any, field: str) -> int:
    v = require_int(value, field)
    if v < 1:
        raise ValueError(f"{field} must be >= 1")
    return v
