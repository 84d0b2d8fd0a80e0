"""模擬結帳：計算金額、產生訂單編號並清空購物車（不呼叫後端、不處理付款）。"""

from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from ..common.models.cart_item import CartItem
from ..common.services.logging import log_event
from .cart_store import CartStore

SHIPPING_FEE = Decimal("5.99")
TAX_RATE = Decimal("0.08")
_CENT = Decimal("0.01")


class CheckoutError(Exception):
    pass


@dataclass
class OrderSummary:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, float]:
        return {
            "subtotal": float(self.subtotal),
            "shipping": float(self.shipping),
            "tax": float(self.tax),
            "total": float(self.total),
        }


def summarize(items: List[CartItem]) -> OrderSummary:
    subtotal = sum((Decimal(str(it.price)) * Decimal(it.quantity) for it in items), Decimal("0"))
    shipping = SHIPPING_FEE if subtotal > 0 else Decimal("0")
    tax = subtotal * TAX_RATE
    total = subtotal + shipping + tax
    return OrderSummary(
        subtotal=subtotal.quantize(_CENT, rounding=ROUND_HALF_UP),
        shipping=shipping,
        tax=tax.quantize(_CENT, rounding=ROUND_HALF_UP),
        total=total.quantize(_CENT, rounding=ROUND_HALF_UP),
    )


class CheckoutService:
    """以目前購物車內容建立模擬訂單。"""

    def __init__(self, cart: CartStore, rng: Optional[random.Random] = None) -> None:
        self._cart = cart
        self._rng = rng or random.Random()

    def summary(self) -> OrderSummary:
        return summarize(self._cart.items)

    def place_order(self, contact: Dict[str, Any]) -> Dict[str, Any]:
        if not self._cart.items:
            raise CheckoutError("Cart is empty")
        email = str((contact or {}).get("email", "")).strip()
        if not email:
            raise CheckoutError("Email is required")

        items = self._cart.take_all()
        if not items:
            raise CheckoutError("Cart is empty")
        summary = summarize(items)
        order_number = f"ORD-{self._rng.randint(100000, 999999)}"
        log_event(
            "info",
            "order.created",
            order_number=order_number,
            items=len(items),
            total=float(summary.total),
        )
        return {
            "order_number": order_number,
            "email": email,
            "items": [it.to_dict() for it in items],
            **summary.to_dict(),
        }
