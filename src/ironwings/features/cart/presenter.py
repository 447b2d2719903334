"""
Cart presenter layer for presentation logic and data formatting.
"""

from typing import Any, Dict, Sequence

from ironwings.utils.formatters import format_money
from .items import LineItem

EMPTY_CART_MESSAGE = "Your cart is empty."
SHOP_LINK = {"text": "Shop now!", "href": "index.html"}


class CartPresenter:
    """Presenter class for cart view-models."""

    def __init__(self, currency: str = "$"):
        self.currency = currency

    def format_item(self, item: LineItem) -> Dict[str, Any]:
        """Format a single cart item for presentation."""
        return item.project(self.currency)

    def format_total(self, total: float) -> str:
        return f"Total: {format_money(total, self.currency, decimals=2)}"

    def format_count_badge(self, items: Sequence[LineItem]) -> Dict[str, Any]:
        """Header badge showing how many units are in the cart; hidden when zero."""
        count = sum(item.quantity for item in items)
        return {
            "count": count,
            "visible": count > 0,
            "text": str(count),
        }

    def format_cart_view(self, items: Sequence[LineItem]) -> Dict[str, Any]:
        """Format the full cart page."""
        if not items:
            return {
                "empty": True,
                "message": EMPTY_CART_MESSAGE,
                "link": dict(SHOP_LINK),
                "items": [],
                "total": 0,
                "total_text": self.format_total(0),
            }

        total = sum(item.subtotal for item in items)
        return {
            "empty": False,
            "items": [self.format_item(item) for item in items],
            "total": total,
            "total_text": self.format_total(total),
        }

    def format_added_message(self, item: LineItem) -> str:
        return f"{item.name} added to cart!"
