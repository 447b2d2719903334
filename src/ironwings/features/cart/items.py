"""
Line items held by the cart.

A line item is a tagged variant: every item shares the same base record
(id, name, price, quantity, image, category) and the CLASSIFIED kind adds a
clearance level on top. Serialization and projection are written once for the
base record; the classified variant only decorates their output.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from ironwings.utils.formatters import format_money
from .validators import coerce_price, coerce_quantity

DEFAULT_CATEGORY = "general"
DEFAULT_CLEARANCE = "CLASSIFIED"

# Interactions a presentation layer may bind for each rendered item
ITEM_ACTIONS = ("decrease", "set_quantity", "increase", "remove")

_IDENTITY_FIELDS = frozenset({"id", "kind"})


class ItemKind(Enum):
    """Line item variants."""
    PLAIN = "plain"
    CLASSIFIED = "classified"


@dataclass
class LineItem:
    """
    One product entry in the cart.

    Attributes:
        id: Stable product identifier, immutable once set
        name: Display name
        unit_price: Non-negative price of a single unit
        image: Image URL or path
        category: Product category
        quantity: Always an integer >= 1; assignments are normalized
        kind: PLAIN or CLASSIFIED, immutable once set
        clearance_level: Badge text, only meaningful for CLASSIFIED items
    """
    id: str
    name: str
    unit_price: float
    image: str = ""
    category: str = DEFAULT_CATEGORY
    quantity: int = 1
    kind: ItemKind = ItemKind.PLAIN
    clearance_level: Optional[str] = None

    def __post_init__(self):
        if not self.category:
            self.category = DEFAULT_CATEGORY
        if self.kind is ItemKind.CLASSIFIED:
            if not self.clearance_level:
                self.clearance_level = DEFAULT_CLEARANCE
        else:
            self.clearance_level = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IDENTITY_FIELDS and name in self.__dict__:
            raise AttributeError(f"LineItem.{name} cannot be changed")
        if name == "quantity":
            value = coerce_quantity(value)
        elif name == "unit_price":
            value = coerce_price(value)
        super().__setattr__(name, value)

    @classmethod
    def classified(cls, id: str, name: str, unit_price: float, image: str = "",
                   category: str = DEFAULT_CATEGORY, quantity: int = 1,
                   clearance_level: Optional[str] = None) -> "LineItem":
        """Build a CLASSIFIED item; a missing level falls back to DEFAULT_CLEARANCE."""
        return cls(id=id, name=name, unit_price=unit_price, image=image,
                   category=category, quantity=quantity,
                   kind=ItemKind.CLASSIFIED, clearance_level=clearance_level)

    @property
    def is_classified(self) -> bool:
        return self.kind is ItemKind.CLASSIFIED

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity

    # ---------- Quantity ----------
    def set_quantity(self, value: Any) -> None:
        self.quantity = value

    def increment(self) -> None:
        self.quantity = self.quantity + 1

    def decrement(self) -> None:
        if self.quantity > 1:
            self.quantity = self.quantity - 1

    # ---------- Serialization ----------
    def to_record(self) -> Dict[str, Any]:
        """Plain dict in the persisted wire format."""
        record: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "price": self.unit_price,
            "quantity": self.quantity,
            "image": self.image,
            "category": self.category,
        }
        if self.is_classified:
            record["clearance"] = self.clearance_level
        return record

    # ---------- Projection ----------
    def project(self, currency: str = "$") -> Dict[str, Any]:
        """View-model for one rendered cart row."""
        view = self._base_view(currency)
        if self.is_classified:
            view = with_clearance_badge(view, self.clearance_level)
        return view

    def _base_view(self, currency: str) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.name,
            "category": self.category,
            "image": self.image,
            "price": self.unit_price,
            "price_text": format_money(self.unit_price, currency),
            "quantity": self.quantity,
            "subtotal": self.subtotal,
            "subtotal_text": format_money(self.subtotal, currency),
            "actions": item_actions(self.id),
        }


def item_actions(item_id: str) -> List[Dict[str, str]]:
    return [{"action": action, "item_id": item_id} for action in ITEM_ACTIONS]


def with_clearance_badge(view: Dict[str, Any], clearance_level: Optional[str]) -> Dict[str, Any]:
    """Return a copy of an item view with the clearance badge added to its title."""
    badge = clearance_level or DEFAULT_CLEARANCE
    return {**view, "title": f"{view['title']} [{badge}]", "badge": badge}


def ClassifiedLineItem(id: str, name: str, unit_price: float, image: str = "",
                       category: str = DEFAULT_CATEGORY, quantity: int = 1,
                       clearance_level: Optional[str] = None) -> LineItem:
    """
    The classified variant of LineItem.

    Returns a LineItem of kind CLASSIFIED; a missing clearance level falls back
    to DEFAULT_CLEARANCE.
    """
    return LineItem.classified(id=id, name=name, unit_price=unit_price, image=image,
                               category=category, quantity=quantity,
                               clearance_level=clearance_level)
