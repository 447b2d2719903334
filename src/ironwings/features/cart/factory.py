"""
Builds line items from add-to-cart requests and persisted records.

Both inputs share the wire format:
    {id, name, price, image, category?, quantity?, clearance?}
A truthy `clearance` is the only thing that selects the CLASSIFIED variant, so
an item saved as classified always comes back classified.
"""
from typing import Any, Mapping

from .items import DEFAULT_CATEGORY, ItemKind, LineItem


class InvalidItemData(ValueError):
    """Raised when a request or record lacks the fields an item needs."""


def build_item(data: Mapping[str, Any], *, keep_quantity: bool = True) -> LineItem:
    """
    Construct the item variant described by `data`.

    Persisted records keep their saved quantity; add-to-cart requests are
    built with keep_quantity=False and always start at 1.
    """
    if not isinstance(data, Mapping):
        raise InvalidItemData(f"Item data must be a mapping, got {type(data).__name__}")

    item_id = data.get("id")
    name = data.get("name")
    if item_id is None or item_id == "":
        raise InvalidItemData("Item data is missing 'id'")
    if not name:
        raise InvalidItemData(f"Item {item_id!r} is missing 'name'")

    clearance = data.get("clearance")
    kind = ItemKind.CLASSIFIED if clearance else ItemKind.PLAIN

    return LineItem(
        id=str(item_id),
        name=str(name),
        unit_price=data.get("price", 0),
        image=data.get("image") or "",
        category=data.get("category") or DEFAULT_CATEGORY,
        quantity=data.get("quantity", 1) if keep_quantity else 1,
        kind=kind,
        clearance_level=str(clearance) if clearance else None,
    )
