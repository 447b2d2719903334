"""
Cart repository: encodes the item list to a single JSON blob and back.
"""

import json
import logging
from typing import List, Optional, Sequence

from ironwings.db.storage import KeyValueStore, MemoryStore
from .factory import InvalidItemData, build_item
from .items import LineItem

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "ironwings_cart"


class MalformedPersistedState(ValueError):
    """The stored blob exists but cannot be turned back into items."""


class CartRepo:
    """
    Thin persistence adapter between the cart and a KeyValueStore.
    """

    def __init__(self, store: Optional[KeyValueStore] = None, storage_key: str = DEFAULT_STORAGE_KEY):
        self.store = store if store is not None else MemoryStore()
        self.storage_key = storage_key

    def save(self, items: Sequence[LineItem]) -> None:
        """Overwrite the stored blob with the given items, in order."""
        blob = json.dumps([item.to_record() for item in items])
        self.store.set(self.storage_key, blob)
        logger.debug("Cart saved", extra={"storage_key": self.storage_key, "item_count": len(items)})

    def load(self) -> List[LineItem]:
        """
        Read the stored items. A missing blob is an empty cart; so is a
        corrupt one, after logging the failure.
        """
        blob = self.store.get(self.storage_key)
        if not blob:
            return []
        try:
            return decode_items(blob)
        except MalformedPersistedState as e:
            logger.error(
                f"Failed to load cart: {e}",
                exc_info=True,
                extra={"storage_key": self.storage_key, "error_type": type(e.__cause__ or e).__name__},
            )
            return []

    def clear(self) -> None:
        self.store.delete(self.storage_key)


def decode_items(blob: str) -> List[LineItem]:
    try:
        records = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise MalformedPersistedState("stored cart is not valid JSON") from e

    if not isinstance(records, list):
        raise MalformedPersistedState(f"stored cart must be a list, got {type(records).__name__}")

    items: List[LineItem] = []
    for position, record in enumerate(records):
        try:
            items.append(build_item(record))
        except InvalidItemData as e:
            raise MalformedPersistedState(f"record {position} is invalid: {e}") from e
    return items
