"""
Cart service layer: the cart aggregate and its process-wide instance.
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ironwings.db.storage import KeyValueStore, build_store
from .factory import InvalidItemData, build_item
from .items import LineItem
from .notifications import Toaster, ToastSurface
from .presenter import CartPresenter
from .repo import CartRepo

logger = logging.getLogger(__name__)

ViewHook = Callable[[Dict[str, Any]], None]


class CartService:
    """
    Owns the ordered line items of one cart.

    Every mutation runs to completion, saves through the repo and then pushes
    fresh view-models to the count badge and cart view hooks. Unknown ids are
    ignored and quantities are normalized, so none of the public operations
    raise for bad input.
    """

    def __init__(
        self,
        repo: Optional[CartRepo] = None,
        presenter: Optional[CartPresenter] = None,
        toaster: Optional[Toaster] = None,
        on_count_changed: Optional[ViewHook] = None,
        on_render: Optional[ViewHook] = None,
    ):
        self.repo = repo or CartRepo()
        self.presenter = presenter or CartPresenter()
        self.toaster = toaster or Toaster()
        self.on_count_changed = on_count_changed
        self._view_hook = on_render
        self._items: List[LineItem] = self._load()

    def _load(self) -> List[LineItem]:
        try:
            items = self.repo.load()
        except Exception:
            # backend unreachable or unreadable: start empty rather than fail
            logger.exception("Cart storage unavailable, starting empty",
                             extra={"storage_key": self.repo.storage_key})
            return []
        logger.info("Cart loaded", extra={"item_count": len(items)})
        return items

    # ---------- Read-only state ----------
    @property
    def items(self) -> Tuple[LineItem, ...]:
        """Snapshot of the current items; changing it does not touch the cart."""
        return tuple(replace(item) for item in self._items)

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self._items)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    def get(self, item_id: Any) -> Optional[LineItem]:
        key = str(item_id)
        for item in self._items:
            if item.id == key:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    # ---------- Mutations ----------
    def add(self, request: Mapping[str, Any]) -> Optional[LineItem]:
        """
        Add one unit of a product. An id already in the cart has its quantity
        bumped instead of being appended again.

        Returns:
            The affected item, or None when the request is unusable.
        """
        item_id = request.get("id") if isinstance(request, Mapping) else None
        item = self.get(item_id) if item_id is not None else None

        if item is not None:
            item.increment()
        else:
            try:
                item = build_item(request, keep_quantity=False)
            except InvalidItemData as e:
                logger.warning(f"Ignoring add request: {e}", extra={"operation": "add"})
                return None
            self._items.append(item)

        logger.info("Item added", extra={"item_id": item.id, "quantity": item.quantity})
        self._commit()
        self.toaster.show(self.presenter.format_added_message(item))
        return item

    def remove(self, item_id: Any) -> bool:
        key = str(item_id)
        remaining = [item for item in self._items if item.id != key]
        removed = len(remaining) != len(self._items)
        self._items = remaining
        if removed:
            logger.info("Item removed", extra={"item_id": key})
        else:
            logger.debug("Remove ignored, item not in cart", extra={"item_id": key})
        self._commit()
        return removed

    def increase(self, item_id: Any) -> bool:
        return self._update(item_id, "increase", LineItem.increment)

    def decrease(self, item_id: Any) -> bool:
        # never removes: quantity stops at 1
        return self._update(item_id, "decrease", LineItem.decrement)

    def set_quantity(self, item_id: Any, value: Any) -> bool:
        return self._update(item_id, "set_quantity", lambda item: item.set_quantity(value))

    def clear(self) -> None:
        self._items = []
        logger.info("Cart cleared")
        self._commit()

    def _update(self, item_id: Any, operation: str, change: Callable[[LineItem], None]) -> bool:
        item = self.get(item_id)
        if item is None:
            logger.debug("Update ignored, item not in cart",
                         extra={"item_id": str(item_id), "operation": operation})
            return False
        change(item)
        logger.debug("Item updated", extra={"item_id": item.id, "operation": operation,
                                            "quantity": item.quantity})
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.repo.save(self._items)
        except Exception:
            # in-memory state stays authoritative until the next successful save
            logger.exception("Failed to save cart", extra={"storage_key": self.repo.storage_key})
        self.update_count()
        self.render()

    # ---------- Projection ----------
    def bind_view(self, on_render: ViewHook) -> None:
        """Attach the cart page view; it is rendered immediately."""
        self._view_hook = on_render
        self.render()

    def unbind_view(self) -> None:
        self._view_hook = None

    def update_count(self) -> Dict[str, Any]:
        badge = self.presenter.format_count_badge(self._items)
        if self.on_count_changed is not None:
            self._call_hook(self.on_count_changed, badge, "count")
        return badge

    def render(self) -> Dict[str, Any]:
        view = self.presenter.format_cart_view(self._items)
        if self._view_hook is not None:
            self._call_hook(self._view_hook, view, "render")
        return view

    def _call_hook(self, hook: ViewHook, payload: Dict[str, Any], operation: str) -> None:
        try:
            hook(payload)
        except Exception:
            logger.exception("Presentation hook failed", extra={"operation": operation})


# Global cart instance (one per process / page session)
_cart_instance: Optional[CartService] = None
_cart_lock = threading.Lock()


def get_cart(
    cfg=None,
    store: Optional[KeyValueStore] = None,
    surface: Optional[ToastSurface] = None,
    on_count_changed: Optional[ViewHook] = None,
    on_render: Optional[ViewHook] = None,
) -> CartService:
    """
    Get the global CartService, creating it on first use.

    Arguments only apply to the first call; later calls return the existing
    instance without reloading storage.

    Returns:
        Singleton CartService instance
    """
    global _cart_instance
    with _cart_lock:
        if _cart_instance is None:
            if cfg is None:
                from ironwings.config import config as cfg
            repo = CartRepo(store if store is not None else build_store(cfg), cfg.STORAGE_KEY)
            _cart_instance = CartService(
                repo=repo,
                presenter=CartPresenter(cfg.CURRENCY_SYMBOL),
                toaster=Toaster(surface, cfg.TOAST_DURATION_SECONDS),
                on_count_changed=on_count_changed,
                on_render=on_render,
            )
        return _cart_instance


def reset_cart() -> None:
    """Discard the global instance; the next get_cart() reloads from storage."""
    global _cart_instance
    with _cart_lock:
        if _cart_instance is not None:
            _cart_instance.toaster.cancel()
        _cart_instance = None
