"""
Entry points for page scripts and UI event handlers.

Each function works on the global cart and answers with the standard
response envelope; none of them raise. Hosts call ironwings.app.start_cart
once at startup so logging is configured before these run.
"""
import logging
from typing import Any, Dict

from ironwings.utils.response import standard_response
from .service import get_cart

logger = logging.getLogger(__name__)


def add_to_cart(product: Dict[str, Any]) -> Dict[str, Any]:
    """
    Add a product to the cart.

    product: {id, name, price, image, category?, clearance?}
    """
    try:
        cart = get_cart()
        item = cart.add(product)
        if item is None:
            return standard_response(False, error="invalid_product")
        return standard_response(True, data={"item": item, "count": cart.count, "total": cart.total})
    except Exception as e:
        logger.exception("add_to_cart failed")
        return standard_response(False, error=str(e))


def remove_from_cart(item_id: str) -> Dict[str, Any]:
    """Remove an item entirely; unknown ids are not an error."""
    try:
        cart = get_cart()
        removed = cart.remove(item_id)
        return standard_response(True, data={"removed": removed, "count": cart.count, "total": cart.total})
    except Exception as e:
        logger.exception("remove_from_cart failed")
        return standard_response(False, error=str(e))


def increase_quantity(item_id: str) -> Dict[str, Any]:
    return _update_response("increase", lambda cart: cart.increase(item_id), item_id)


def decrease_quantity(item_id: str) -> Dict[str, Any]:
    return _update_response("decrease", lambda cart: cart.decrease(item_id), item_id)


def set_item_quantity(item_id: str, value: Any) -> Dict[str, Any]:
    """Set a quantity straight from a form field; bad values become 1."""
    return _update_response("set_quantity", lambda cart: cart.set_quantity(item_id, value), item_id)


def clear_cart() -> Dict[str, Any]:
    try:
        cart = get_cart()
        removed_items = len(cart)
        cart.clear()
        return standard_response(True, data={"removed_items": removed_items})
    except Exception as e:
        logger.exception("clear_cart failed")
        return standard_response(False, error=str(e))


def get_cart_view() -> Dict[str, Any]:
    """Cart page view-model plus the header badge."""
    try:
        cart = get_cart()
        return standard_response(True, data={"view": cart.render(), "badge": cart.update_count()})
    except Exception as e:
        logger.exception("get_cart_view failed")
        return standard_response(False, error=str(e))


def _update_response(operation: str, update, item_id: str) -> Dict[str, Any]:
    try:
        cart = get_cart()
        updated = update(cart)
        item = cart.get(item_id)
        return standard_response(True, data={
            "updated": updated,
            "operation": operation,
            "quantity": item.quantity if item else None,
            "total": cart.total,
        })
    except Exception as e:
        logger.exception(f"{operation} failed")
        return standard_response(False, error=str(e))
