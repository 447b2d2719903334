"""
Cart package for handling cart-related operations.
"""

from .items import DEFAULT_CATEGORY, DEFAULT_CLEARANCE, ClassifiedLineItem, ItemKind, LineItem
from .factory import InvalidItemData, build_item
from .repo import CartRepo, MalformedPersistedState
from .presenter import CartPresenter
from .notifications import Toaster
from .service import CartService, get_cart, reset_cart
from .tools import (
    add_to_cart,
    remove_from_cart,
    increase_quantity,
    decrease_quantity,
    set_item_quantity,
    clear_cart,
    get_cart_view,
)

__all__ = [
    'DEFAULT_CATEGORY',
    'DEFAULT_CLEARANCE',
    'ItemKind',
    'LineItem',
    'ClassifiedLineItem',
    'InvalidItemData',
    'build_item',
    'CartRepo',
    'MalformedPersistedState',
    'CartPresenter',
    'Toaster',
    'CartService',
    'get_cart',
    'reset_cart',
    'add_to_cart',
    'remove_from_cart',
    'increase_quantity',
    'decrease_quantity',
    'set_item_quantity',
    'clear_cart',
    'get_cart_view',
]
