"""
Ironwings Cart Application

Startup entry for hosts: configure the ironwings loggers once, then hand out
the global cart. Page scripts and event handlers in features.cart.tools
work on the same instance afterwards.
"""
import logging
from typing import Optional

from ironwings.db.storage import KeyValueStore
from ironwings.features.cart.notifications import ToastSurface
from ironwings.features.cart.service import CartService, ViewHook, get_cart
from ironwings.logging_config import setup_logging_from_config

logger = logging.getLogger(__name__)


def start_cart(
    cfg=None,
    store: Optional[KeyValueStore] = None,
    surface: Optional[ToastSurface] = None,
    on_count_changed: Optional[ViewHook] = None,
    on_render: Optional[ViewHook] = None,
) -> CartService:
    """
    Configure logging from cfg and return the global cart.

    Call once when the page loads; later calls reconfigure logging but
    return the existing cart.
    """
    if cfg is None:
        from ironwings.config import config as cfg
    setup_logging_from_config(cfg)
    cart = get_cart(cfg=cfg, store=store, surface=surface,
                    on_count_changed=on_count_changed, on_render=on_render)
    logger.info("Cart started", extra={"item_count": len(cart), "storage_key": cart.repo.storage_key})
    return cart
