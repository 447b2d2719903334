"""
Ironwings shopping cart.
"""

__version__ = "0.1.0"
