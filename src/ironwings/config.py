"""
Ironwings Cart Configuration

Centralized configuration for the cart, its storage backend and logging.
All settings can be overridden via environment variables.
"""
import os
from typing import Optional


class CartConfig:
    """
    Central configuration for the shopping cart.

    All settings have sensible defaults and can be overridden via environment variables.

    Example:
        >>> from ironwings.config import config
        >>> print(config.STORAGE_KEY)
        ironwings_cart

        # Override via environment:
        >>> os.environ["CART_STORAGE_BACKEND"] = "file"
        >>> config = CartConfig()  # Reload
        >>> print(config.STORAGE_BACKEND)
        file
    """

    def __init__(self):
        # ====================================================================
        # Storage Settings
        # ====================================================================

        self.STORAGE_KEY: str = os.getenv("CART_STORAGE_KEY", "ironwings_cart")
        """Fixed key the serialized cart is stored under"""

        self.STORAGE_BACKEND: str = os.getenv("CART_STORAGE_BACKEND", "memory").lower()
        """Key-value backend: 'memory', 'file' or 'dynamodb'"""

        self.STORAGE_PATH: str = os.getenv("CART_STORAGE_PATH", ".ironwings/storage.json")
        """JSON file used by the 'file' backend"""

        self.DYNAMODB_TABLE: str = os.getenv("CART_DYNAMODB_TABLE", "cart_storage")
        """DynamoDB table used by the 'dynamodb' backend"""

        self.AWS_REGION: str = os.getenv("AWS_REGION", "eu-west-2")
        """AWS region for the DynamoDB table"""

        # ====================================================================
        # Presentation Settings
        # ====================================================================

        self.TOAST_DURATION_SECONDS: float = float(os.getenv("TOAST_DURATION_SECONDS", "3.0"))
        """How long a toast stays visible unless superseded"""

        self.CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")
        """Prefix used when formatting prices and totals"""

        # ====================================================================
        # Logging Settings
        # ====================================================================

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        """Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"""

        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")
        """Log format: 'json' (structured) or 'pretty' (readable)"""

        self.LOG_FILE: Optional[str] = os.getenv("LOG_FILE")
        """Optional: Write logs to file (e.g., '/var/log/ironwings/cart.log')"""

    # ========================================================================
    # Helper Methods
    # ========================================================================

    @classmethod
    def from_env(cls) -> "CartConfig":
        """
        Create config from environment variables.

        Returns:
            New CartConfig instance with current environment values
        """
        return cls()

    def summary(self) -> str:
        """
        Get configuration summary as formatted string.

        Returns:
            Multi-line string with all config values
        """
        lines = [
            "=" * 60,
            "Ironwings Cart Configuration",
            "=" * 60,
            "",
            "Storage:",
            f"  Key:                {self.STORAGE_KEY}",
            f"  Backend:            {self.STORAGE_BACKEND}",
        ]

        if self.STORAGE_BACKEND == "file":
            lines.append(f"  Path:               {self.STORAGE_PATH}")
        elif self.STORAGE_BACKEND == "dynamodb":
            lines.append(f"  Table:              {self.DYNAMODB_TABLE} ({self.AWS_REGION})")

        lines.extend([
            "",
            "Presentation:",
            f"  Toast Duration:     {self.TOAST_DURATION_SECONDS}s",
            f"  Currency:           {self.CURRENCY_SYMBOL}",
            "",
            "Logging:",
            f"  Level:              {self.LOG_LEVEL}",
            f"  Format:             {self.LOG_FORMAT}",
            f"  File:               {self.LOG_FILE or 'None'}",
            "=" * 60,
        ])
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CartConfig(STORAGE_KEY={self.STORAGE_KEY!r}, "
            f"STORAGE_BACKEND={self.STORAGE_BACKEND!r}, "
            f"LOG_LEVEL={self.LOG_LEVEL!r})"
        )


# Global config instance
config = CartConfig()
