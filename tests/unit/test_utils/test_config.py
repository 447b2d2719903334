from ironwings.config import CartConfig


def test_defaults(monkeypatch):
    for name in ("CART_STORAGE_KEY", "CART_STORAGE_BACKEND", "TOAST_DURATION_SECONDS", "CURRENCY_SYMBOL"):
        monkeypatch.delenv(name, raising=False)
    cfg = CartConfig()

    assert cfg.STORAGE_KEY == "ironwings_cart"
    assert cfg.STORAGE_BACKEND == "memory"
    assert cfg.TOAST_DURATION_SECONDS == 3.0
    assert cfg.CURRENCY_SYMBOL == "$"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CART_STORAGE_BACKEND", "DynamoDB")
    monkeypatch.setenv("CART_DYNAMODB_TABLE", "carts_prod")
    monkeypatch.setenv("TOAST_DURATION_SECONDS", "1.5")
    cfg = CartConfig.from_env()

    assert cfg.STORAGE_BACKEND == "dynamodb"
    assert cfg.DYNAMODB_TABLE == "carts_prod"
    assert cfg.TOAST_DURATION_SECONDS == 1.5


def test_summary_mentions_backend(monkeypatch):
    monkeypatch.setenv("CART_STORAGE_BACKEND", "file")
    monkeypatch.setenv("CART_STORAGE_PATH", "/tmp/cart.json")
    summary = CartConfig().summary()

    assert "Backend:            file" in summary
    assert "/tmp/cart.json" in summary
