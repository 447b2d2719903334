from typing import Optional


def format_money(amount: float, symbol: str = "$", decimals: Optional[int] = None) -> str:
    """
    Format an amount with thousands separators.

    With no `decimals`, whole amounts print without a fraction and others keep
    up to two places: 1000 -> "$1,000", 12.5 -> "$12.5".
    With `decimals`, the fraction is always padded: 1000 -> "$1,000.00".
    """
    if decimals is not None:
        return f"{symbol}{amount:,.{decimals}f}"
    text = f"{amount:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{symbol}{text}"
