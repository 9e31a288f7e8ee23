def format_vnd(amount: int) -> str:
    """Format an amount in dong: 2850000 -> '2.850.000 ₫'"""
    formatted = f"{round(amount):,}".replace(",", ".")
    return f"{formatted} ₫"


def parse_vnd(text: str) -> int | None:
    """Parse a dong amount string into an integer. Returns None on invalid input.

    Accepts formats like '2850000', '2.850.000', '2,850,000', '2850000 ₫'.
    """
    text = text.replace("₫", "").replace("đ", "").strip()
    if not text:
        return None
    text = text.replace(".", "").replace(",", "").replace(" ", "")
    try:
        return int(text)
    except ValueError:
        return None
