"""Display helpers shared by the engine log and the CLI."""


def format_currency(amount: int) -> str:
    """Format whole dollars as "$12,345"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(int(amount)):,}"
