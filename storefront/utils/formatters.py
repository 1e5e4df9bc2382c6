def format_price(value: float) -> str:
    return f"${value:.2f}"
