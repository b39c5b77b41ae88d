"""
Number formatting for SVG output.
"""

PRECISION = 6


def format_number(value: float, precision: int = PRECISION) -> str:
    """Format a coordinate without trailing zeros; never produces "-0"."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text
