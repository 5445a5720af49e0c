"""Case-insensitive text comparison helpers."""


def fold(text: str) -> str:
    """Return the comparison key for user-entered text."""
    return text.strip().casefold()


def same_text(left: str, right: str) -> bool:
    """Return True when two strings match ignoring case and outer whitespace."""
    return fold(left) == fold(right)
