"""Small string helpers."""


def coalesce(*args: str) -> str:
    """Return the first non-empty string, or an empty string."""
    return next((value for value in args if value != ""), "")