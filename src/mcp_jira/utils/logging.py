"""Helpers for keeping secrets out of log output."""


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a token or header, keeping a few characters at each end.

    Args:
        value: The sensitive value
        keep_chars: Number of characters kept visible at each end

    Returns:
        ``"Not Provided"`` for empty values, all ``*`` for short ones, and
        ``abcd****wxyz`` style output otherwise
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return value[:keep_chars] + "*" * (len(value) - keep_chars * 2) + value[-keep_chars:]
