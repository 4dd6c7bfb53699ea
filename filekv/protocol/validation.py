"""Key validation."""

# Characters that could turn a key into a path
FORBIDDEN_KEY_CHARS = frozenset("/\\. ")


def is_valid_key(key: str) -> bool:
    """
    Check whether a key may be used as a file name.

    A valid key is non-empty and contains none of '/', '\\', '.' or a
    space. Dotted names are rejected outright rather than canonicalized,
    so '.', '..' and hidden files can never be addressed.

    Examples:
        >>> is_valid_key("greeting")
        True
        >>> is_valid_key("../etc/passwd")
        False
        >>> is_valid_key("")
        False
    """
    if not key:
        return False
    return not any(c in FORBIDDEN_KEY_CHARS for c in key)
