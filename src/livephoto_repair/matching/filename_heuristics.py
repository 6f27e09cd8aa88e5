"""Filename parsing helpers used by the pairing engine.

Export and dedup tools mutate filenames in a few predictable ways:

- sequential camera numbering (``IMG_0019`` / ``IMG_0020``)
- OS collision suffixes (``IMG_0005(1)``, ``IMG_0005 (1)``)
- dedup tool suffixes (``IMG_0005+1``, ``IMG_0005-1``)
"""

import re
from typing import Optional, Tuple

# Trailing run of ASCII digits
_TRAILING_DIGITS_RE = re.compile(r'(\d+)$', re.ASCII)

# "(N)" with optional leading whitespace, or "+N", at the very end
_COLLISION_SUFFIX_RE = re.compile(r'(?:\s*\(\d+\)|\+\d+)$', re.ASCII)

# "-N" at the very end, only when preceded by a non-digit character
_DASH_SUFFIX_RE = re.compile(r'(?<=\D)-\d+$', re.ASCII)


def parse_numeric_suffix(name: str) -> Optional[Tuple[str, int]]:
    """
    Split a base name into its prefix and trailing number.

    Args:
        name: Filename without extension

    Returns:
        (prefix, number) or None if the name has no trailing digits, or
        more than the interpreter will convert to an int

    Examples:
        >>> parse_numeric_suffix("IMG_0019")
        ('IMG_', 19)
        >>> parse_numeric_suffix("noDigits") is None
        True
    """
    match = _TRAILING_DIGITS_RE.search(name)
    if match is None:
        return None
    try:
        number = int(match.group(1))
    except ValueError:
        # Beyond the interpreter's int string conversion limit
        return None
    return name[:match.start()], number


def normalize_base(name: str) -> str:
    """
    Strip duplicate-renaming artifacts from a base name.

    1. Remove a trailing "(N)" or "+N".
    2. Remove a trailing "-N" unless the hyphen follows a digit, so that
       "2019-05-01" style names are left alone.

    The rules are reapplied until nothing changes; stacked suffixes such as
    "IMG(1)(2)" collapse fully and the function is idempotent.

    Args:
        name: Filename without extension

    Returns:
        Name with mutation suffixes removed
    """
    previous = None
    while name != previous:
        previous = name
        name = _COLLISION_SUFFIX_RE.sub('', name)
        name = _DASH_SUFFIX_RE.sub('', name)
    return name
