"""Path utilities for consistent path handling across packages."""

import unicodedata
from pathlib import Path


def normalize_path(path: Path | str) -> str:
    """
    Normalize a path for consistent storage and comparison across all packages.

    Applies:
    - Unicode NFC normalization (canonical composition) for consistent Unicode handling
    - Forward slash conversion for cross-platform consistency

    macOS filesystems hand out decomposed (NFD) names while most export tools
    write composed (NFC) ones, so two spellings of the same folder must compare
    equal before they are used as a folder group key.

    Args:
        path: Path object or string to normalize

    Returns:
        Normalized path string with forward slashes and NFC Unicode normalization

    Examples:
        >>> normalize_path(Path("café/résumé.jpg"))
        'café/résumé.jpg'
        >>> normalize_path(r"C:\\Users\\test\\photos")
        'C:/Users/test/photos'
    """
    path_str = str(path)

    normalized = unicodedata.normalize('NFC', path_str)

    normalized = normalized.replace('\\', '/')

    return normalized


def normalize_name(name: str) -> str:
    """Normalize a bare file name (no separators) to NFC."""
    return unicodedata.normalize('NFC', name)
