"""Collision-safe output naming."""

from pathlib import Path
from typing import Iterable


def unique_output_stem(output_dir: Path, stem: str, suffixes: Iterable[str]) -> str:
    """
    Return a stem for which ``stem + suffix`` is free for every suffix.

    Appends ``-1``, ``-2``, ... until no candidate file exists. Image and
    video of one bundle are named together so they always share a stem.

    Args:
        output_dir: Directory the files will be written to
        stem: Preferred stem, e.g. ``IMG_0001_live``
        suffixes: File extensions including the dot, e.g. ``('.heic', '.mov')``

    Returns:
        The first free stem

    Examples:
        >>> unique_output_stem(Path('/empty'), 'IMG_0001_live', ['.heic', '.mov'])
        'IMG_0001_live'
    """
    suffixes = list(suffixes)
    candidate = stem
    counter = 1
    while any((output_dir / f"{candidate}{suffix}").exists() for suffix in suffixes):
        candidate = f"{stem}-{counter}"
        counter += 1
    return candidate
