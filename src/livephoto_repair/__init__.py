"""Re-pair separated Live Photo images and videos."""

from .config import LivePhotoRepairConfig

__version__ = "0.1.0"

__all__ = [
    'LivePhotoRepairConfig',
]
