"""Error classes for the Live Photo builder."""

from livephoto_repair.common import LivePhotoRepairError


class BuildError(LivePhotoRepairError):
    """Base error for building a Live Photo bundle."""
    pass


class ImageWriteError(BuildError):
    """The still image could not be converted or tagged."""
    pass


class VideoWriteError(BuildError):
    """The companion video could not be re-exported."""
    pass
