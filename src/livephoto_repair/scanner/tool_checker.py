"""Tool availability checker for external dependencies."""

import logging
import shutil
from typing import Dict, Iterable

from livephoto_repair.common import ToolNotFoundError

logger = logging.getLogger(__name__)

# Tool name -> what it is used for
KNOWN_TOOLS = {
    'exiftool': 'creation timestamps and Live Photo identifier injection',
    'ffprobe': 'video duration probing',
    'ffmpeg': 'video re-export with Live Photo metadata',
    'heif-enc': 'JPEG to HEIC conversion',
}


def check_tool_availability() -> Dict[str, bool]:
    """
    Check availability of the external tools this project shells out to.

    Returns:
        Dictionary mapping tool names to availability status
    """
    return {tool: shutil.which(tool) is not None for tool in KNOWN_TOOLS}


def check_required_tools(tools: Iterable[str]) -> None:
    """
    Raise if any of ``tools`` is missing from PATH.

    Args:
        tools: Tool names enabled by configuration

    Raises:
        ToolNotFoundError: If a required tool is not available, with install instructions
    """
    available = check_tool_availability()

    for tool in tools:
        if available.get(tool, shutil.which(tool) is not None):
            logger.info(f"Tool available: {{'tool': {tool!r}, 'capability': {KNOWN_TOOLS.get(tool, '')!r}}}")
            continue

        logger.error(f"Tool not found: {{'tool': {tool!r}, 'required': True}}")
        raise ToolNotFoundError(
            f"Tool '{tool}' is required but not available.\n\n{_get_installation_instructions(tool)}",
            tool=tool,
        )


def _get_installation_instructions(tool_name: str) -> str:
    """Get installation instructions for a missing tool."""
    instructions = {
        'ffprobe': (
            "ffprobe is part of FFmpeg. Install it:\n"
            "  - macOS: brew install ffmpeg\n"
            "  - Linux: sudo apt-get install ffmpeg (Debian/Ubuntu)\n"
            "  - Windows: Download from https://ffmpeg.org/download.html"
        ),
        'ffmpeg': (
            "Install FFmpeg:\n"
            "  - macOS: brew install ffmpeg\n"
            "  - Linux: sudo apt-get install ffmpeg (Debian/Ubuntu)\n"
            "  - Windows: Download from https://ffmpeg.org/download.html"
        ),
        'exiftool': (
            "Install ExifTool:\n"
            "  - macOS: brew install exiftool\n"
            "  - Linux: sudo apt-get install libimage-exiftool-perl\n"
            "  - Windows: Download from https://exiftool.org/"
        ),
        'heif-enc': (
            "heif-enc is part of libheif. Install it:\n"
            "  - macOS: brew install libheif\n"
            "  - Linux: sudo apt-get install libheif-examples (Debian/Ubuntu)"
        ),
    }

    return instructions.get(tool_name, f"Please install {tool_name}")
