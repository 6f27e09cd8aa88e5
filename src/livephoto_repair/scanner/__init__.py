"""Asset scanner: discovers images and videos and extracts matching metadata."""

from .config import ScannerConfig
from .discovery import DiscoveryResult, discover_assets
from .errors import ScannerError, MetadataExtractionError, classify_error
from .scanner import AssetScanner, ScanResult
from .tool_checker import check_required_tools, check_tool_availability

__all__ = [
    'ScannerConfig',
    'DiscoveryResult',
    'discover_assets',
    'ScannerError',
    'MetadataExtractionError',
    'classify_error',
    'AssetScanner',
    'ScanResult',
    'check_required_tools',
    'check_tool_availability',
]
