"""Command line entry point for livephoto-repair."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from livephoto_repair.builder import LivePhotoBuilder
from livephoto_repair.common import (
    ConfigLoader,
    ConfigurationError,
    LogContext,
    LivePhotoRepairError,
    ToolNotFoundError,
    setup_logging,
)
from livephoto_repair.config import LivePhotoRepairConfig
from livephoto_repair.matching import MatcherConfig, MatchTrace, PairMatcher, format_pair
from livephoto_repair.scanner import AssetScanner, check_required_tools

# Application name derived from package name
_package = __package__ or "livephoto_repair"
APP_NAME = _package.replace('_', '-').replace('.', '-')

logger = logging.getLogger(__package__ or __name__)


def required_tools(config: LivePhotoRepairConfig, dry_run: bool) -> List[str]:
    """External tools the run will shell out to."""
    tools = []
    if config.scanner.use_exiftool or not dry_run:
        tools.append('exiftool')
    if config.scanner.use_ffprobe:
        tools.append('ffprobe')
    if not dry_run:
        tools.extend(['heif-enc', 'ffmpeg'])
    return tools


def repair_command(
    config: LivePhotoRepairConfig,
    input_dir: Path,
    output_dir: Path,
    dry_run: bool = False,
    trace_file: Optional[Path] = None,
) -> int:
    """Scan ``input_dir``, pair images with videos and write Live Photos.

    Args:
        config: Loaded configuration, CLI overrides already applied
        input_dir: Folder tree holding the separated images and videos
        output_dir: Destination for the rebuilt HEIC + MOV bundles
        dry_run: Only report what would be built
        trace_file: Optional path for the per-pair match trace

    Returns:
        Exit code: 0 on success, 1 if the run could not start or any build failed
    """
    if not input_dir.is_dir():
        logger.error(f"Input directory does not exist: {{'path': {str(input_dir)!r}}}")
        return 1

    try:
        check_required_tools(required_tools(config, dry_run))
    except ToolNotFoundError as e:
        logger.error(e.message)
        return 1

    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Scanning assets: {{'input': {str(input_dir)!r}}}")
    scan = AssetScanner(config.scanner).scan(input_dir)
    logger.info(f"Found {len(scan.images)} images and {len(scan.videos)} videos")

    trace = MatchTrace()
    pairs = PairMatcher(config.matcher, trace).match(scan.images, scan.videos)
    by_pass = {tier.pass_label: count for tier, count in trace.counts_by_tier().items()}
    logger.info(f"Matched {len(pairs)} potential Live Photo pairs: {by_pass}")

    review = sum(1 for pair in pairs if pair.needs_review)
    if review:
        logger.warning(f"Timestamp-only matches need review: {{'pairs': {review}}}")

    if trace_file is not None:
        trace.write(trace_file)

    total = len(pairs)
    failures = 0

    if dry_run:
        for line in trace.lines():
            logger.info(f"DRY-RUN {line}")
        for index, pair in enumerate(pairs, start=1):
            logger.info(f"[{index}/{total}] DRY-RUN: would build Live Photo for {pair.image.name}")
        logger.info("Dry run complete - no files were written.")
        return 0

    builder = LivePhotoBuilder(config.builder)
    for index, pair in enumerate(pairs, start=1):
        with LogContext(logger, pair_index=index, image=str(pair.image.path), video=str(pair.video.path)):
            try:
                builder.build(pair, output_dir)
            except LivePhotoRepairError as e:
                failures += 1
                logger.error(
                    f"[{index}/{total}] Failed to build {pair.image.name}: {e.message} "
                    f"({format_pair(pair)})"
                )
            else:
                logger.info(f"[{index}/{total}] Built Live Photo: {pair.image.name}")

    if failures:
        logger.error(f"Build finished with failures: {{'built': {total - failures}, 'failed': {failures}}}")
        return 1

    logger.info(f"All Live Photos written: {{'output': {str(output_dir)!r}, 'count': {total}}}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Re-pair separated Live Photo images and videos and rebuild them as HEIC + MOV bundles"
    )
    parser.add_argument("input", type=Path, help="Folder containing the separated images and videos")
    parser.add_argument("output", type=Path, help="Folder to write rebuilt Live Photos to")
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Show the pairs that would be built without writing anything"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    parser.add_argument(
        "--max-video-duration",
        type=float,
        help="Longest accepted companion video in seconds (overrides config)"
    )
    parser.add_argument(
        "--max-time-delta",
        type=float,
        help="Largest accepted image/video creation time gap in seconds (overrides config)"
    )
    parser.add_argument(
        "--max-numeric-delta",
        type=int,
        help="Largest accepted file number gap for sequential names (overrides config)"
    )
    parser.add_argument(
        "--trace-file",
        type=Path,
        help="Write one line per matched pair to this file"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    return parser


def apply_overrides(config: LivePhotoRepairConfig, args: argparse.Namespace) -> LivePhotoRepairConfig:
    """Return ``config`` with command line overrides applied and validated.

    Raises:
        ValidationError: If an override is out of range
    """
    matcher_overrides = {
        key: value
        for key, value in (
            ('max_video_duration', args.max_video_duration),
            ('max_time_delta', args.max_time_delta),
            ('max_numeric_delta', args.max_numeric_delta),
        )
        if value is not None
    }
    if matcher_overrides:
        matcher = MatcherConfig(**{**config.matcher.model_dump(), **matcher_overrides})
        config = config.model_copy(update={'matcher': matcher})

    if args.log_level:
        logging_config = config.logging.model_copy(update={'level': args.log_level})
        config = config.model_copy(update={'logging': logging_config})

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    loader = ConfigLoader(app_name=APP_NAME, config_class=LivePhotoRepairConfig)
    try:
        config = loader.load(defaults_path=args.config)
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Configuration error: {e.message}")
        return 1

    try:
        config = apply_overrides(config, args)
    except ValidationError as e:
        parser.error(f"invalid threshold: {e.errors()[0]['msg']}")

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=config.logging.log_file_path,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
    )

    return repair_command(
        config=config,
        input_dir=args.input,
        output_dir=args.output,
        dry_run=args.dry_run,
        trace_file=args.trace_file,
    )


if __name__ == "__main__":
    sys.exit(main())
