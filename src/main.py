# src/main.py — v2
"""CLI entry point — upload, inspect commands.

Usage:
    debugid-upload upload [paths...] [options]
    debugid-upload inspect <bundle>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from debugid_uploader.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="debugid-upload",
        description=f"debugid-upload v{__version__} — Stage and upload debug-ID source maps",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- upload ---
    p_upload = subparsers.add_parser(
        "upload", help="Stage and upload bundles carrying a debug ID",
    )
    p_upload.add_argument(
        "paths", nargs="*", default=[],
        help="Build artifact paths, used when --assets is not given",
    )
    p_upload.add_argument(
        "--assets", action="append", default=None,
        help="Glob of bundles to upload (repeatable)",
    )
    p_upload.add_argument(
        "--no-assets", action="store_true",
        help="Explicitly upload nothing (opt-out)",
    )
    p_upload.add_argument(
        "--ignore", action="append", default=None,
        help="Glob of files to exclude (repeatable)",
    )
    p_upload.add_argument("--release", default=None, help="Release name")
    p_upload.add_argument("--dist", default=None, help="Distribution label")
    p_upload.add_argument(
        "--delete-after", action="append", default=None,
        help="Glob of files to delete after upload (repeatable)",
    )
    p_upload.set_defaults(func=_cmd_upload)

    # --- inspect ---
    p_inspect = subparsers.add_parser(
        "inspect", help="Show the debug ID and source map of a bundle",
    )
    p_inspect.add_argument("bundle", type=Path, help="Path to bundle")
    p_inspect.set_defaults(func=_cmd_inspect)

    return parser


async def _cmd_upload(args: argparse.Namespace) -> int:
    """Execute a debug-ID upload run."""
    from debugid_uploader.api.facade import upload_debug_ids
    from debugid_uploader.config.settings import Settings
    from debugid_uploader.logging.logger import setup_logging

    overrides: dict[str, object] = {}
    if args.no_assets:
        overrides["sourcemaps_assets"] = ""
    elif args.assets:
        overrides["sourcemaps_assets"] = ",".join(args.assets)
    if args.ignore:
        overrides["sourcemaps_ignore"] = ",".join(args.ignore)
    if args.release:
        overrides["release_name"] = args.release
    if args.dist:
        overrides["dist"] = args.dist
    if args.delete_after:
        overrides["sourcemaps_delete_after_upload"] = ",".join(args.delete_after)

    settings = Settings(**overrides)  # type: ignore[arg-type]
    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    result = await upload_debug_ids(args.paths, settings=settings)

    print("\nDebug ID upload complete:")
    print(f"  Candidates:   {result.total_candidates}")
    print(f"  Bundles:      {result.staged_bundles}")
    print(f"  Source maps:  {result.staged_source_maps}")
    print(f"  Skipped:      {result.skipped}")
    print(f"  Uploaded:     {'yes' if result.uploaded else 'no'}")
    print(f"  Duration:     {result.duration_seconds:.1f}s")
    return 1 if result.failed else 0


async def _cmd_inspect(args: argparse.Namespace) -> int:
    """Print the debug ID and resolved source map of one bundle."""
    from debugid_uploader.batch.preparer import read_bundle
    from debugid_uploader.core.errors import BundleReadError
    from debugid_uploader.extraction.debug_id import extract_debug_id
    from debugid_uploader.sourcemap.locator import determine_source_map_path
    from debugid_uploader.storage.local_writer import LocalWriter

    bundle: Path = args.bundle.resolve()
    writer = LocalWriter()
    try:
        code = await read_bundle(bundle, writer)
    except BundleReadError as exc:
        logger.error("%s", exc)
        return 1

    debug_id = extract_debug_id(code)
    source_map = await determine_source_map_path(bundle, code, writer)

    print(f"\n{bundle}:")
    print(f"  Debug ID:    {debug_id or '-'}")
    print(f"  Source map:  {source_map or '-'}")
    return 0 if debug_id else 1


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from debugid_uploader.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "INFO", log_format="text")


if __name__ == "__main__":
    sys.exit(main())
