"""facedb CLI — import facial-landmark databases into a training corpus.

Usage:
    python -m facedb import data/ibug_300W --max-side 640 --mirror --output corpus.npz
    python -m facedb import data/imm --rects data/imm_rects.txt
    python -m facedb detect data/imm
    python -m facedb bounds data/ibug_300W --output rects.txt
    python -m facedb info
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from app.config import settings
from app.logging_config import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="facedb",
        description="facedb — Facial landmark database importer",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- import ----
    import_parser = subparsers.add_parser("import", help="Import an IMM or iBug database")
    import_parser.add_argument("directory", type=str, help="Dataset directory")
    import_parser.add_argument("--rects", type=str, default=None, help="Rectangle list file")
    import_parser.add_argument(
        "--max-side",
        type=int,
        default=settings.max_image_side_length,
        help="Downscale images whose longer side exceeds this",
    )
    import_parser.add_argument(
        "--mirror",
        action="store_true",
        default=settings.generate_vertically_mirrored,
        help="Also add left-right mirrored copies",
    )
    import_parser.add_argument("--output", type=str, default=None, help="Save corpus as .npz")

    # ---- detect ----
    detect_parser = subparsers.add_parser("detect", help="Print the detected database format")
    detect_parser.add_argument("directory", type=str, help="Dataset directory")

    # ---- bounds ----
    bounds_parser = subparsers.add_parser(
        "bounds", help="Export tight landmark bounds as a rectangle file"
    )
    bounds_parser.add_argument("directory", type=str, help="Dataset directory")
    bounds_parser.add_argument("--output", type=str, required=True, help="Rectangle file to write")

    # ---- info ----
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args(argv)
    setup_logging()

    if args.command == "import":
        return cmd_import(args)
    elif args.command == "detect":
        return cmd_detect(args)
    elif args.command == "bounds":
        return cmd_bounds(args)
    elif args.command == "info":
        return cmd_info()
    return 1


def cmd_import(args: argparse.Namespace) -> int:
    """Import a database and optionally save it."""
    from ingest.archive import save_corpus
    from ingest.importer import DatabaseImporter
    from ingest.types import Corpus, ImportParameters

    try:
        params = ImportParameters(
            max_image_side_length=args.max_side,
            generate_vertically_mirrored=args.mirror,
        )
    except ValueError as e:
        logger.error(str(e))
        return 1

    corpus = Corpus()
    result = DatabaseImporter(params).import_into(args.directory, corpus, args.rects)

    if not result.success:
        logger.error(result.message)
        return 1

    logger.info(
        f"Format: {result.format.value} | Candidates: {result.candidates} | "
        f"Entries: {result.appended} | Skipped: {len(result.skipped)}"
    )

    if args.output:
        save_corpus(args.output, corpus)
    return 0


def cmd_detect(args: argparse.Namespace) -> int:
    """Print the dataset format."""
    from ingest.formats import detect_format
    from ingest.types import DatasetFormat

    dataset_format = detect_format(args.directory)
    print(dataset_format.value)
    return 0 if dataset_format is not DatasetFormat.UNKNOWN else 1


def cmd_bounds(args: argparse.Namespace) -> int:
    """Write the tight bounds of every entry, in enumeration order."""
    from ingest.importer import DatabaseImporter
    from ingest.rectangles import export_rectangles, shape_bounds

    result = DatabaseImporter().load(args.directory)
    if not result.success:
        logger.error(result.message)
        return 1
    if result.skipped:
        # A rectangle file must pair with every candidate.
        logger.error(
            f"{len(result.skipped)} candidates could not be loaded; "
            "rectangle file would not match the database"
        )
        return 1

    export_rectangles(args.output, [shape_bounds(e.shape) for e in result.entries])
    return 0


def cmd_info() -> int:
    """Show system information."""
    import platform

    import cv2
    import numpy as np

    print(f"""
facedb — Facial landmark database importer
══════════════════════════════════════════════
  Version:      {settings.app_version}
  Python:       {platform.python_version()}
  Platform:     {platform.system()} {platform.machine()}
  NumPy:        {np.__version__}
  OpenCV:       {cv2.__version__}
""")
    return 0


if __name__ == "__main__":
    sys.exit(main())
