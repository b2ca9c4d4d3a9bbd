import argparse
import logging
import os
import sys

from sprite_viewer.config import load_settings
from sprite_viewer.errors import SpriteError
from sprite_viewer.sheet_exporter import save_sheet, sheet_paths
from sprite_viewer.sprite_loader import load_sprite_file
from sprite_viewer.viewer import Viewer

logger = logging.getLogger("sprite_viewer")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Play a sprite described by a descriptor file and "
        "export frame sets to sprite sheets."
    )
    parser.add_argument("descriptor", help="sprite descriptor (.ini) to load")
    parser.add_argument(
        "--settings", default=None, help="viewer settings JSON file"
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        default=None,
        help="export destination; without a window this exports and exits",
    )
    parser.add_argument(
        "--no-window",
        action="store_true",
        help="do not open the viewer (use with --export)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace an existing exported sheet",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
    )
    args = parse_args(argv)
    settings = load_settings(args.settings)
    try:
        sprite = load_sprite_file(args.descriptor)
    except SpriteError as e:
        logger.error("Unable to load sprite: %s", e)
        return 1

    with sprite:
        if args.no_window:
            if not args.export:
                logger.error("--no-window requires --export")
                return 2
            image_path, _ = sheet_paths(args.export)
            if os.path.exists(image_path) and not args.overwrite:
                logger.error(
                    "%s already exists; pass --overwrite to replace it",
                    image_path,
                )
                return 1
            try:
                save_sheet(sprite, args.export)
            except SpriteError as e:
                logger.error("Export failed: %s", e)
                return 1
            return 0
        Viewer(
            sprite,
            settings=settings,
            export_path=args.export,
            overwrite=args.overwrite,
        ).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
