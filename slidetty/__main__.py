"""slidetty — Present a directory of markdown slides in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
from pathlib import Path

from .app import SlideApp
from .deck import resolve_theme
from .models import DEFAULT_SLIDES_DIR
from .scaffold import scaffold_deck

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slidetty",
        description="Present a directory of markdown slides in the terminal.",
    )
    parser.add_argument("--slides", default=DEFAULT_SLIDES_DIR, metavar="DIR",
                        help=f"Directory of slide files (default: {DEFAULT_SLIDES_DIR})")
    parser.add_argument("--theme", default=None,
                        help="'auto' or a path to a rich theme file; overrides _theme.md")
    parser.add_argument("--log-file", default=None, metavar="PATH",
                        help="Where to write the debug log (default: <tempdir>/slidetty.log)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debug detail")

    subparsers = parser.add_subparsers(dest="command")
    init = subparsers.add_parser("init", help="Create a new deck with example slides")
    init.add_argument("directory", nargs="?", default=DEFAULT_SLIDES_DIR,
                      help=f"Deck directory to create (default: {DEFAULT_SLIDES_DIR})")
    return parser


def _configure_logging(log_path: Path, verbose: bool) -> None:
    # The terminal belongs to the UI, so logs only go to a file.
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    root = logging.getLogger("slidetty")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(file_handler)


def _run_init(directory: Path) -> None:
    try:
        created = scaffold_deck(directory)
    except FileExistsError:
        print(f"Error: {directory} already exists.", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"Error: cannot create {directory}: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Created deck in {directory} ({len(created)} files)")
    print(f"Run: slidetty --slides {directory}")


def main() -> None:
    args = _build_parser().parse_args()

    if args.command == "init":
        _run_init(Path(args.directory))
        return

    log_path = Path(args.log_file) if args.log_file else Path(tempfile.gettempdir()) / "slidetty.log"
    _configure_logging(log_path, args.verbose)
    logger.info("CLI arguments: %s", vars(args))

    directory = Path(args.slides)
    theme = resolve_theme(args.theme, directory) if args.theme else None

    app = SlideApp(directory, theme=theme)
    try:
        app.run()
    except Exception as exc:
        logger.exception("Terminal session failed")
        print(f"Error running program: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
