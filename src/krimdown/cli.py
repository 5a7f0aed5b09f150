"""krimdown CLI: render one markdown file to HTML.

Entry point registered as ``krimdown`` in ``pyproject.toml``::

    [project.scripts]
    krimdown = "krimdown.cli:main"
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from krimdown.errors import KrimdownError
from krimdown.filter import KrimdownFilter
from krimdown.highlighting import default_highlighter


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the ``krimdown`` command."""
    parser = argparse.ArgumentParser(
        prog="krimdown",
        description="Render markdown to HTML with decorative block wrappers.",
    )
    parser.add_argument("file", nargs="?", help="Markdown file (default: stdin)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for decorative classes")
    parser.add_argument(
        "--plugin",
        action="append",
        default=[],
        dest="plugins",
        help="Parser plugin to enable (repeatable, 'all' for every plugin)",
    )
    parser.add_argument(
        "--css",
        metavar="SELECTOR",
        default=None,
        help="Print the highlighter stylesheet scoped to SELECTOR and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.css is not None:
        sys.stdout.write(default_highlighter().stylesheet(args.css) + "\n")
        return 0

    try:
        source = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
    except OSError as e:
        print(f"krimdown: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        html = KrimdownFilter(rng=rng).run(source, {"plugins": args.plugins})
    except KrimdownError as e:
        print(f"krimdown: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(html)
    return 0
