from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .commands import (
    import_textures as cmd_import,
    list_textures as cmd_list,
)


def entrypoint():
    sys.exit(main())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import images into Unity Texture2D assets")
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="List Texture2D assets and their expected import file names")
    ls.add_argument("--bundle", type=str, required=True, help="Bundle or .assets file")
    ls.add_argument(
        "--ext", type=str, default="png", help="Extension shown in expected file names (default: png)"
    )

    i = sub.add_parser("import", help="Import image files into Texture2D assets")
    i.add_argument("--bundle", type=str, required=True, help="Bundle or .assets file to patch")
    i.add_argument("--file", type=str, default=None, help="Image to import (single or replace-many)")
    i.add_argument(
        "--dir",
        type=str,
        default=None,
        help="Directory of images named <name>-<file>-<pathid>.<ext> for batch import",
    )
    i.add_argument(
        "--path-id",
        type=int,
        action="append",
        default=None,
        help="Restrict the selection to this path id (repeatable; default: every Texture2D)",
    )
    i.add_argument(
        "--replace-many",
        action="store_true",
        help="Apply --file to every selected texture",
    )
    i.add_argument("--out", type=str, default="build", help="Output directory for the patched file")
    i.add_argument("--config", type=str, default=None, help="Optional JSON import config")
    i.add_argument("--backup", action="store_true", help="Create .bak backup of the original file")
    i.add_argument(
        "--dry-run",
        action="store_true",
        help="Show batch matches without importing",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "list":
        return cmd_list.run(args)
    if args.command == "import":
        return cmd_import.run(args)
    return 2


if __name__ == "__main__":
    entrypoint()
