from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import PassTreeConfig, load_config
from .errors import PassTreeError
from .external.commands import GpgExternalCommands
from .runner import CommandRunner
from .store import StoreResolver, TreeRenderer, TreeWalker


def build_runner(config: PassTreeConfig) -> CommandRunner:
    resolver = StoreResolver(config.store_dir)
    renderer = TreeRenderer(TreeWalker(resolver), colorize=config.colorize)
    commands = GpgExternalCommands(
        gpg_binary=config.gpg_binary,
        clipboard_binary=config.clipboard_binary,
        qrencode_binary=config.qrencode_binary,
    )
    return CommandRunner(
        resolver=resolver,
        renderer=renderer,
        commands=commands,
        staging_dir=config.staging_dir,
        clipboard_clear_seconds=config.clipboard_clear_seconds,
    )


def cmd_show(runner: CommandRunner, args: argparse.Namespace) -> int:
    if args.clip:
        dest = "clip"
    elif args.qr:
        dest = "qrcode"
    else:
        dest = "stdout"
    runner.show(args.target or "", dest)
    return 0


def cmd_edit(runner: CommandRunner, args: argparse.Namespace) -> int:
    runner.edit(args.target)
    return 0


def cmd_find(runner: CommandRunner, args: argparse.Namespace) -> int:
    runner.find(args.keyword)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="passtree", description="interacts with your password store")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="path to config YAML (default: $PASSTREE_CONFIG or ~/.config/passtree/config.yml)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("show", help="decrypts passwords (or shows subdirectories)")
    sp.add_argument("target", nargs="?", default="", help="optional: password or subdirectory")
    group = sp.add_mutually_exclusive_group()
    group.add_argument("-c", "--clip", action="store_true", help="sends cleartext to clipboard")
    group.add_argument("-q", "--qr", action="store_true", help="displays cleartext as QR code (dangerous!)")
    sp.set_defaults(func=cmd_show)

    sp = sub.add_parser("edit", help="edits passwords")
    sp.add_argument("target", help="password to edit")
    sp.set_defaults(func=cmd_edit)

    sp = sub.add_parser("find", help="searches password store")
    sp.add_argument("keyword", help="search term")
    sp.set_defaults(func=cmd_find)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        runner = build_runner(load_config(args.config))
        return int(args.func(runner, args) or 0)
    except PassTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
