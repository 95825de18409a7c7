from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from . import __version__, ux
from .completion import CompletionProvider
from .config import EDITORS, Settings, load_settings
from .dispatcher import Dispatcher
from .editor import LineEditor, StreamReader
from .errors import ConfigError
from .loop import CommandLoop, LineReader


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(prog="lsh", description="Interactive command interpreter")
    p.add_argument("--editor", choices=EDITORS, help="Line editor: raw (default on a TTY), prompt, or plain")
    p.add_argument("--escape-timeout", type=str, metavar="SECONDS",
                   help="Give up on an incomplete escape sequence after SECONDS (default: wait)")
    p.add_argument("--no-color", action="store_true", help="Disable colored output")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def build_settings(args) -> Settings:
    # flags override the environment before anything is validated
    env = dict(os.environ)
    if args.editor:
        env["LSH_EDITOR"] = args.editor
    if args.escape_timeout is not None:
        env["LSH_ESCAPE_TIMEOUT"] = args.escape_timeout
    settings = load_settings(env)
    if args.no_color:
        settings["color"] = False
    return settings


def build_reader(settings: Settings, provider: CompletionProvider) -> LineReader:
    editor = settings["editor"]
    if editor == "plain":
        return StreamReader(sys.stdin)
    if editor == "prompt":
        from .prompt_editor import PromptToolkitEditor

        return PromptToolkitEditor(provider)
    return LineEditor(completer=provider, escape_timeout=settings.get("escape_timeout"))


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = parse_args(argv)
    try:
        settings = build_settings(args)
    except ConfigError as exc:
        ux.report(str(exc))
        return 2

    if not settings.get("color", True):
        ux.set_color(False)

    provider = CompletionProvider()
    prompt = ux.prompt(settings["prompt"]) if settings["editor"] != "plain" else ""
    loop = CommandLoop(build_reader(settings, provider), Dispatcher(), prompt)
    try:
        return loop.run()
    except MemoryError:
        ux.report("allocation error")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
