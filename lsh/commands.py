"""Builtin commands: cd, help, exit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Mapping, MutableMapping, Tuple

from rich.console import Console

from . import ux
from .config import home_dir


@dataclass
class ShellContext:
    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)
    out: Console = field(default_factory=lambda: ux.out_console)
    err: Console = field(default_factory=lambda: ux.err_console)
    builtin_names: Tuple[str, ...] = ()

    def report(self, message: str) -> None:
        ux.report(message, self.err)


# A builtin takes the full token list (name first) and returns False to stop
# the command loop.
Builtin = Callable[[List[str], ShellContext], bool]


def cd(args: List[str], ctx: ShellContext) -> bool:
    if len(args) < 2:
        target = home_dir(ctx.environ)
        if target is None:
            ctx.report("HOME not set")
            return True
    else:
        target = args[1]
        if target.startswith("~"):
            home = home_dir(ctx.environ)
            if home is None:
                ctx.report("HOME not set")
                return True
            target = home + target[1:]

    try:
        os.chdir(target)
    except OSError as exc:
        ctx.report(f"cd: {target}: {exc.strerror or exc}")
    return True


def help_(args: List[str], ctx: ShellContext) -> bool:
    ctx.out.print("Type program names and arguments, and hit enter.")
    ctx.out.print("The following are built in:")
    for name in ctx.builtin_names:
        ctx.out.print(f"  {name}")
    ctx.out.print("Use the man command for information on other programs.")
    return True


def exit_(args: List[str], ctx: ShellContext) -> bool:
    return False


DEFAULT_BUILTINS: Mapping[str, Builtin] = MappingProxyType({
    "cd": cd,
    "help": help_,
    "exit": exit_,
})
