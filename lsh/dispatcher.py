from __future__ import annotations

from typing import List, Mapping, Optional

from .commands import DEFAULT_BUILTINS, Builtin, ShellContext
from .process import ProcessLauncher


class Dispatcher:
    """Runs a token list as a builtin or an external program."""

    def __init__(
        self,
        builtins: Optional[Mapping[str, Builtin]] = None,
        launcher: Optional[ProcessLauncher] = None,
        context: Optional[ShellContext] = None,
    ):
        self.builtins = DEFAULT_BUILTINS if builtins is None else builtins
        self.launcher = launcher or ProcessLauncher()
        self.context = context or ShellContext()
        self.context.builtin_names = tuple(self.builtins)

    def execute(self, tokens: List[str]) -> bool:
        """Returns False when the command loop should stop."""
        if not tokens:
            return True
        handler = self.builtins.get(tokens[0])
        if handler is not None:
            return handler(tokens, self.context)
        self.launcher.launch(tokens)
        return True
