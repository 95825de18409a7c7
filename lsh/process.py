"""
External program launch and wait.

- fork + execvp, searching PATH in order
- exec failures are reported by the child, which then exits with status 1
- the parent waits until the child exits or is killed; stops are ignored
"""

from __future__ import annotations

import os
import signal
import sys
from dataclasses import dataclass
from typing import List, Optional

from . import ux


EXIT_FAILURE = 1
STDERR_FILENO = 2


@dataclass(frozen=True)
class ProcessStatus:
    pid: int
    exit_code: Optional[int] = None
    signal_number: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class ProcessLauncher:
    def launch(self, args: List[str]) -> Optional[ProcessStatus]:
        """Run `args` in a child process and wait for it.

        Returns None when the child could not be created.
        """
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            pid = os.fork()
        except OSError as exc:
            ux.report(f"fork: {exc.strerror or exc}")
            return None
        if pid == 0:
            self._exec_child(args)
        return self.wait(pid)

    def _exec_child(self, args: List[str]) -> None:
        # never returns
        try:
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)
            signal.signal(signal.SIGINT, signal.SIG_DFL)
            os.execvp(args[0], args)
        except OSError as exc:
            msg = f"lsh: {args[0]}: {exc.strerror or exc}\n"
            os.write(STDERR_FILENO, msg.encode("utf-8", "surrogateescape"))
        finally:
            os._exit(EXIT_FAILURE)

    def wait(self, pid: int) -> ProcessStatus:
        while True:
            try:
                _pid, status = os.waitpid(pid, os.WUNTRACED)
            except KeyboardInterrupt:
                # SIGINT went to the child as well; keep waiting for it
                continue
            except ChildProcessError:
                return ProcessStatus(pid)
            if os.WIFEXITED(status):
                return ProcessStatus(pid, exit_code=os.WEXITSTATUS(status))
            if os.WIFSIGNALED(status):
                return ProcessStatus(pid, signal_number=os.WTERMSIG(status))
            # stopped: the child is still alive
