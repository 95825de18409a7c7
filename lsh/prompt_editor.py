"""prompt_toolkit front end sharing the interpreter's completion rules."""

from __future__ import annotations

from typing import Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import ANSI

from .completion import CompletionProvider, classify


class ShellCompleter(Completer):
    """Adapts CompletionProvider to prompt_toolkit.

    Only the text before the cursor is completed; the replaced span is the
    same partial string the raw editor would replace.
    """

    def __init__(self, provider: Optional[CompletionProvider] = None):
        self.provider = provider or CompletionProvider()

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        text = document.text_before_cursor
        query = classify(text, builtins=self.provider.directory_builtins)
        with self.provider.complete(query.partial, query.is_argument) as result:
            candidates = list(result)
        for candidate in candidates:
            yield Completion(
                candidate,
                start_position=-len(query.partial),
                display_meta="dir" if candidate.endswith("/") else None,
            )


class PromptToolkitEditor:
    def __init__(self, provider: Optional[CompletionProvider] = None, session: Optional[PromptSession] = None):
        self.session = session or PromptSession(
            completer=ShellCompleter(provider),
            complete_while_typing=False,
        )

    def read_line(self, prompt: str = "") -> Optional[str]:
        try:
            return self.session.prompt(ANSI(prompt))
        except EOFError:
            return None
