from __future__ import annotations

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from lsh.completion import CompletionProvider
from lsh.prompt_editor import PromptToolkitEditor, ShellCompleter


def _completions(provider, text):
    completer = ShellCompleter(provider)
    return list(completer.get_completions(Document(text), CompleteEvent(completion_requested=True)))


def test_command_completion_replaces_whole_word(tmp_path, make_executable) -> None:
    make_executable(tmp_path / "bin" / "grep")
    provider = CompletionProvider({"PATH": str(tmp_path / "bin")})

    completions = _completions(provider, "gr")

    assert [c.text for c in completions] == ["grep"]
    assert completions[0].start_position == -2


def test_argument_completion_replaces_trailing_segment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notebooks").mkdir()
    provider = CompletionProvider({})

    completions = _completions(provider, "ls no")

    assert [c.text for c in completions] == ["notebooks/"]
    assert completions[0].start_position == -2


def test_cd_completion_replaces_line(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "source").mkdir()

    completions = _completions(CompletionProvider({}), "cd so")

    assert [c.text for c in completions] == ["cd source/"]
    assert completions[0].start_position == -5


class FakeSession:
    def __init__(self, answers):
        self.answers = list(answers)
        self.messages = []

    def prompt(self, message):
        self.messages.append(message)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


def test_editor_returns_lines_and_none_at_eof() -> None:
    editor = PromptToolkitEditor(session=FakeSession(["ls -la", EOFError()]))

    assert editor.read_line("$ ") == "ls -la"
    assert editor.read_line("$ ") is None
