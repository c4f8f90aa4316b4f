import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..config import CONFIRMATION_TOKEN, DEFAULT_MESSAGE, WEBHOOK_URL_PREFIX
from .commands import COMMANDS

_CURRENT_WORD = re.compile(r"\S*$")


@dataclass(frozen=True)
class CompletionCandidate:
    """A single suggestion offered while the user types."""

    insert_text: str
    display_text: Optional[str] = None
    append_separator: bool = True


# The one suggestion each command offers for its argument.
ARGUMENT_SUGGESTIONS: Dict[str, CompletionCandidate] = {
    "delete": CompletionCandidate(CONFIRMATION_TOKEN),
    "select": CompletionCandidate(WEBHOOK_URL_PREFIX, append_separator=False),
    "send": CompletionCandidate(DEFAULT_MESSAGE),
}


def complete(
    buffer: str, cursor: Optional[int] = None
) -> Optional[List[CompletionCandidate]]:
    """
    Computes the suggestions for the word under the cursor.

    Returns None when there is nothing to say about this position, so the
    front end may fall back to its default behaviour. An empty list means
    the position was understood but nothing matches.
    """
    text_before_cursor = buffer if cursor is None else buffer[:cursor]
    match = _CURRENT_WORD.search(text_before_cursor)
    word = match.group()
    prior_words = text_before_cursor[: match.start()].split()

    # --- CONTEXT 1: Command name ---
    if not prior_words:
        return [
            CompletionCandidate(command.name)
            for command in COMMANDS
            if command.name.startswith(word)
        ]

    # --- CONTEXT 2: First argument of a known command ---
    if len(prior_words) == 1:
        suggestion = ARGUMENT_SUGGESTIONS.get(prior_words[0])
        return [suggestion] if suggestion else None

    # Arguments are only completed once.
    return None


class WbhCompleter(Completer):
    """
    The prompt_toolkit completer for the wbh shell.

    Suggests command names on the first word and a single fixed argument for
    `select`, `send` and `delete`. Positions it has no opinion on are handed
    to `fallback` when one is configured.
    """

    def __init__(self, fallback: Optional[Completer] = None):
        self.fallback = fallback

    def get_completions(self, document: Document, complete_event):
        candidates = complete(document.text, document.cursor_position)
        if candidates is None:
            if self.fallback is not None:
                yield from self.fallback.get_completions(document, complete_event)
            return

        word_before_cursor = document.get_word_before_cursor(WORD=True)
        for candidate in candidates:
            text = candidate.insert_text
            if candidate.append_separator:
                text += " "
            yield Completion(
                text=text,
                start_position=-len(word_before_cursor),
                display=candidate.display_text,
            )
