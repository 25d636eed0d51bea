"""Readline tab completion driven by a CompletionFunc."""

import logging
import readline

from shellcomplete.completion import Completion, CompletionFunc, LineState
from shellcomplete.filenames import complete_filename

logger = logging.getLogger(__name__)


def line_state(before: str, after: str) -> LineState:
    """Build the line state for a cursor sitting between before and after."""
    return before[::-1], after


class ReadlineCompleter:
    """Readline completer function wrapping a CompletionFunc.

    Readline is given no word delimiters, so ``text`` is always the whole
    line left of the cursor and every match is a full replacement for it.
    """

    def __init__(self, func: CompletionFunc, prompt: str = "") -> None:
        self.func = func
        self.prompt = prompt
        self.matches: list[str] = []
        self.displays: dict[str, str] = {}

    def complete(self, before: str, after: str) -> list[Completion]:
        """Run the completion function and remember the resulting matches."""
        rest, completions = self.func(line_state(before, after))
        prefix = rest[::-1]
        self.matches = [prefix + c.replacement for c in completions]
        self.displays = {prefix + c.replacement: c.display for c in completions}
        return completions

    def __call__(self, text: str, state: int) -> str | None:
        """On state 0, compute all matches. On subsequent states, return the next."""
        if state == 0:
            line = readline.get_line_buffer()
            endidx = readline.get_endidx()
            try:
                self.complete(line[:endidx], line[endidx:])
            except OSError as e:
                logger.warning("completion failed: %s", e)
                self.matches = []
                self.displays = {}
            except Exception:
                # readline swallows anything raised from a completer
                logger.debug("completion raised", exc_info=True)
                raise

        if state < len(self.matches):
            return self.matches[state]
        return None

    def display_matches(self, substitution: str, matches: list[str], longest_match_length: int) -> None:
        """List alternatives by their display text instead of the full line."""
        print()
        print("  ".join(self.displays.get(m, m) for m in matches))
        print(self.prompt + readline.get_line_buffer(), end="", flush=True)


def setup_completion(func: CompletionFunc = complete_filename) -> ReadlineCompleter:
    """Configure readline for tab completion."""
    completer = ReadlineCompleter(func)
    readline.set_completer(completer)
    readline.set_completer_delims("")
    readline.set_completion_display_matches_hook(completer.display_matches)
    readline.parse_and_bind("tab: complete")
    return completer
