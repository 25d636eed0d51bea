"""Completion records and the completers that build them from a lookup function.

A completer takes the line state ``(left_reversed, right)`` and returns
``(rest_reversed, completions)``: the part of the left text it did not
consume, still reversed, plus the candidates for the word it did.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TypeAlias

from shellcomplete.tokenizer import break_word, escape, is_unquoted, split_at_quote


@dataclass(frozen=True)
class Completion:
    """One candidate the user may accept."""

    replacement: str  # text inserted into the line
    display: str  # text shown when listing alternatives
    is_finished: bool = True  # followed by a space, end quote, etc.


LineState: TypeAlias = tuple[str, str]
LookupFunc: TypeAlias = Callable[[str], list[Completion]]
CompletionFunc: TypeAlias = Callable[[LineState], tuple[str, list[Completion]]]


def simple_completion(word: str) -> Completion:
    """Create a finished completion out of the given word."""
    return Completion(word, word, True)


def set_replacement(func: Callable[[str], str], completion: Completion) -> Completion:
    return replace(completion, replacement=func(completion.replacement))


def escape_replacement(escape_char: str | None, special: str, completion: Completion) -> Completion:
    """Escape special characters in the replacement; display is left alone."""
    if escape_char is None:
        return completion
    return set_replacement(lambda text: escape(escape_char, special, text), completion)


def add_quotes(completion: Completion) -> Completion:
    """Quote the replacement, leaving it open if the word is unfinished."""
    if completion.is_finished:
        return set_replacement(lambda text: f'"{text}"', completion)
    return set_replacement(lambda text: f'"{text}', completion)


def no_completion(line: LineState) -> tuple[str, list[Completion]]:
    """Disable completion altogether."""
    return line[0], []


def _check_escape(escape_char: str | None) -> None:
    if escape_char is not None and len(escape_char) != 1:
        raise ValueError(f"escape character must be a single character, got {escape_char!r}")


def complete_word(escape_char: str | None, delimiters: str, lookup: LookupFunc) -> CompletionFunc:
    """Build a completer for the bare word left of the cursor.

    The word runs back to the first unescaped delimiter. It is handed
    to ``lookup`` unescaped, and every replacement that comes back is
    escaped again against ``delimiters``.
    """
    _check_escape(escape_char)

    def completer(line: LineState) -> tuple[str, list[Completion]]:
        word, rest = break_word(escape_char, delimiters, line[0])
        completions = lookup(word[::-1])
        return rest, [escape_replacement(escape_char, delimiters, c) for c in completions]

    return completer


def complete_quoted_word(
    escape_char: str | None,
    quotes: str,
    lookup: LookupFunc,
    fallback: CompletionFunc,
) -> CompletionFunc:
    """Build a completer for a word inside an unterminated quote.

    When the cursor is not inside a quote (no quote at all, or the last
    one is closed), the whole line state goes to ``fallback``.
    """
    _check_escape(escape_char)

    def completer(line: LineState) -> tuple[str, list[Completion]]:
        split = split_at_quote(escape_char, quotes, line[0])
        if split is None or not is_unquoted(escape_char, quotes, split[1]):
            return fallback(line)
        word, rest = split
        completions = lookup(word[::-1])
        return rest, [add_quotes(escape_replacement(escape_char, quotes, c)) for c in completions]

    return completer
