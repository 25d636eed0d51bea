"""Find word and quote boundaries in the reversed text left of the cursor.

Every scanner here works on the line *reversed*, so the word under the
cursor is always a prefix of the input. An escape character therefore
shows up *after* the character it protects.
"""


def break_word(escape_char: str | None, delimiters: str, text: str) -> tuple[str, str]:
    """Split reversed text into (word, rest) at the first unescaped delimiter.

    Escaped delimiters and escaped escape characters stay in the word
    with their escape character dropped. Both halves stay reversed, so
    the line `ls foo\\ bar` (reversed `rab\\ oof sl`) breaks into
    `rab oof` and ` sl`.
    """
    if escape_char is None:
        for i, ch in enumerate(text):
            if ch in delimiters:
                return text[:i], text[i:]
        return text, ""

    word: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if i + 1 < len(text) and text[i + 1] == escape_char and (ch == escape_char or ch in delimiters):
            word.append(ch)
            i += 2
            continue
        if ch in delimiters:
            break
        word.append(ch)
        i += 1
    return "".join(word), text[i:]


def split_at_quote(escape_char: str | None, quotes: str, text: str) -> tuple[str, str] | None:
    """Split reversed text at the first unescaped quote character.

    Returns (word, rest) where rest starts just past the quote, or None
    when the text holds no unescaped quote. All quote characters are
    interchangeable: there is no open/close pairing.
    """
    word: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        # Two-character peek: the escape follows what it protects.
        if (
            escape_char is not None
            and i + 1 < len(text)
            and text[i + 1] == escape_char
            and (ch == escape_char or ch in quotes)
        ):
            word.append(ch)
            i += 2
            continue
        if ch in quotes:
            return "".join(word), text[i + 1 :]
        word.append(ch)
        i += 1
    return None


def is_unquoted(escape_char: str | None, quotes: str, text: str) -> bool:
    """Return True if text holds an even number of unescaped quotes."""
    unquoted = True
    split = split_at_quote(escape_char, quotes, text)
    while split is not None:
        unquoted = not unquoted
        split = split_at_quote(escape_char, quotes, split[1])
    return unquoted


def escape(escape_char: str, special: str, text: str) -> str:
    """Prefix every special character (and the escape itself) with escape_char."""
    return "".join(escape_char + ch if ch == escape_char or ch in special else ch for ch in text)


def unescape(escape_char: str, special: str, text: str) -> str:
    """Inverse of escape(): drop the escape before special characters.

    An escape character that protects nothing is kept literally.
    """
    result: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == escape_char and i + 1 < len(text) and (text[i + 1] == escape_char or text[i + 1] in special):
            result.append(text[i + 1])
            i += 2
            continue
        result.append(ch)
        i += 1
    return "".join(result)
