"""Filename completion backed by directory listings."""

import logging
import os

from shellcomplete.completion import Completion, complete_quoted_word, complete_word

logger = logging.getLogger(__name__)

# Same as readline's word break characters, minus the backslash
# so it can still be typed as an escape.
FILENAME_WORD_BREAK_CHARS = " \t\n`@$><=;|&{("
QUOTE_CHARS = "\"'"
ESCAPE_CHAR = "\\"


def split_file_name(path: str) -> tuple[str, str]:
    """Split a path into its directory part (trailing separator kept) and file name.

    Concatenating the two parts gives back the original path.
    """
    head, sep, tail = path.rpartition(os.sep)
    return head + sep, tail


def fix_path(directory: str) -> str:
    """Turn a user-visible directory into one that can be listed."""
    if not directory:
        return "."
    if directory.startswith("~" + os.sep):
        return os.path.join(os.path.expanduser("~"), directory[2:])
    return directory


def list_files(path: str) -> list[Completion]:
    """List all of the files or folders beginning with this path.

    Directories come back unfinished, with a trailing separator. A
    directory part that does not exist yields no completions.
    """
    directory, prefix = split_file_name(path)
    search_dir = fix_path(directory)
    if not os.path.isdir(search_dir):
        logger.debug("no such directory %r, nothing to complete", search_dir)
        return []

    completions: list[Completion] = []
    with os.scandir(search_dir) as entries:
        for entry in entries:
            if entry.name in (".", "..") or not entry.name.startswith(prefix):
                continue
            # Concatenate, not os.path.join: every candidate keeps the typed prefix.
            if entry.is_dir():
                completions.append(Completion(directory + entry.name + os.sep, entry.name, False))
            else:
                completions.append(Completion(directory + entry.name, entry.name, True))
    logger.debug("%d candidates for %r in %r", len(completions), prefix, search_dir)
    return completions


complete_filename = complete_quoted_word(
    ESCAPE_CHAR,
    QUOTE_CHARS,
    list_files,
    complete_word(ESCAPE_CHAR, QUOTE_CHARS + FILENAME_WORD_BREAK_CHARS, list_files),
)
