"""Interactive completion playground: prompt, read, complete, print, repeat."""

import contextlib
import logging
import os
import readline
import sys

import click

from shellcomplete.completion import Completion, CompletionFunc
from shellcomplete.editor import ReadlineCompleter, setup_completion
from shellcomplete.filenames import complete_filename

HISTORY_FILE = os.path.expanduser("~/.shellcomplete_history")

logger = logging.getLogger(__name__)


def format_completion(completion: Completion) -> str:
    marker = "" if completion.is_finished else "..."
    return f"{completion.display}\t{completion.replacement}{marker}"


class Shell:
    """Shell state and main loop."""

    def __init__(self, func: CompletionFunc = complete_filename, history_file: str = HISTORY_FILE) -> None:
        self.completer = ReadlineCompleter(func)
        self.history_file = history_file

    def load_history(self) -> None:
        with contextlib.suppress(FileNotFoundError, PermissionError, OSError):
            readline.read_history_file(self.history_file)

    def save_history(self) -> None:
        with contextlib.suppress(PermissionError, OSError):
            readline.write_history_file(self.history_file)

    def get_prompt(self) -> str:
        cwd = os.getcwd()
        home = os.path.expanduser("~")
        if cwd == home:
            display = "~"
        elif cwd.startswith(home + "/"):
            display = "~/" + cwd[len(home) + 1 :]
        else:
            display = cwd
        return f"{display} ? "

    def show_completions(self, line: str) -> int:
        """Complete line at its end and print the candidates.

        Returns 0 if anything matched, 1 otherwise.
        """
        try:
            completions = self.completer.complete(line, "")
        except OSError as e:
            print(f"shellcomplete: {e}", file=sys.stderr)
            return 1
        for completion in completions:
            print(format_completion(completion))
        return 0 if completions else 1

    def run(self) -> None:
        """Main loop."""
        self.load_history()
        readline.set_history_length(1000)
        self.completer = setup_completion(self.completer.func)

        while True:
            prompt = self.get_prompt()
            self.completer.prompt = prompt
            try:
                line = input(prompt)
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if line.strip() == "exit":
                break
            self.show_completions(line)

        self.save_history()


@click.command()
@click.option("--query", "-q", help="Complete TEXT once, print the candidates and exit.", metavar="TEXT")
@click.option("--history-file", default=HISTORY_FILE, show_default=True, help="Where to keep the prompt history.")
@click.option("--debug", is_flag=True, help="Log debug messages to stderr.")
def main(query: str | None, history_file: str, debug: bool) -> None:
    """Try out filename completion at an interactive prompt."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )
    shell = Shell(history_file=history_file)
    if query is not None:
        sys.exit(shell.show_completions(query))
    logger.debug("history file: %s", history_file)
    shell.run()
