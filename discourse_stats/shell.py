"""
Interactive Shell Mode.

Menu-driven loop for picking statistics one at a time. The menu, prompt
and warnings go to stderr through a Rich console; selected statistics go
to stdout as "name<TAB>value" lines.
"""

import re
from collections.abc import Callable
from typing import IO

import click
from rich.console import Console

from discourse_stats.core.logging import get_logger, log_with_source
from discourse_stats.descriptors import describe
from discourse_stats.formatting import format_line, print_all
from discourse_stats.statistics import NumericField, StatisticsDocument, numeric_fields

logger = get_logger(__name__)

PROMPT = "> "
ORDINAL_PATTERN = re.compile(r"[0-9]+")


class InteractiveShell:
    """
    Interactive statistics picker.

    Commands:
        <n>  print the n-th numeric statistic of the current menu
        a    print all numeric statistics
        h    show the menu again
        q    quit (end of input does the same)

    Usage:
        shell = InteractiveShell(document)
        shell.run()
    """

    def __init__(
        self,
        document: StatisticsDocument,
        console: Console | None = None,
        stream: IO[str] | None = None,
    ) -> None:
        """
        Initialize the interactive shell.

        Args:
            document: Parsed statistics document
            console: Console for menu, prompt and warnings. Defaults to stderr.
            stream: Input stream. If None, reads with input().
        """
        self.document = document
        self.console = console or Console(stderr=True, highlight=False)
        self.stream = stream
        self.running = False
        self.commands: dict[str, Callable[[], None]] = {
            "a": self._cmd_all,
            "h": self._cmd_help,
            "q": self._cmd_quit,
        }

    def run(self) -> None:
        """Show the menu and process input until quit or end of input."""
        self.running = True
        self.print_menu()

        while self.running:
            line = self._read_line()
            if line is None:
                self.console.print()
                break
            self.handle(line)

        self.console.print("Exiting.", markup=False)

    def _read_line(self) -> str | None:
        """Read one line of input. None means the input is closed."""
        try:
            line = self.console.input(PROMPT, markup=False, stream=self.stream)
        except EOFError:
            return None
        if self.stream is not None and not line:
            return None
        return line

    def handle(self, line: str) -> None:
        """Dispatch one line of user input."""
        choice = line.strip()
        if not choice:
            return

        command = self.commands.get(choice.lower())
        if command is not None:
            command()
            return

        if ORDINAL_PATTERN.fullmatch(choice):
            try:
                ordinal = int(choice)
            except ValueError:
                # Beyond the interpreter's integer string conversion limit
                self._warn_invalid(choice)
                return
            self._cmd_select(ordinal)
            return

        self._warn_invalid(choice)

    def print_menu(self) -> list[NumericField]:
        """Render the numbered menu. Returns the fields in menu order."""
        fields = numeric_fields(self.document)

        lines = ["", "Select a statistic to display:"]
        for ordinal, field in enumerate(fields, start=1):
            description = describe(field.name)
            if description:
                lines.append(f"  {ordinal:2d}) {field.name} – {description}")
            else:
                lines.append(f"  {ordinal:2d}) {field.name}")
        lines.append("  a) all – list all numeric stats")
        lines.append("  h) help – show this menu again")
        lines.append("  q) quit – exit the program")

        self.console.print("\n".join(lines), markup=False, emoji=False, soft_wrap=True)
        log_with_source(logger, "shell", "debug", "Menu rendered", fields=len(fields))
        return fields

    def _cmd_select(self, ordinal: int) -> None:
        """Print the statistic at a 1-based menu position."""
        fields = numeric_fields(self.document)
        if not 1 <= ordinal <= len(fields):
            self._warn_invalid(str(ordinal))
            return

        field = fields[ordinal - 1]
        click.echo(format_line(field.name, field.value))

    def _cmd_all(self) -> None:
        print_all(self.document)

    def _cmd_help(self) -> None:
        self.print_menu()

    def _cmd_quit(self) -> None:
        self.running = False

    def _warn_invalid(self, choice: str) -> None:
        log_with_source(logger, "shell", "debug", "Invalid selection", choice=choice)
        self.console.print("Invalid selection", markup=False)


def run_shell(document: StatisticsDocument) -> None:
    """Run the interactive shell on stdin."""
    shell = InteractiveShell(document)
    shell.run()
