import builtins
import sys


class ConsoleIO:
    """Default output and input collaborator: stdout and `input()`."""

    def write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def read_line(self) -> str:
        try:
            return builtins.input()
        except EOFError:
            return ''
