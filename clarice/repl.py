"""Interactive mode: one persistent top-level scope, one line at a time."""

import sys
from typing import Optional, TextIO

from . import __version__
from .ast import ExprStmt
from .errors import ClariceError, LexError, ParseError
from .interpreter import Interpreter
from .parser import parse_program
from .types import NULL, repr_value


PROMPT = 'Clarice> '
FAREWELL = 'Okay, shutting down the Clarice interactive mode.'


class Repl:
    def __init__(self, interpreter: Interpreter, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.interpreter = interpreter
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def handle(self, line: str) -> bool:
        """Run one line of input. Returns False when the session should end."""
        command = line.strip()
        if command == 'exit':
            return False
        if not command:
            return True
        if command == ':vars':
            print(' '.join(self.interpreter.global_env.names()), file=self.stdout)
            return True
        env = self.interpreter.global_env
        try:
            program = parse_program(command)
            for stmt in program.body:
                if isinstance(stmt, ExprStmt):
                    value = self.interpreter.evaluate(stmt.expr, env)
                    if value is not NULL:
                        print(repr_value(value), file=self.stdout)
                else:
                    self.interpreter.execute(stmt, env)
        except LexError as e:
            print(f"Lex error: {e}", file=self.stderr)
        except ParseError as e:
            print(f"Parse error: {e}", file=self.stderr)
        except ClariceError as e:
            print(f"Runtime error: {e}", file=self.stderr)
        return True

    def loop(self) -> None:
        print(f"Clarice v{__version__}", file=self.stdout)
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line or not self.handle(line):
                break
        print(FAREWELL, file=self.stdout)
