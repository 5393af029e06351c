"""CLI entry point for the Clarice interpreter.

Usage:
    python -m clarice [-v|-vv|-vvv|-vvvv] <script.clrs>
    python -m clarice [-v...]
    python -m clarice --emit-ast <script.clrs>
    python -m clarice --print-ast <script.clrs>
    python -m clarice [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .clrs file and emit an AST JSON file
  --print-ast   Parse the given .clrs file and print its canonical source
  --ast         Execute a previously emitted AST JSON file

Without a script the interactive mode starts. Debug information is
written to `debug.txt` in the current directory when verbosity is
greater than zero. Any lex, parse or runtime error ends a script run
with exit status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Callable

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import ClariceError, LexError, ParseError
from .interpreter import Interpreter
from .parser import parse_program
from .printer import to_source
from .repl import Repl


def read_source(path_arg: str) -> str:
    path = Path(path_arg)
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def guarded(action: Callable[[], None]) -> None:
    try:
        action()
    except LexError as e:
        print(f"Lex error: {e}", file=sys.stderr)
        sys.exit(1)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    except ClariceError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def execute(program: Program, debug_level: int) -> None:
    with Interpreter(debug_level=debug_level) as interpreter:
        interpreter.run(program)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='clarice', description="Clarice language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='CLRS_FILE', help='emit AST JSON for the given .clrs file')
    group.add_argument('--print-ast', metavar='CLRS_FILE', help='print the canonical source of the given .clrs file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Clarice script (.clrs) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(args.emit_ast)

        def emit():
            obj = ast_to_obj(parse_program(source))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(obj, out, ensure_ascii=False, indent=2)
            print(str(out_path))
        guarded(emit)
        return

    if args.print_ast:
        source = read_source(args.print_ast)
        guarded(lambda: sys.stdout.write(to_source(parse_program(source))))
        return

    # Execute from AST JSON
    if args.ast:
        data = json.loads(read_source(args.ast))
        guarded(lambda: execute(ast_from_obj(data), args.v))
        return

    if not args.program:
        with Interpreter(debug_level=args.v) as interpreter:
            Repl(interpreter).loop()
        return

    source = read_source(args.program)
    guarded(lambda: execute(parse_program(source), args.v))


if __name__ == '__main__':
    main()
