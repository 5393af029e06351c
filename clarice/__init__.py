# Clarice language package
# This package provides the lexer, parser and interpreter for the Clarice language.
__version__ = '0.1.0'

from .errors import ClariceError, LexError, ParseError
from .interpreter import run_program, run_file, Interpreter
from .modules import ModuleObject, ModuleRegistry, default_registry
from .parser import parse_program

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Interpreter',
    'ModuleObject',
    'ModuleRegistry',
    'default_registry',
    'ClariceError',
    'LexError',
    'ParseError',
]
