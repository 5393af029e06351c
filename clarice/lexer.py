"""Lexer for the Clarice language.

The terminal set of the language is declared as a Lark grammar and the
source is run through Lark's basic lexer. Only the token stream is used;
the statement grammar is handled by the recursive-descent parser in
`clarice.parser`, which needs the lookahead rules of the `with` forms.

Keywords are reserved: Lark retypes an identifier whose text is a
keyword into that keyword's terminal. Whitespace, newlines and `#`
comments are dropped. The language reads as prose, so line breaks carry
no meaning beyond separating tokens.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError


KEYWORDS = (
    'with', 'as', 'let', 'set', 'to', 'if', 'then', 'else', 'loop', 'do',
    'end', 'break', 'print', 'prompt', 'using', 'from', 'and', 'iter', 'in',
    'true', 'false', 'null',
)

OPERATORS = {
    'DOTDOT': '..', 'NE': '!=', 'LE': '<=', 'GE': '>=', 'EQ': '=',
    'LT': '<', 'GT': '>', 'PLUS': '+', 'MINUS': '-', 'STAR': '*',
    'SLASH': '/', 'PERCENT': '%',
}

PUNCTUATION = {
    'LPAR': '(', 'RPAR': ')', 'LSQB': '[', 'RSQB': ']', 'COMMA': ',',
    'DOT': '.',
}


def _build_grammar() -> str:
    names = [kw.upper() for kw in KEYWORDS] + list(OPERATORS) + list(PUNCTUATION)
    lines = ['start: _item*']
    lines.append('_item: ' + ' | '.join(names + ['IDENT', 'FLOAT', 'INT', 'TRIPLE_STRING', 'STRING']))
    for kw in KEYWORDS:
        lines.append(f'{kw.upper()}: "{kw}"')
    for name, text in list(OPERATORS.items()) + list(PUNCTUATION.items()):
        lines.append(f'{name}: "{text}"')
    lines.append(CLARICE_TERMINALS)
    return '\n'.join(lines)


CLARICE_TERMINALS = r'''
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    FLOAT.2: /\d+\.\d+/
    INT: /\d+/
    TRIPLE_STRING.3: /"""(?:\\[\s\S]|[^\\])*?"""/
    STRING.2: /"(?:\\.|[^"\\\n])*"/

    COMMENT: /#[^\n]*/
    %ignore COMMENT
    %import common.WS
    %ignore WS
'''


CLARICE_LEXER = Lark(
    _build_grammar(),
    parser='lalr',
    lexer='basic',
)


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"{self.kind}({self.lexeme!r})@{self.line}:{self.column}"


KEYWORD_TYPES = {kw.upper(): kw for kw in KEYWORDS}


def _string_body(token_type: str, text: str) -> str:
    """Strip the quotes off a string token, leaving escapes undecoded.

    Triple-quoted strings lose one newline directly after the opening
    quotes and are dedented, so a block of Markdown can be indented with
    the surrounding script.
    """
    if token_type == 'TRIPLE_STRING':
        body = text[3:-3]
        if body.startswith('\n'):
            body = body[1:]
        return textwrap.dedent(body)
    return text[1:-1]


def tokenize(source: str) -> List[Token]:
    """Convert Clarice source text into a list of tokens ending in EOF."""
    tokens: List[Token] = []
    try:
        for tok in CLARICE_LEXER.lex(source):
            if tok.type in KEYWORD_TYPES:
                tokens.append(Token('KEYWORD', tok.value, tok.line, tok.column))
            elif tok.type == 'IDENT':
                tokens.append(Token('IDENT', tok.value, tok.line, tok.column))
            elif tok.type in ('INT', 'FLOAT'):
                tokens.append(Token(tok.type, tok.value, tok.line, tok.column))
            elif tok.type in ('STRING', 'TRIPLE_STRING'):
                tokens.append(Token('STRING', _string_body(tok.type, tok.value), tok.line, tok.column))
            elif tok.type in OPERATORS:
                tokens.append(Token('OP', tok.value, tok.line, tok.column))
            else:
                tokens.append(Token('PUNCT', tok.value, tok.line, tok.column))
    except UnexpectedCharacters as e:
        if e.char == '"':
            raise LexError('unterminated string literal', e.line, e.column) from None
        raise LexError(f'unexpected character {e.char!r}', e.line, e.column) from None
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    tokens.append(Token('EOF', '', line, column))
    return tokens
