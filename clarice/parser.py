"""Parser for the Clarice language.

A recursive-descent parser over the token list produced by
`clarice.lexer.tokenize`. Statements are introduced by keywords and read
as prose; there are no terminators, so each construct ends where its
grammar says it does:

    with x as 6 if x = 6 then print "Winner!" else print "Try again!"

The two `with` forms are told apart by lookahead after `with`. A name
followed by `as NAME do` is the alias form; a name followed by `as` is
the transient form; anything else is the alias form with a full target
expression (`with Markdown.ConvertHTML as convert do ...`).

After a simple statement, `and` or `then` chains the next one into a
`Sequence`: `set x to "Hello!" then print x`.

The first structural mismatch raises `ParseError`; there is no recovery.
"""

from __future__ import annotations

import re
from typing import List, Optional, Union

from .ast import (
    Program, With, WithAlias, Let, Set, If, Loop, Iter, Break, Print,
    Prompt, Using, Sequence, ExprStmt, Literal, Ident, BinaryOp, UnaryOp,
    ListLit, Call, Member, StringTemplate, Node
)
from .errors import ParseError
from .lexer import Token, tokenize


TOKEN_KINDS = {'KEYWORD', 'IDENT', 'INT', 'FLOAT', 'STRING', 'OP', 'PUNCT', 'EOF'}

KIND_NAMES = {
    'IDENT': 'identifier',
    'INT': 'integer',
    'FLOAT': 'float',
    'STRING': 'string literal',
    'EOF': 'end of input',
}

COMPARISON_OPS = ('=', '!=', '<', '>', '<=', '>=')

ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\', '{': '{', '}': '}'}

TEMPLATE_RE = re.compile(
    r'(\\.)|\{([A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)\}',
    re.DOTALL,
)


def _escape(match: re.Match) -> str:
    return ESCAPES.get(match.group(1)[1], match.group(1))


def decode_string(raw: str) -> str:
    """Decode the backslash escapes of a string body; placeholders stay text."""
    return re.sub(r'(\\.)', _escape, raw, flags=re.DOTALL)


def split_template(raw: str) -> List[Union[str, Node]]:
    """Split a string body into literal text and placeholder nodes."""
    parts: List[Union[str, Node]] = []
    buf: List[str] = []
    pos = 0
    for m in TEMPLATE_RE.finditer(raw):
        buf.append(raw[pos:m.start()])
        if m.group(1):
            buf.append(_escape(m))
        else:
            text = ''.join(buf)
            if text:
                parts.append(text)
            buf = []
            names = m.group(2).split('.')
            node: Node = Ident(names[0])
            for name in names[1:]:
                node = Member(node, name)
            parts.append(node)
        pos = m.end()
    buf.append(raw[pos:])
    text = ''.join(buf)
    if text:
        parts.append(text)
    return parts


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def match(self, expected: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        if expected in TOKEN_KINDS:
            return token.kind == expected
        return token.kind in ('KEYWORD', 'OP', 'PUNCT') and token.lexeme == expected

    def consume(self, expected: str) -> Token:
        token = self.peek()
        if not self.match(expected):
            raise self.error(KIND_NAMES.get(expected, f"'{expected}'"))
        self.pos += 1
        return token

    def error(self, expected: str) -> ParseError:
        token = self.peek()
        found = None if token.kind == 'EOF' else f"{token.kind} {token.lexeme!r}"
        return ParseError(expected, found, token.line, token.column)

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.match('EOF'):
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_compound_statement(self) -> Optional[Node]:
        token = self.peek()
        if token.kind != 'KEYWORD':
            return None
        if token.lexeme == 'with':
            return self.parse_with()
        if token.lexeme == 'if':
            return self.parse_if()
        if token.lexeme == 'loop':
            return self.parse_loop()
        if token.lexeme == 'iter':
            return self.parse_iter()
        if token.lexeme == 'prompt':
            return self.parse_prompt()
        return None

    def parse_statement(self) -> Node:
        compound = self.parse_compound_statement()
        if compound is not None:
            return compound
        statements = [self.parse_simple_statement()]
        # `and` and `then` both chain statements; a compound one ends the chain
        while self.match('and') or self.match('then'):
            self.consume(self.peek().lexeme)
            compound = self.parse_compound_statement()
            if compound is not None:
                statements.append(compound)
                break
            statements.append(self.parse_simple_statement())
        if len(statements) == 1:
            return statements[0]
        return Sequence(statements)

    def parse_simple_statement(self) -> Node:
        token = self.peek()
        if token.kind == 'KEYWORD':
            if token.lexeme == 'let':
                return self.parse_let()
            if token.lexeme == 'set':
                return self.parse_set()
            if token.lexeme == 'break':
                self.consume('break')
                return Break()
            if token.lexeme == 'print':
                self.consume('print')
                return Print(self.parse_expression())
            if token.lexeme == 'using':
                return self.parse_using()
            if token.lexeme not in ('true', 'false', 'null'):
                raise self.error('statement')
        if token.kind == 'EOF':
            raise self.error('statement')
        return ExprStmt(self.parse_expression())

    def parse_with(self) -> Node:
        self.consume('with')
        if self.match('IDENT') and self.match('as', 1):
            if self.match('IDENT', 2) and self.match('do', 3):
                target = Ident(self.consume('IDENT').lexeme)
                self.consume('as')
                alias = self.consume('IDENT').lexeme
                self.consume('do')
                return WithAlias(target, alias, self.parse_statement())
            name = self.consume('IDENT').lexeme
            self.consume('as')
            value = self.parse_expression()
            if self.match('do'):
                self.consume('do')
            return With(name, value, self.parse_statement())
        target = self.parse_expression()
        self.consume('as')
        alias = self.consume('IDENT').lexeme
        self.consume('do')
        return WithAlias(target, alias, self.parse_statement())

    def parse_let(self) -> Let:
        self.consume('let')
        name = self.consume('IDENT').lexeme
        type_hint: Optional[str] = None
        if self.match('as'):
            self.consume('as')
            type_hint = self.consume('IDENT').lexeme
        return Let(name, type_hint)

    def parse_set(self) -> Set:
        self.consume('set')
        name = self.consume('IDENT').lexeme
        self.consume('to')
        return Set(name, self.parse_expression())

    def parse_if(self) -> If:
        self.consume('if')
        condition = self.parse_expression()
        self.consume('then')
        then_branch = self.parse_statement()
        else_branch = None
        if self.match('else'):
            self.consume('else')
            else_branch = self.parse_statement()
        return If(condition, then_branch, else_branch)

    def parse_body(self) -> List[Node]:
        # one or more statements up to a matching `end` or the end of input
        body = [self.parse_statement()]
        while not self.match('end') and not self.match('EOF'):
            body.append(self.parse_statement())
        if self.match('end'):
            self.consume('end')
        return body

    def parse_loop(self) -> Loop:
        self.consume('loop')
        self.consume('do')
        return Loop(self.parse_body())

    def parse_iter(self) -> Iter:
        self.consume('iter')
        name = self.consume('IDENT').lexeme
        self.consume('in')
        iterable = self.parse_expression()
        self.consume('do')
        return Iter(name, iterable, self.parse_body())

    def parse_prompt(self) -> Prompt:
        self.consume('prompt')
        text = decode_string(self.consume('STRING').lexeme)
        self.consume('then')
        return Prompt(text, self.parse_statement())

    def parse_using(self) -> Using:
        self.consume('using')
        name = self.consume('IDENT').lexeme
        self.consume('from')
        path = [self.consume('IDENT').lexeme]
        while self.match('/'):
            self.consume('/')
            path.append(self.consume('IDENT').lexeme)
        return Using(name, path)

    # Expressions, loosest binding first
    def parse_expression(self) -> Node:
        return self.parse_comparison()

    def parse_comparison(self) -> Node:
        node = self.parse_concat()
        for op in COMPARISON_OPS:
            if self.match(op):
                self.consume(op)
                return BinaryOp(op, node, self.parse_concat())
        return node

    def parse_concat(self) -> Node:
        node = self.parse_sum()
        while self.match('..'):
            self.consume('..')
            node = BinaryOp('..', node, self.parse_sum())
        return node

    def parse_sum(self) -> Node:
        node = self.parse_product()
        while self.match('+') or self.match('-'):
            op_token = self.consume(self.peek().lexeme)
            node = BinaryOp(op_token.lexeme, node, self.parse_product())
        return node

    def parse_product(self) -> Node:
        node = self.parse_unary()
        while self.match('*') or self.match('/') or self.match('%'):
            op_token = self.consume(self.peek().lexeme)
            node = BinaryOp(op_token.lexeme, node, self.parse_unary())
        return node

    def parse_unary(self) -> Node:
        if self.match('-'):
            self.consume('-')
            return UnaryOp('-', self.parse_unary())
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        node = self.parse_primary()
        while True:
            if self.match('.'):
                self.consume('.')
                node = Member(node, self.consume('IDENT').lexeme)
                continue
            if self.match('('):
                self.consume('(')
                args: List[Node] = []
                if not self.match(')'):
                    args.append(self.parse_expression())
                    while self.match(','):
                        self.consume(',')
                        args.append(self.parse_expression())
                self.consume(')')
                node = Call(node, args)
                continue
            break
        return node

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.kind == 'INT':
            try:
                value = int(token.lexeme)
            except ValueError:
                # longer than sys.get_int_max_str_digits()
                raise self.error('integer literal of fewer digits') from None
            self.consume('INT')
            return Literal(value, 'Int')
        if token.kind == 'FLOAT':
            self.consume('FLOAT')
            return Literal(float(token.lexeme), 'Float')
        if token.kind == 'STRING':
            self.consume('STRING')
            parts = split_template(token.lexeme)
            if all(isinstance(part, str) for part in parts):
                return Literal(''.join(parts), 'String')
            return StringTemplate(parts)
        if token.kind == 'IDENT':
            self.consume('IDENT')
            return Ident(token.lexeme)
        if self.match('true') or self.match('false'):
            self.consume(token.lexeme)
            return Literal(token.lexeme == 'true', 'Bool')
        if self.match('null'):
            self.consume('null')
            return Literal(None, 'Null')
        if self.match('['):
            self.consume('[')
            elements: List[Node] = []
            if not self.match(']'):
                elements.append(self.parse_expression())
                while self.match(','):
                    self.consume(',')
                    elements.append(self.parse_expression())
            self.consume(']')
            return ListLit(elements)
        if self.match('('):
            self.consume('(')
            expr = self.parse_expression()
            self.consume(')')
            return expr
        raise self.error('expression')


def parse(tokens: List[Token]) -> Program:
    """Parse a token list into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Parse Clarice source code into a Program AST."""
    return parse(tokenize(source))
