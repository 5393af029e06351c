"""Canonical source printer for Clarice AST.

`to_source(parse_program(src))` yields a script that parses back to the
same tree. Loop bodies always get an explicit `end` and expressions are
parenthesised only where precedence requires it.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Program, With, WithAlias, Let, Set, If, Loop, Iter, Break, Print,
    Prompt, Using, Sequence, ExprStmt, Literal, Ident, BinaryOp, UnaryOp,
    ListLit, Call, Member, StringTemplate, Node
)
from .types import format_float


INDENT = '    '

COMPARE, CONCAT, SUM, PRODUCT, UNARY, POSTFIX, ATOM = range(7)

BINARY_PRECEDENCE = {
    '=': COMPARE, '!=': COMPARE, '<': COMPARE, '>': COMPARE, '<=': COMPARE, '>=': COMPARE,
    '..': CONCAT,
    '+': SUM, '-': SUM,
    '*': PRODUCT, '/': PRODUCT, '%': PRODUCT,
}

STRING_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\t': '\\t', '\r': '\\r', '{': '\\{', '}': '\\}'}


def escape_string(text: str) -> str:
    return ''.join(STRING_ESCAPES.get(ch, ch) for ch in text)


def precedence(node: Node) -> int:
    if isinstance(node, BinaryOp):
        return BINARY_PRECEDENCE[node.op]
    if isinstance(node, UnaryOp):
        return UNARY
    if isinstance(node, (Call, Member)):
        return POSTFIX
    return ATOM


def _wrap(node: Node, needs_parens: bool) -> str:
    text = expr_to_source(node)
    return f'({text})' if needs_parens else text


def expr_to_source(node: Node) -> str:
    if isinstance(node, Literal):
        if node.literal_type == 'Null':
            return 'null'
        if node.literal_type == 'Bool':
            return 'true' if node.value else 'false'
        if node.literal_type == 'Float':
            return format_float(node.value)
        if node.literal_type == 'String':
            return f'"{escape_string(node.value)}"'
        return str(node.value)
    if isinstance(node, Ident):
        return node.name
    if isinstance(node, StringTemplate):
        pieces = [escape_string(part) if isinstance(part, str) else '{' + expr_to_source(part) + '}'
                  for part in node.parts]
        return '"' + ''.join(pieces) + '"'
    if isinstance(node, ListLit):
        return '[' + ', '.join(expr_to_source(e) for e in node.elements) + ']'
    if isinstance(node, BinaryOp):
        p = BINARY_PRECEDENCE[node.op]
        left_prec = precedence(node.left)
        # comparisons do not chain, so an equal-precedence left side needs parens too
        left = _wrap(node.left, left_prec < p or (p == COMPARE and left_prec == COMPARE))
        right = _wrap(node.right, precedence(node.right) <= p)
        return f'{left} {node.op} {right}'
    if isinstance(node, UnaryOp):
        return node.op + _wrap(node.operand, precedence(node.operand) < UNARY)
    if isinstance(node, Member):
        return _wrap(node.target, precedence(node.target) < POSTFIX) + '.' + node.name
    if isinstance(node, Call):
        args = ', '.join(expr_to_source(a) for a in node.args)
        return _wrap(node.func, precedence(node.func) < POSTFIX) + f'({args})'
    raise TypeError(f"not an expression: {type(node).__name__}")


def _block(header: str, body: List[Node]) -> str:
    lines = [header]
    for stmt in body:
        for line in stmt_to_source(stmt).split('\n'):
            lines.append(INDENT + line)
    lines.append('end')
    return '\n'.join(lines)


def stmt_to_source(node: Node) -> str:
    if isinstance(node, With):
        # a bare name before `do` would read as the alias form
        value = _wrap(node.value, isinstance(node.value, Ident))
        return f'with {node.name} as {value} do {stmt_to_source(node.body)}'
    if isinstance(node, WithAlias):
        return f'with {expr_to_source(node.target)} as {node.alias} do {stmt_to_source(node.body)}'
    if isinstance(node, Let):
        return f'let {node.name}' + (f' as {node.type_hint}' if node.type_hint else '')
    if isinstance(node, Set):
        return f'set {node.name} to {expr_to_source(node.value)}'
    if isinstance(node, If):
        text = f'if {expr_to_source(node.condition)} then {stmt_to_source(node.then_branch)}'
        if node.else_branch is not None:
            text += f' else {stmt_to_source(node.else_branch)}'
        return text
    if isinstance(node, Loop):
        return _block('loop do', node.body)
    if isinstance(node, Iter):
        return _block(f'iter {node.name} in {expr_to_source(node.iterable)} do', node.body)
    if isinstance(node, Break):
        return 'break'
    if isinstance(node, Print):
        return f'print {expr_to_source(node.expr)}'
    if isinstance(node, Prompt):
        return f'prompt "{escape_string(node.text)}" then {stmt_to_source(node.then)}'
    if isinstance(node, Using):
        return f'using {node.name} from {"/".join(node.path)}'
    if isinstance(node, Sequence):
        return ' and '.join(stmt_to_source(s) for s in node.statements)
    if isinstance(node, ExprStmt):
        return expr_to_source(node.expr)
    raise TypeError(f"not a statement: {type(node).__name__}")


def to_source(program: Program) -> str:
    return '\n'.join(stmt_to_source(stmt) for stmt in program.body) + '\n'
