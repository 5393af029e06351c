"""Abstract Syntax Tree (AST) definitions for the Clarice language.

The AST classes defined in this module represent the syntactic structure
of parsed Clarice programs. They are produced by `clarice.parser` and
walked by the interpreter. Each node corresponds to a construct in the
Clarice grammar. Nodes compare structurally, which the parser tests and
the printer round trip rely on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


# Statements

@dataclass
class With(Node):
    """`with NAME as EXPR STMT`: NAME lives only while STMT runs."""
    name: str
    value: Node
    body: Node


@dataclass
class WithAlias(Node):
    """`with EXPR as NAME do STMT`: NAME refers to the object EXPR names."""
    target: Node
    alias: str
    body: Node


@dataclass
class Let(Node):
    name: str
    type_hint: Optional[str] = None  # accepted, never checked


@dataclass
class Set(Node):
    name: str
    value: Node


@dataclass
class If(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node]


@dataclass
class Loop(Node):
    body: List[Node]


@dataclass
class Iter(Node):
    name: str
    iterable: Node
    body: List[Node]


@dataclass
class Break(Node):
    pass


@dataclass
class Print(Node):
    expr: Node


@dataclass
class Prompt(Node):
    text: str
    then: Node


@dataclass
class Using(Node):
    name: str
    path: List[str]


@dataclass
class Sequence(Node):
    """Statements joined with `and`, run one after another."""
    statements: List[Node]


@dataclass
class ExprStmt(Node):
    expr: Node


# Expressions

@dataclass
class Literal(Node):
    value: Any
    literal_type: str  # 'Int', 'Float', 'String', 'Bool', 'Null'


@dataclass
class Ident(Node):
    name: str


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass
class ListLit(Node):
    elements: List[Node]


@dataclass
class Call(Node):
    func: Node
    args: List[Node]


@dataclass
class Member(Node):
    target: Node
    name: str


@dataclass
class StringTemplate(Node):
    """A string with `{name}` placeholders.

    `parts` alternates freely between plain strings and the Ident/Member
    nodes of the placeholders, in source order.
    """
    parts: List[Union[str, Node]]
