"""JSON serialization/deserialization for Clarice AST.

This module converts between Clarice AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types; the CLI uses it for `--emit-ast` and
`--ast`.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    With,
    WithAlias,
    Let,
    Set,
    If,
    Loop,
    Iter,
    Break,
    Print,
    Prompt,
    Using,
    Sequence,
    ExprStmt,
    Literal,
    Ident,
    BinaryOp,
    UnaryOp,
    ListLit,
    Call,
    Member,
    StringTemplate,
)


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, float, str, bool)):
        return node

    # Statements
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, With):
        return {"type": "With", "name": node.name, "value": ast_to_obj(node.value), "body": ast_to_obj(node.body)}
    if isinstance(node, WithAlias):
        return {
            "type": "WithAlias",
            "target": ast_to_obj(node.target),
            "alias": node.alias,
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Let):
        return {"type": "Let", "name": node.name, "type_hint": node.type_hint}
    if isinstance(node, Set):
        return {"type": "Set", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Loop):
        return {"type": "Loop", "body": [ast_to_obj(s) for s in node.body]}
    if isinstance(node, Iter):
        return {
            "type": "Iter",
            "name": node.name,
            "iterable": ast_to_obj(node.iterable),
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, Break):
        return {"type": "Break"}
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Prompt):
        return {"type": "Prompt", "text": node.text, "then": ast_to_obj(node.then)}
    if isinstance(node, Using):
        return {"type": "Using", "name": node.name, "path": list(node.path)}
    if isinstance(node, Sequence):
        return {"type": "Sequence", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value), "literal_type": node.literal_type}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, ListLit):
        return {"type": "ListLit", "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, Call):
        return {"type": "Call", "func": ast_to_obj(node.func), "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, Member):
        return {"type": "Member", "target": ast_to_obj(node.target), "name": node.name}
    if isinstance(node, StringTemplate):
        return {"type": "StringTemplate", "parts": [ast_to_obj(p) for p in node.parts]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "With":
        return With(name=obj["name"], value=ast_from_obj(obj["value"]), body=ast_from_obj(obj["body"]))
    if t == "WithAlias":
        return WithAlias(target=ast_from_obj(obj["target"]), alias=obj["alias"], body=ast_from_obj(obj["body"]))
    if t == "Let":
        return Let(name=obj["name"], type_hint=obj.get("type_hint"))
    if t == "Set":
        return Set(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "If":
        return If(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "Loop":
        return Loop(body=[ast_from_obj(s) for s in obj["body"]])
    if t == "Iter":
        return Iter(
            name=obj["name"],
            iterable=ast_from_obj(obj["iterable"]),
            body=[ast_from_obj(s) for s in obj["body"]],
        )
    if t == "Break":
        return Break()
    if t == "Print":
        return Print(expr=ast_from_obj(obj["expr"]))
    if t == "Prompt":
        return Prompt(text=obj["text"], then=ast_from_obj(obj["then"]))
    if t == "Using":
        return Using(name=obj["name"], path=list(obj["path"]))
    if t == "Sequence":
        return Sequence(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Literal":
        return Literal(value=ast_from_obj(obj["value"]), literal_type=obj["literal_type"])
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "ListLit":
        return ListLit(elements=[ast_from_obj(e) for e in obj["elements"]])
    if t == "Call":
        return Call(func=ast_from_obj(obj["func"]), args=[ast_from_obj(a) for a in obj["args"]])
    if t == "Member":
        return Member(target=ast_from_obj(obj["target"]), name=obj["name"])
    if t == "StringTemplate":
        return StringTemplate(parts=[ast_from_obj(p) for p in obj["parts"]])

    raise ValueError(f"Unknown AST node type: {t}")
