"""Interpreter for the Clarice language.

This module walks the AST produced by `clarice.parser`. Statements go
through `execute`, which returns None or the `BREAK` signal; expressions
go through `evaluate`, which returns a value. Every operation checks the
kinds of the values it receives at the moment it runs, since Clarice
has no declared types.

Scopes follow the constructs that introduce them. A `with` body, an
`if` branch and each loop iteration run in a child scope that is popped
as soon as the construct finishes, which is what makes a `with` name
disappear after its statement.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .ast import (
    Program, With, WithAlias, Let, Set, If, Loop, Iter, Break, Print,
    Prompt, Using, Sequence, ExprStmt, Literal, Ident, BinaryOp, UnaryOp,
    ListLit, Call, Member, StringTemplate, Node
)
from .builtin_function import BuiltinFunction
from .collector import Heap
from .environment import Environment, DURABLE, TRANSIENT
from .errors import BREAK, BreakSignal, ClariceError, type_error
from .modules import ModuleObject, ModuleRegistry, default_registry
from .parser import parse_program
from .std.io import ConsoleIO
from .types import NULL, ErrorVal, ListVal, is_numeric, to_string, type_name, values_equal


ARITHMETIC_OPS = ('+', '-', '*', '/', '%')
ORDERING_OPS = ('<', '>', '<=', '>=')


class Interpreter:
    """Core interpreter that executes Clarice AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 output: Any = None, input_source: Any = None,
                 registry: Optional[ModuleRegistry] = None):
        self.global_env = Environment()
        self.registry = (registry if registry is not None else default_registry()).freeze()
        self.heap = Heap()
        console = ConsoleIO()
        self.output = output if output is not None else console
        self.input_source = input_source if input_source is not None else console
        self.loop_depth = 0
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        for stmt in program.body:
            if self.debug_level >= 1:
                self.debug(f"statement {type(stmt).__name__}")
            self.execute(stmt, env)

    def execute_block(self, statements: List[Node], env: Environment) -> Optional[BreakSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            if isinstance(result, BreakSignal):
                return result
        return None

    def execute(self, node: Node, env: Environment) -> Optional[BreakSignal]:
        if isinstance(node, Let):
            env.bind(node.name, NULL, DURABLE)
            if self.debug_level >= 2:
                self.debug(f"let {node.name} (hint {node.type_hint})")
            return None
        if isinstance(node, Set):
            value = self.evaluate(node.value, env)
            env.rebind(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"set {node.name}: {type_name(value)} = {to_string(value)}")
            return None
        if isinstance(node, With):
            value = self.evaluate(node.value, env)
            return self.execute_transient(node.name, value, node.body, env)
        if isinstance(node, WithAlias):
            target = self.evaluate(node.target, env)
            return self.execute_transient(node.alias, target, node.body, env)
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            if not isinstance(cond, bool):
                raise type_error(f'if condition must be Bool, got {type_name(cond)}')
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            branch = node.then_branch if cond else node.else_branch
            if branch is None:
                return None
            scope = env.push()
            try:
                return self.execute(branch, scope)
            finally:
                scope.pop()
        if isinstance(node, Loop):
            self.loop_depth += 1
            try:
                iteration = 0
                while True:
                    iteration += 1
                    if self.debug_level >= 3:
                        self.debug(f"loop iteration {iteration}")
                    if self.run_iteration(node.body, env) is not None:
                        return None
            finally:
                self.loop_depth -= 1
        if isinstance(node, Iter):
            items = self.iteration_items(self.evaluate(node.iterable, env))
            self.loop_depth += 1
            try:
                for item in items:
                    if self.debug_level >= 3:
                        self.debug(f"iter {node.name} = {to_string(item)}")
                    if self.run_iteration(node.body, env, node.name, item) is not None:
                        break
            finally:
                self.loop_depth -= 1
            return None
        if isinstance(node, Break):
            if self.loop_depth == 0:
                raise ClariceError(ErrorVal('ControlFlowError', 'break outside of a loop'))
            return BREAK
        if isinstance(node, Print):
            value = self.evaluate(node.expr, env)
            self.output.write(to_string(value) + '\n')
            return None
        if isinstance(node, Prompt):
            self.output.write(node.text)
            self.input_source.read_line()
            return self.execute(node.then, env)
        if isinstance(node, Using):
            module = self.registry.resolve(node.path + [node.name])
            if isinstance(env.values.get(node.name), ModuleObject):
                env.values[node.name] = module
                env.durability[node.name] = DURABLE
            else:
                env.bind(node.name, module, DURABLE)
            if self.debug_level >= 1:
                self.debug(f"using {node.name} from {'/'.join(node.path)}")
            return None
        if isinstance(node, Sequence):
            return self.execute_block(node.statements, env)
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return None
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_transient(self, name: str, value: Any, body: Node, env: Environment) -> Optional[BreakSignal]:
        scope = env.push()
        scope.bind(name, value, TRANSIENT)
        if self.debug_level >= 2:
            self.debug(f"with {name}: {type_name(value)}")
        try:
            return self.execute(body, scope)
        finally:
            scope.pop()
            if self.debug_level >= 2:
                self.debug(f"released {name}")

    def run_iteration(self, body: List[Node], env: Environment,
                      name: Optional[str] = None, item: Any = None) -> Optional[BreakSignal]:
        scope = env.push()
        if name is not None:
            scope.bind(name, item, TRANSIENT)
        try:
            return self.execute_block(body, scope)
        finally:
            scope.pop()

    def iteration_items(self, value: Any) -> List[Any]:
        if isinstance(value, str):
            return list(value)
        if isinstance(value, ListVal):
            return list(value.items)
        if isinstance(value, int) and not isinstance(value, bool):
            return list(range(value))
        raise type_error(f'cannot iterate over {type_name(value)}')

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            if node.literal_type == 'Null':
                return NULL
            return node.value
        if isinstance(node, Ident):
            return env.lookup(node.name)
        if isinstance(node, StringTemplate):
            return ''.join(part if isinstance(part, str) else to_string(self.evaluate(part, env))
                           for part in node.parts)
        if isinstance(node, ListLit):
            return self.heap.track(ListVal([self.evaluate(el, env) for el in node.elements]))
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op == '-' and is_numeric(operand):
                return -operand
            raise type_error(f'unary {node.op} expects Int or Float, got {type_name(operand)}')
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Member):
            target = self.evaluate(node.target, env)
            if not isinstance(target, ModuleObject):
                raise type_error(f'cannot access member {node.name} on {type_name(target)}')
            return target.member(node.name)
        if isinstance(node, Call):
            func = self.evaluate(node.func, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(func, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any]) -> Any:
        if not isinstance(func, BuiltinFunction):
            raise type_error(f'{type_name(func)} is not callable')
        if func.arity is not None and len(args) != func.arity:
            raise type_error(f"{func.name} expects {func.arity} arguments, got {len(args)}")
        if self.debug_level >= 4:
            self.debug(f"call {func.name}({', '.join(type_name(a) for a in args)})")
        return self.from_host(func.invoke(args))

    def from_host(self, value: Any) -> Any:
        # host callables may hand back plain Python values
        if value is None:
            return NULL
        if isinstance(value, (list, tuple)):
            value = ListVal([self.from_host(item) for item in value])
        if isinstance(value, ListVal):
            self.heap.track(value)
        return value

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op in ARITHMETIC_OPS:
            if not (is_numeric(a) and is_numeric(b)):
                raise type_error(f'unsupported {op} for {type_name(a)} and {type_name(b)}')
            try:
                return self.apply_arithmetic(op, a, b)
            except OverflowError:
                raise ClariceError(ErrorVal('ArithmeticError', f'result of {op} is too large')) from None
        if op == '..':
            for operand in (a, b):
                if not isinstance(operand, (str, int, float)):
                    raise type_error(f'cannot concatenate {type_name(operand)}')
            return to_string(a) + to_string(b)
        if op == '=':
            return values_equal(a, b)
        if op == '!=':
            return not values_equal(a, b)
        if op in ORDERING_OPS:
            if not ((is_numeric(a) and is_numeric(b)) or (isinstance(a, str) and isinstance(b, str))):
                raise type_error(f'comparison not supported for {type_name(a)} and {type_name(b)}')
            if op == '<':
                return a < b
            if op == '>':
                return a > b
            if op == '<=':
                return a <= b
            return a >= b
        raise type_error(f'unknown operator {op}')

    def apply_arithmetic(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if b == 0:
            raise ClariceError(ErrorVal('ArithmeticError', 'division by zero' if op == '/' else 'modulo by zero'))
        if op == '/':
            # Int / Int stays an Int only when nothing would be lost
            if isinstance(a, int) and isinstance(b, int) and a % b == 0:
                return a // b
            return a / b
        return a % b


def run_program(source: str, **kwargs) -> Interpreter:
    """Convenience function to parse and run a Clarice program from a source string."""
    program = parse_program(source)
    with Interpreter(**kwargs) as interpreter:
        interpreter.run(program)
    return interpreter


def run_file(file_path: str, **kwargs) -> Interpreter:
    """Parse and run a .clrs file against a fresh top-level scope."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, **kwargs)
