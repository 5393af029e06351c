from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass(eq=False)
class BuiltinFunction:
    """A callable Clarice value (the Closure kind).

    `fn` receives the evaluated argument list. `arity` of None means the
    function checks its own arguments.
    """
    name: str
    arity: Optional[int]
    fn: Callable[[List[Any]], Any]

    def invoke(self, args: List[Any]) -> Any:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<function {self.name}>"
