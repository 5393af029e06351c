from typing import Any, Dict, List, Optional
from clarice.errors import name_error


TRANSIENT = 'transient'
DURABLE = 'durable'


class Environment:
    """One scope of the scope chain, mapping names to values and durability.

    `with` bodies, `if` branches and every loop iteration get a child
    scope via `push()`; the construct calls `pop()` when it finishes,
    which drops every binding the scope holds so their values can be
    reclaimed. The parent is only consulted for lookups and `set`.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        self.durability: Dict[str, str] = {}

    def lookup(self, name: str) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise name_error(f'undefined variable {name}')

    def bind(self, name: str, value: Any, durability: str = DURABLE):
        if name in self.values:
            raise name_error(f'variable {name} already declared in this scope')
        self.values[name] = value
        self.durability[name] = durability

    def rebind(self, name: str, value: Any):
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return
            env = env.parent
        raise name_error(f'cannot set {name}: it was never declared with let')

    def push(self) -> 'Environment':
        return Environment(parent=self)

    def pop(self) -> Optional['Environment']:
        self.values.clear()
        self.durability.clear()
        return self.parent

    def names(self) -> List[str]:
        seen: Dict[str, None] = {}
        env: Optional[Environment] = self
        while env is not None:
            for name in env.values:
                seen.setdefault(name, None)
            env = env.parent
        return sorted(seen)
