"""Module objects and the registry behind `using NAME from PATH`.

A module is a named bag of members: callables (`BuiltinFunction`) or
nested modules. The registry is a tree of modules rooted at an unnamed
package; `register('Clarice/Extra/Markdown', module)` creates the
`Clarice` and `Extra` packages on the way down. Hosts add their own
capabilities with `register` before handing the registry to an
interpreter, which freezes it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from clarice.errors import ClariceError, name_error
from clarice.types import ErrorVal


@dataclass(eq=False)
class ModuleObject:
    name: str
    members: Dict[str, Any] = field(default_factory=dict)

    def member(self, name: str) -> Any:
        if name in self.members:
            return self.members[name]
        raise name_error(f'module {self.name} has no member {name}')

    def __repr__(self) -> str:
        return f"<module {self.name}>"


def split_path(path: Union[str, List[str]]) -> List[str]:
    if isinstance(path, str):
        segments = [seg for seg in path.split('/') if seg]
    else:
        segments = list(path)
    if not segments:
        raise ValueError('empty module path')
    return segments


class ModuleRegistry:
    def __init__(self):
        self.root = ModuleObject('')
        self.frozen = False

    def register(self, path: Union[str, List[str]], module: Any) -> Any:
        if self.frozen:
            raise RuntimeError('module registry is frozen; register modules before running scripts')
        segments = split_path(path)
        package = self.root
        for seg in segments[:-1]:
            existing = package.members.get(seg)
            if existing is None:
                existing = ModuleObject(seg)
                package.members[seg] = existing
            elif not isinstance(existing, ModuleObject):
                raise ValueError(f'{seg} in {"/".join(segments)} is not a module')
            package = existing
        package.members[segments[-1]] = module
        return module

    def resolve(self, path: Union[str, List[str]]) -> Any:
        segments = split_path(path)
        node: Any = self.root
        for seg in segments:
            member = node.members.get(seg) if isinstance(node, ModuleObject) else None
            if member is None:
                raise ClariceError(ErrorVal('ModuleNotFoundError', f'no module named {"/".join(segments)}'))
            node = member
        return node

    def freeze(self) -> 'ModuleRegistry':
        self.frozen = True
        return self


def default_registry() -> ModuleRegistry:
    """Build a registry holding the standard Clarice modules."""
    from clarice.std import populate_standard_modules
    registry = ModuleRegistry()
    populate_standard_modules(registry)
    return registry
