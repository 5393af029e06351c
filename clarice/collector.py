"""Reclamation of Clarice heap values.

Values are ordinary Python objects, so CPython's reference counting
reclaims a value as soon as the last binding or in-flight reference to
it goes away; `Environment.pop()` clears a scope's bindings, which is
what releases a `with` value right after its statement. Cyclic garbage
is left to the `gc` module.

`Heap` observes this without taking part in it: it holds weak
references to the container values the interpreter allocates, so it can
report how many are still alive and never keeps one alive itself.
"""

import gc
import weakref
from typing import Any


class Heap:
    def __init__(self):
        self._live: 'weakref.WeakSet[Any]' = weakref.WeakSet()
        self.allocated = 0

    def track(self, value: Any) -> Any:
        self._live.add(value)
        self.allocated += 1
        return value

    def live_count(self) -> int:
        return len(self._live)

    def collect(self) -> int:
        """Run a full cycle collection and return the live container count."""
        gc.collect()
        return self.live_count()
