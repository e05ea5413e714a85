"""Fixed-capacity variable table.

The table has ``capacity`` slots but only the first ``len(table)`` of them
are active. Reserved slots (name ``None``) sit in the active range so their
index evaluates to ``0.0``, but no name ever resolves to them. The table never
grows: ``update`` only changes entries that already exist.

Slot 0 is the time variable read by ``step()``.
"""
import logging
import math
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10

DEFAULT_ENTRIES: list[tuple[Optional[str], float]] = [
    ("t", 0.0),
    ("T", 0.0),
    ("e", math.e),
    ("pi", math.pi),
    (None, 0.0),
]


class VariableTable:
    def __init__(
        self,
        entries: Iterable[tuple[Optional[str], float]] = DEFAULT_ENTRIES,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._initial = [(name, float(value)) for name, value in entries]
        if len(self._initial) > capacity:
            raise ValueError(f"{len(self._initial)} entries do not fit into {capacity} slots")
        self.capacity = capacity
        self._names: list[Optional[str]] = []
        self._values: list[float] = []
        self.reset()

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __repr__(self) -> str:
        active = ", ".join(f"{name}={value!r}" for name, value in zip(self._names, self._values) if name is not None)
        return f"VariableTable({active}; {len(self)}/{self.capacity} slots)"

    def names(self) -> list[str]:
        return [name for name in self._names if name is not None]

    def lookup(self, name: str) -> Optional[int]:
        for idx, slot_name in enumerate(self._names):
            if slot_name is not None and slot_name == name:
                return idx
        return None

    def update(self, name: str, value: float) -> Optional[int]:
        idx = self.lookup(name)
        if idx is None:
            logger.debug("Ignoring update of unknown variable %r", name)
            return None
        self._values[idx] = float(value)
        return idx

    def value_at(self, idx: int) -> Optional[float]:
        if 0 <= idx < len(self._values):
            return self._values[idx]
        return None

    def reset(self) -> None:
        """Restores every slot to the value it was constructed with"""
        self._names = [name for name, _ in self._initial]
        self._values = [value for _, value in self._initial]


DEFAULT_VARIABLES = VariableTable()


def set_variable(name: str, value: float, variables: Optional[VariableTable] = None) -> Optional[int]:
    table = variables if variables is not None else DEFAULT_VARIABLES
    return table.update(name, value)
