"""Program states: total maps from variable names to integers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class State:
    """Persistent variable store.

    Every name has a value; names without a binding read as 0. Updates
    return a new State and leave the receiver untouched. Bindings are kept
    sorted with zero entries dropped, so two states are equal exactly when
    they agree on every variable.
    """

    bindings: tuple[tuple[str, int], ...] = ()

    def __post_init__(self) -> None:
        normalized = tuple(sorted((name, value) for name, value in dict(self.bindings).items() if value != 0))
        object.__setattr__(self, "bindings", normalized)
        object.__setattr__(self, "_index", dict(normalized))

    @staticmethod
    def empty() -> "State":
        """The state mapping every variable to 0."""
        return State()

    @staticmethod
    def of(values: Mapping[str, int] | None = None, /, **kwargs: int) -> "State":
        """Build a state from a mapping and/or keyword bindings.

        Example: State.of(X=5) or State.of({"X": 5}).
        """
        merged = dict(values or {})
        merged.update(kwargs)
        return State(tuple(merged.items()))

    def lookup(self, name: str) -> int:
        return self._index.get(name, 0)

    def update(self, name: str, value: int) -> "State":
        """Return a new state with name bound to value."""
        merged = dict(self._index)
        merged[name] = value
        return State(tuple(merged.items()))

    def __getitem__(self, name: str) -> int:
        return self.lookup(name)

    def __iter__(self) -> Iterator[str]:
        """Iterate over variables with a non-zero value."""
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def as_dict(self) -> dict[str, int]:
        return dict(self._index)

    def __str__(self) -> str:
        inner = ", ".join(f"{name}={value}" for name, value in self.bindings)
        return f"{{{inner}}}"
