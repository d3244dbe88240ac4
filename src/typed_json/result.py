"""Success/failure container returned by the JSON adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True, slots=True)
class Ok[V]:
    """A successful outcome holding ``value``."""

    value: V

    @property
    def is_ok(self) -> Literal[True]:
        return True

    @property
    def is_err(self) -> Literal[False]:
        return False

    def to_value[D](self, default: D) -> Union[V, D]:
        """Return the held value; ``default`` is ignored."""
        del default
        return self.value

    def to_optional(self) -> Optional[V]:
        """Return the held value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed outcome holding ``error``."""

    error: E

    @property
    def is_ok(self) -> Literal[False]:
        return False

    @property
    def is_err(self) -> Literal[True]:
        return True

    def to_value[D](self, default: D) -> D:
        """Return ``default`` since there is no value to extract."""
        return default

    def to_optional(self) -> None:
        """Return ``None`` since there is no value to extract."""
        return None


type Result[E, V] = Union[Err[E], Ok[V]]
