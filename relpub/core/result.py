"""Result type for explicit error handling.

Everything that decides *what* to publish (workspace detection, config
resolution, group filtering, eligibility) reports expected failures as
values instead of raising:

    def resolve(name: str) -> Result[ProjectNode, ConfigError]:
        node = graph.nodes.get(name)
        if node is None:
            return Err(ConfigError(f"unknown project: {name}"))
        return Ok(node)

    match resolve("pkg-a"):
        case Ok(node):
            print(node.root)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeGuard


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying ``value``."""

    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying ``error``."""

    error: E

    def unwrap(self) -> object:
        raise ValueError(f"unwrap() on Err: {self.error!r}")


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
