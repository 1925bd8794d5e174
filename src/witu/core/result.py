"""
Outcome values for output sinks.

Saving a file or copying to the clipboard can be refused by the host.
Such a refusal is shown to the user as a passing notice, so sinks hand
back an Ok or an Err instead of raising, and a failed write never
reaches the loaded graph or the view state.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .exceptions import SinkError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The write went through; value is what was written to (a path, the copied text)."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self):
        raise ValueError(f"Write succeeded, no error to report: {self.value}")


@dataclass(frozen=True)
class Err(Generic[E]):
    """The write was refused; error says where and why."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Write was refused: {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]

# What every sink returns
SinkResult = Union[Ok[T], Err[SinkError]]


def then(result: SinkResult, action: Callable[[T], U]) -> SinkResult:
    """
    Run a follow-up step only after a successful write.

    The follow-up sees the written value and its return value becomes the
    new Ok. A refused write is passed through untouched.
    """
    if result.is_err():
        return result
    return Ok(action(result.value))
