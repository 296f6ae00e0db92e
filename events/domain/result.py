"""Discriminated success/failure outcome for validation-style operations."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from events.domain.errors import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: DomainError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
