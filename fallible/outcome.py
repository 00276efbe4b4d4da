"""
Success/error result type that never catches exceptions.

Errors are ordinary values carried by the `Error` variant. Exceptions raised
by any callback passed to an `Outcome` combinator propagate to the caller
unchanged.
"""
from abc import ABC, abstractmethod
import attr
from pyrsistent import PVector, pvector
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from fallible.exceptions import ForwardReturned

E = TypeVar("E")
R = TypeVar("R")
T = TypeVar("T")


class Outcome(ABC, Generic[T, E]):
    """
    Either a `Success` holding a value or an `Error` holding a cause.

    Combinators that receive a callback invoke it at most once, and only
    for the variant they act on.
    """

    as_none: "Success[None]"
    as_true: "Success[bool]"
    as_false: "Success[bool]"
    as_unit: "Success[tuple]"
    as_empty_list: "Success[PVector]"

    @staticmethod
    def of(value: bool) -> "Success[bool]":
        return Outcome.as_true if value else Outcome.as_false

    def is_success(self, predicate: Optional[Callable[[T], bool]] = None) -> bool:
        if not isinstance(self, Success):
            return False
        return True if predicate is None else predicate(self.value)

    def is_error(self, predicate: Optional[Callable[[E], bool]] = None) -> bool:
        if not isinstance(self, Error):
            return False
        return True if predicate is None else predicate(self.cause)

    @abstractmethod
    def fold(self, if_success: Callable[[T], R], if_error: Callable[[E], R]) -> R:
        raise NotImplementedError

    def map(self, transform: Callable[[T], R]) -> "Outcome[R, E]":
        return self.bind(lambda value: Success(transform(value)))

    def bind(self, transform: Callable[[T], "Outcome[R, E]"]) -> "Outcome[R, E]":
        return transform(self.value) if self.is_success() else self

    def map_error(self, transform: Callable[[E], R]) -> "Outcome[T, R]":
        return self if self.is_success() else Error(transform(self.cause))

    def on_success(self, block: Callable[[T], Any]) -> "Outcome[T, E]":
        if self.is_success():
            block(self.value)
        return self

    def on_error(self, block: Callable[[E], Any]) -> "Outcome[T, E]":
        if self.is_error():
            block(self.cause)
        return self

    def recover(self, block: Callable[[E], T]) -> "Outcome[T, E]":
        """
        Replace an error with a success built from its cause.

        A `Success` is returned as the same instance.
        """
        return self if self.is_success() else Success(block(self.cause))

    def recover_with(self, block: Callable[[E], "Outcome[T, E]"]) -> "Outcome[T, E]":
        return self if self.is_success() else block(self.cause)

    def get_or_forward(self, block: Callable[["Error[E]"], Any]) -> T:
        """
        Return the success value or hand the `Error` itself to `block`.

        `block` must raise. If it returns, `ForwardReturned` is raised instead.
        """
        if self.is_success():
            return self.value
        block(self)
        raise ForwardReturned(f"get_or_forward block returned for {self!r}")

    def get_or_none(self) -> Optional[T]:
        return self.value if self.is_success() else None

    def get_or_else(self, default: T) -> T:
        return self.value if self.is_success() else default

    def get_or_compute(self, default: Callable[[E], T]) -> T:
        return self.value if self.is_success() else default(self.cause)

    def or_else(self, default: Callable[[], "Outcome[T, E]"]) -> "Outcome[T, E]":
        return self if self.is_success() else default()

    def or_raise(self, exception_builder: Callable[[E], BaseException]) -> T:
        if self.is_success():
            return self.value
        raise exception_builder(self.cause)

    def for_each(self, block: Callable[[T], Any]) -> None:
        if self.is_success():
            block(self.value)

    def merge(self: "Outcome[T, T]") -> T:
        return self.value if self.is_success() else self.cause

    @staticmethod
    def sequence(outcomes: Iterable["Outcome[T, E]"]) -> "Outcome[PVector, E]":
        """
        Collect the values of `outcomes` in order.

        Returns the first `Error` encountered without consuming the rest of
        the iterable.
        """
        values = []
        for item in outcomes:
            if item.is_error():
                return item
            values.append(item.value)
        return Success(pvector(values)) if values else Outcome.as_empty_list

    @staticmethod
    def traverse(
        items: Iterable[T], transform: Callable[[T], "Outcome[R, E]"]
    ) -> "Outcome[PVector, E]":
        """
        Apply `transform` to each item, left to right, stopping at the
        first `Error` it produces.
        """
        values = []
        for item in items:
            result = transform(item)
            if result.is_error():
                return result
            values.append(result.value)
        return Success(pvector(values)) if values else Outcome.as_empty_list


@attr.s(frozen=True)
class Success(Outcome[T, Any]):
    value: T = attr.ib()

    def fold(self, if_success: Callable[[T], R], if_error: Callable[[Any], R]) -> R:
        return if_success(self.value)


@attr.s(frozen=True)
class Error(Outcome[Any, E]):
    cause: E = attr.ib()

    def fold(self, if_success: Callable[[Any], R], if_error: Callable[[E], R]) -> R:
        return if_error(self.cause)


Outcome.as_none = Success(None)
Outcome.as_true = Success(True)
Outcome.as_false = Success(False)
Outcome.as_unit = Success(())
Outcome.as_empty_list = Success(pvector())


def success(value: T) -> Success[T]:
    return Success(value)


def error(cause: E) -> Error[E]:
    return Error(cause)
