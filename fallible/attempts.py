"""
Success/failure result type that captures raised exceptions.

`attempt` runs a block and wraps its return value in `Success`, or the
exception it raised in `Failure`. Combinators taking callbacks capture the
same way. Exceptions classified by `fallible.fatal.is_fatal` are never
captured: they keep propagating from whichever call raised them.
"""
from abc import ABC, abstractmethod
import attr
from attr.validators import instance_of
import logging
from pyrsistent import PVector, pvector
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from fallible.exceptions import ForwardReturned
from fallible.fatal import is_fatal

logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")


class Attempt(ABC, Generic[T]):
    """
    Either a `Success` holding a result or a `Failure` holding the
    exception that was raised instead.
    """

    as_none: "Success[None]"
    as_true: "Success[bool]"
    as_false: "Success[bool]"
    as_unit: "Success[tuple]"
    as_empty_list: "Success[PVector]"

    @staticmethod
    def of(value: bool) -> "Success[bool]":
        return Attempt.as_true if value else Attempt.as_false

    def is_success(self, predicate: Optional[Callable[[T], bool]] = None) -> bool:
        if not isinstance(self, Success):
            return False
        return True if predicate is None else predicate(self.result)

    def is_failure(
        self, predicate: Optional[Callable[[BaseException], bool]] = None
    ) -> bool:
        if not isinstance(self, Failure):
            return False
        return True if predicate is None else predicate(self.exception)

    is_error = is_failure

    @abstractmethod
    def fold(
        self, if_success: Callable[[T], R], if_failure: Callable[[BaseException], R]
    ) -> R:
        raise NotImplementedError

    def map(self, transform: Callable[[T], R]) -> "Attempt[R]":
        if self.is_success():
            return attempt(lambda: transform(self.result))
        return self

    def bind(self, transform: Callable[[T], "Attempt[R]"]) -> "Attempt[R]":
        if self.is_success():
            return run_catching(lambda: transform(self.result))
        return self

    def on_success(self, block: Callable[[T], Any]) -> "Attempt[T]":
        if self.is_success():
            block(self.result)
        return self

    def on_failure(self, block: Callable[[BaseException], Any]) -> "Attempt[T]":
        if self.is_failure():
            block(self.exception)
        return self

    def recover(self, block: Callable[[BaseException], T]) -> "Attempt[T]":
        if self.is_success():
            return self
        return attempt(lambda: block(self.exception))

    def recover_with(
        self, block: Callable[[BaseException], "Attempt[T]"]
    ) -> "Attempt[T]":
        if self.is_success():
            return self
        return run_catching(lambda: block(self.exception))

    def get_or_forward(self, block: Callable[["Failure"], Any]) -> T:
        """
        Return the result or hand the `Failure` itself to `block`.

        `block` must raise. If it returns, `ForwardReturned` is raised instead.
        """
        if self.is_success():
            return self.result
        block(self)
        raise ForwardReturned(f"get_or_forward block returned for {self!r}")

    def get_or_none(self) -> Optional[T]:
        return self.result if self.is_success() else None

    def get_or_else(self, default: T) -> T:
        return self.result if self.is_success() else default

    def get_or_compute(self, default: Callable[[BaseException], T]) -> T:
        return self.result if self.is_success() else default(self.exception)

    def or_else(self, default: Callable[[], "Attempt[T]"]) -> "Attempt[T]":
        if self.is_success():
            return self
        return run_catching(default)

    def or_raise(
        self, transform: Optional[Callable[[BaseException], BaseException]] = None
    ) -> T:
        """
        Return the result, or raise.

        Without `transform` the captured exception itself is re-raised, so
        each call extends that exception object's `__traceback__`. The
        `Failure` still holds the same object and compares and hashes as
        before. With `transform`, `transform(exception)` is raised, chained
        from it.
        """
        if self.is_success():
            return self.result
        if transform is None:
            raise self.exception
        raise transform(self.exception) from self.exception

    @staticmethod
    def sequence(attempts: Iterable["Attempt[T]"]) -> "Attempt[PVector]":
        results = []
        for item in attempts:
            if item.is_failure():
                return item
            results.append(item.result)
        return Success(pvector(results)) if results else Attempt.as_empty_list

    @staticmethod
    def traverse(
        items: Iterable[T], transform: Callable[[T], "Attempt[R]"]
    ) -> "Attempt[PVector]":
        """
        Apply `transform` to each item, left to right, stopping at the
        first `Failure` it produces.

        `transform` is not wrapped in any further capturing.
        """
        results = []
        for item in items:
            result = transform(item)
            if result.is_failure():
                return result
            results.append(result.result)
        return Success(pvector(results)) if results else Attempt.as_empty_list


@attr.s(frozen=True)
class Success(Attempt[T]):
    result: T = attr.ib()

    def fold(
        self, if_success: Callable[[T], R], if_failure: Callable[[BaseException], R]
    ) -> R:
        return if_success(self.result)


@attr.s(frozen=True)
class Failure(Attempt[Any]):
    exception: BaseException = attr.ib(validator=instance_of(BaseException))

    @exception.validator
    def check(self, attribute: attr.Attribute, value: BaseException):
        if is_fatal(value):
            raise ValueError(f"Fatal exception cannot be captured: {value!r}")

    def fold(
        self, if_success: Callable[[Any], R], if_failure: Callable[[BaseException], R]
    ) -> R:
        return if_failure(self.exception)


Attempt.as_none = Success(None)
Attempt.as_true = Success(True)
Attempt.as_false = Success(False)
Attempt.as_unit = Success(())
Attempt.as_empty_list = Success(pvector())


def _capture(exc: BaseException) -> Failure:
    logger.debug("Captured %s", type(exc).__name__, exc_info=exc)
    return Failure(exc)


def attempt(block: Callable[[], T]) -> Attempt[T]:
    """
    Run `block`, capturing any non-fatal exception it raises.
    """
    try:
        result = block()
    except BaseException as e:
        if is_fatal(e):
            logger.debug("Fatal %s escaped attempt", type(e).__name__)
            raise
        return _capture(e)
    return Success(result)


def run_catching(block: Callable[[], Attempt[T]]) -> Attempt[T]:
    """
    Run `block`, which itself returns an `Attempt`, capturing any non-fatal
    exception raised before it could return.
    """
    try:
        return block()
    except BaseException as e:
        if is_fatal(e):
            logger.debug("Fatal %s escaped run_catching", type(e).__name__)
            raise
        return _capture(e)
