"""
Classification of exceptions that must never be captured.

Every catching operation in `fallible.attempts` consults `is_fatal` before
wrapping an exception into a `Failure`. Fatal exceptions are re-raised as is.

Classified fatal:
    - any `BaseException` that is not an `Exception` (`KeyboardInterrupt`,
      `SystemExit`, `GeneratorExit`, `asyncio.CancelledError`);
    - `MemoryError` and `RecursionError`;
    - any type added with `register_fatal`.
"""
import contextlib
import logging
from pyrsistent import PMap, PSet, pmap, pset
import threading
from typing import Iterator, Type

logger = logging.getLogger(__name__)

DEFAULT_FATAL_TYPES: PSet = pset([MemoryError, RecursionError])

_registry: PSet = DEFAULT_FATAL_TYPES
# Types added by open `fatal_exceptions` blocks, with the number of blocks
# holding each one.
_scoped: PMap = pmap()
# Writers only; readers see whichever immutable set is currently bound.
_lock = threading.Lock()


def is_fatal(exc: BaseException) -> bool:
    if not isinstance(exc, Exception):
        return True
    return isinstance(exc, tuple(_registry))


def fatal_types() -> PSet:
    return _registry


def _check_type(exc_type: Type[BaseException]):
    if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
        raise TypeError(f"Not an exception type: {exc_type!r}")


def register_fatal(exc_type: Type[BaseException]):
    global _registry
    _check_type(exc_type)
    with _lock:
        _registry = _registry.add(exc_type)
    logger.debug("Registered fatal exception type: %s", exc_type.__name__)


def unregister_fatal(exc_type: Type[BaseException]):
    global _registry
    with _lock:
        # KeyError if it was never registered.
        _registry = _registry.remove(exc_type)
    logger.debug("Unregistered fatal exception type: %s", exc_type.__name__)


def _hold(exc_types) -> list:
    global _registry, _scoped
    held = []
    with _lock:
        for exc_type in exc_types:
            if exc_type in _scoped:
                _scoped = _scoped.set(exc_type, _scoped[exc_type] + 1)
            elif exc_type not in _registry:
                _scoped = _scoped.set(exc_type, 1)
                _registry = _registry.add(exc_type)
            else:
                continue
            held.append(exc_type)
    return held


def _release(held: list):
    global _registry, _scoped
    with _lock:
        for exc_type in held:
            count = _scoped[exc_type] - 1
            if count:
                _scoped = _scoped.set(exc_type, count)
            else:
                _scoped = _scoped.remove(exc_type)
                _registry = _registry.discard(exc_type)


@contextlib.contextmanager
def fatal_exceptions(*exc_types: Type[BaseException]) -> Iterator[PSet]:
    """
    Treat `exc_types` as fatal for the duration of the block.

    Types that were already registered stay registered on exit. A type added
    by overlapping blocks stays registered until the last of them exits.
    """
    for exc_type in exc_types:
        _check_type(exc_type)
    held = _hold(dict.fromkeys(exc_types))
    logger.debug("Holding fatal exception types: %s", [t.__name__ for t in held])
    try:
        yield fatal_types()
    finally:
        _release(held)
