import pytest

from fallible.fatal import fatal_exceptions


class Halt(Exception):
    """
    Stand-in for an environment-specific unrecoverable condition.
    """

    pass


class Calls:
    """
    Records the argument of every call made through `record`.
    """

    def __init__(self):
        self.args = []

    def record(self, result=None):
        def _record(arg=None):
            self.args.append(arg)
            return result

        return _record

    @property
    def count(self) -> int:
        return len(self.args)


def _never(*args):
    raise AssertionError(f"Callback should not have been called with {args!r}")


@pytest.fixture
def calls() -> Calls:
    return Calls()


@pytest.fixture
def never():
    return _never


@pytest.fixture
def halt():
    """
    `Halt` registered as fatal for the duration of a test.
    """
    with fatal_exceptions(Halt):
        yield Halt
