from fallible.attempts import Attempt, attempt, run_catching
from fallible.exceptions import ForwardReturned
from fallible.fatal import (
    fatal_exceptions,
    fatal_types,
    is_fatal,
    register_fatal,
    unregister_fatal,
)
from fallible.outcome import Outcome, error, success

# Variants live in their own modules: `fallible.outcome.Success`,
# `fallible.outcome.Error`, `fallible.attempts.Success`,
# `fallible.attempts.Failure`.
__all__ = [
    "Attempt",
    "ForwardReturned",
    "Outcome",
    "attempt",
    "error",
    "fatal_exceptions",
    "fatal_types",
    "is_fatal",
    "register_fatal",
    "run_catching",
    "success",
    "unregister_fatal",
]
