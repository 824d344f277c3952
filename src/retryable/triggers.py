"""Trigger classifiers deciding which outcomes qualify for a retry."""

import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

# Returns of these types are compared by value, everything else by identity.
PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)

ErrorClassifier = type[BaseException] | BaseException | Callable[[BaseException], bool]


class ErrorTrigger(ABC):
    """Abstract base class for error triggers."""

    def __init__(self, classifier: Any):
        self.classifier = classifier

    @abstractmethod
    def matches(self, error: BaseException) -> bool:
        """Return True if the raised error qualifies for a retry."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.classifier!r})"


class ExceptionTypeTrigger(ErrorTrigger):
    """Matches instances of an exception class, subclasses included."""

    def matches(self, error: BaseException) -> bool:
        return isinstance(error, self.classifier)


class ExceptionValueTrigger(ErrorTrigger):
    """Matches one exception object or a structurally equal one.

    Structural equality means the same concrete type, equal ``args`` and
    equal instance attributes.
    """

    def matches(self, error: BaseException) -> bool:
        expected = self.classifier
        if error is expected:
            return True
        if type(error) is not type(expected):
            return False
        return error.args == expected.args and vars(error) == vars(expected)


class PredicateTrigger(ErrorTrigger):
    """Delegates the decision to a caller supplied predicate."""

    def matches(self, error: BaseException) -> bool:
        return bool(self.classifier(error))


def error_trigger(classifier: ErrorClassifier) -> ErrorTrigger:
    """Build the trigger matching the kind of classifier given.

    Args:
        classifier: Exception class, exception instance or predicate

    Returns:
        Error trigger wrapping the classifier

    Raises:
        TypeError: If the classifier is none of the supported kinds
    """
    if isinstance(classifier, type):
        if not issubclass(classifier, BaseException):
            raise TypeError(
                f"Error trigger class must derive from BaseException: {classifier!r}"
            )
        return ExceptionTypeTrigger(classifier)
    if isinstance(classifier, BaseException):
        return ExceptionValueTrigger(classifier)
    if callable(classifier):
        return PredicateTrigger(classifier)
    raise TypeError(f"Unsupported error trigger: {classifier!r}")


def values_match(observed: Any, trigger: Any) -> bool:
    """Exact equality between a returned value and a value trigger.

    Primitives compare by value and must share the same type, so ``None``,
    ``0``, ``False`` and ``""`` stay distinct. NaN matches NaN. Any other
    value only matches itself.
    """
    if observed is trigger:
        return True
    if type(observed) is not type(trigger) or not isinstance(
        observed, PRIMITIVE_TYPES
    ):
        return False
    if isinstance(observed, float) and math.isnan(observed):
        return math.isnan(trigger)
    return bool(observed == trigger)
