"""Tests for trigger classifiers."""

import pytest

from retryable.triggers import (
    ExceptionTypeTrigger,
    ExceptionValueTrigger,
    PredicateTrigger,
    error_trigger,
    values_match,
)


class TestErrorTriggerFactory:
    """Test error trigger construction."""

    def test_exception_class(self):
        trigger = error_trigger(KeyError)
        assert isinstance(trigger, ExceptionTypeTrigger)
        assert trigger.matches(KeyError("k"))
        assert not trigger.matches(IndexError())

    def test_base_exception_class(self):
        """Test non-Exception BaseException subclasses are accepted."""
        trigger = error_trigger(KeyboardInterrupt)
        assert trigger.matches(KeyboardInterrupt())

    def test_exception_instance(self):
        error = ValueError("bad")
        trigger = error_trigger(error)
        assert isinstance(trigger, ExceptionValueTrigger)
        assert trigger.matches(error)
        assert trigger.matches(ValueError("bad"))

    def test_predicate(self):
        trigger = error_trigger(lambda e: "retry" in str(e))
        assert isinstance(trigger, PredicateTrigger)
        assert trigger.matches(RuntimeError("please retry"))
        assert not trigger.matches(RuntimeError("fatal"))

    def test_repr(self):
        assert repr(error_trigger(KeyError)) == "ExceptionTypeTrigger(<class 'KeyError'>)"

    @pytest.mark.parametrize("classifier", [object, 1.5, None])
    def test_unsupported(self, classifier):
        with pytest.raises(TypeError):
            error_trigger(classifier)


class TestValuesMatch:
    """Test exact value equality."""

    @pytest.mark.parametrize(
        "observed, trigger",
        [
            (0, 0),
            (None, None),
            ("", ""),
            (b"x", b"x"),
            (True, True),
            (1.5, 1.5),
            (float("nan"), float("nan")),
        ],
    )
    def test_matching_primitives(self, observed, trigger):
        assert values_match(observed, trigger)

    @pytest.mark.parametrize(
        "observed, trigger",
        [
            (0, None),
            (None, 0),
            (False, 0),
            (1, True),
            (0.0, 0),
            ("0", 0),
            (float("nan"), 1.0),
            ([1], [1]),
            ((1,), tuple([1])),
        ],
    )
    def test_non_matching_values(self, observed, trigger):
        assert not values_match(observed, trigger)

    def test_identity(self):
        payload = [1, 2]
        assert values_match(payload, payload)
