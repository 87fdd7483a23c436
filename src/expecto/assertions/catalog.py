"""Built-in predicates (null checks, types, equality, collections, exceptions)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Iterable

from expecto.assertions.base import Verdict
from expecto.formatting import format_value, type_name

if TYPE_CHECKING:
    from expecto.subject import Block, Subject


def _found(value: Any) -> str:
    return f"found {format_value(value)}"


def _elements(values: tuple[Any, ...]) -> str:
    if len(values) == 1:
        return format_value(values[0])
    return format_value(list(values))


def _first(value: Iterable[Any]) -> Any:
    for element in value:
        return element
    raise IndexError("subject has no first element: it is empty")


class CatalogMixin:
    """Assertion methods available on every Subject.

    Each method is built from the generic ``assert_that`` / ``assert_`` /
    ``get`` / ``compose`` primitives and phrases itself for both polarities.
    """

    # --- null and type ---

    def is_null(self) -> Subject:
        return self.assert_that(("is None", "is not None"), lambda v: v is None)

    def is_not_null(self) -> Subject:
        return self.assert_that(("is not None", "is None"), lambda v: v is not None)

    def is_a(self, expected_type: type | tuple[type, ...]) -> Subject:
        name = type_name(expected_type)

        def test(value: Any) -> Verdict:
            if isinstance(value, expected_type):
                return Verdict.pass_()
            if value is None:
                return Verdict.fail("found None")
            return Verdict.fail(f"found {type_name(type(value))}")

        return self.assert_(
            (f"is an instance of {name}", f"is not an instance of {name}"), test
        )

    # --- equality and identity ---

    def is_equal_to(self, expected: Any) -> Subject:
        shown = format_value(expected)

        def test(value: Any) -> Verdict:
            if value == expected:
                return Verdict.pass_()
            return Verdict.fail(_found(value))

        return self.assert_((f"is equal to {shown}", f"is not equal to {shown}"), test)

    def is_not_equal_to(self, expected: Any) -> Subject:
        shown = format_value(expected)
        return self.assert_that(
            (f"is not equal to {shown}", f"is equal to {shown}"),
            lambda v: v != expected,
        )

    def is_same_instance_as(self, expected: Any) -> Subject:
        shown = format_value(expected)

        def test(value: Any) -> Verdict:
            if value is expected:
                return Verdict.pass_()
            return Verdict.fail(_found(value))

        return self.assert_(f"is the same instance as {shown}", test)

    def is_true(self) -> Subject:
        return self.assert_(
            "is True", lambda v: Verdict.pass_() if v is True else Verdict.fail(_found(v))
        )

    def is_false(self) -> Subject:
        return self.assert_(
            "is False", lambda v: Verdict.pass_() if v is False else Verdict.fail(_found(v))
        )

    # --- ordering ---

    def _compare(self, phrase: str, expected: Any, op: Callable[[Any, Any], bool]) -> Subject:
        def test(value: Any) -> Verdict:
            if op(value, expected):
                return Verdict.pass_()
            return Verdict.fail(_found(value))

        return self.assert_(f"is {phrase} {format_value(expected)}", test)

    def is_greater_than(self, expected: Any) -> Subject:
        return self._compare("greater than", expected, lambda a, b: a > b)

    def is_greater_than_or_equal_to(self, expected: Any) -> Subject:
        return self._compare("greater than or equal to", expected, lambda a, b: a >= b)

    def is_less_than(self, expected: Any) -> Subject:
        return self._compare("less than", expected, lambda a, b: a < b)

    def is_less_than_or_equal_to(self, expected: Any) -> Subject:
        return self._compare("less than or equal to", expected, lambda a, b: a <= b)

    # --- collections and strings ---

    def is_in(self, collection: Any) -> Subject:
        return self.assert_that(f"is in {format_value(collection)}", lambda v: v in collection)

    def contains(self, *elements: Any) -> Subject:
        if not elements:
            raise ValueError("contains() needs at least one element")

        def test(value: Any) -> Verdict:
            missing = tuple(e for e in elements if e not in value)
            if not missing:
                return Verdict.pass_()
            return Verdict.fail(f"missing {_elements(missing)}")

        return self.assert_(f"contains {_elements(elements)}", test)

    def is_empty(self) -> Subject:
        return self.assert_(
            ("is empty", "is not empty"),
            lambda v: Verdict.pass_() if len(v) == 0 else Verdict.fail(_found(v)),
        )

    def is_not_empty(self) -> Subject:
        return self.assert_that(("is not empty", "is empty"), lambda v: len(v) > 0)

    def has_length(self, expected: int) -> Subject:
        def test(value: Any) -> Verdict:
            actual = len(value)
            if actual == expected:
                return Verdict.pass_()
            return Verdict.fail(f"found length {actual}")

        return self.assert_(f"has length {expected}", test)

    def starts_with(self, prefix: str) -> Subject:
        def test(value: Any) -> Verdict:
            if value.startswith(prefix):
                return Verdict.pass_()
            return Verdict.fail(_found(value[: len(prefix)]))

        return self.assert_(
            (f"starts with {format_value(prefix)}", f"does not start with {format_value(prefix)}"),
            test,
        )

    def ends_with(self, suffix: str) -> Subject:
        def test(value: Any) -> Verdict:
            if value.endswith(suffix):
                return Verdict.pass_()
            return Verdict.fail(_found(value[-len(suffix):] if suffix else ""))

        return self.assert_(
            (f"ends with {format_value(suffix)}", f"does not end with {format_value(suffix)}"),
            test,
        )

    def matches(self, pattern: str | re.Pattern[str]) -> Subject:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        shown = format_value(compiled)

        def test(value: Any) -> Verdict:
            if compiled.fullmatch(value):
                return Verdict.pass_()
            return Verdict.fail(_found(value))

        return self.assert_(
            (f"matches the regular expression {shown}",
             f"does not match the regular expression {shown}"),
            test,
        )

    # --- derivations ---

    def length(self) -> Subject:
        return self.get("length", len)

    def first(self) -> Subject:
        return self.get("first element", _first)

    def at_index(self, index: int) -> Subject:
        return self.get(f"element [{index}]", lambda v: v[index])

    def value_for_key(self, key: Any) -> Subject:
        return self.get(f"value for key {format_value(key)}", lambda v: v[key])

    # --- composition over elements ---

    def all_(self, block: Block) -> Subject:
        return self.compose(
            ("all elements match", "not all elements match"), block, all
        )

    def any_(self, block: Block) -> Subject:
        return self.compose(
            ("at least one element matches", "no elements match"), block, any
        )

    def none_(self, block: Block) -> Subject:
        return self.compose(
            ("no elements match", "at least one element matches"),
            block,
            lambda results: not any(results),
        )

    # --- outcomes of expect_catching ---

    def succeeded(self) -> Subject:
        def test(caught: Any) -> Verdict:
            if caught.exception is None:
                return Verdict.pass_()
            return Verdict.fail(f"raised {caught.exception!r}")

        return self.assert_(
            ("returned a value", "did not return a value"), test
        ).get("returned value", lambda caught: caught.value)

    def failed(self) -> Subject:
        def test(caught: Any) -> Verdict:
            if caught.exception is not None:
                return Verdict.pass_()
            return Verdict.fail(f"returned {format_value(caught.value)}")

        return self.assert_(
            ("raised an exception", "did not raise an exception"), test
        ).get("exception", lambda caught: caught.exception)
