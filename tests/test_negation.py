"""Tests for negated assertions."""

from numbers import Number

import pytest

from expecto import ExpectationFailed, expect_that


def _report(run) -> list[str]:
    with pytest.raises(ExpectationFailed) as exc_info:
        run()
    return str(exc_info.value).splitlines()[1:]


def test_contains_can_be_negated():
    expect_that([]).not_().contains("blah")


def test_negated_contains_fails_when_element_present():
    lines = _report(lambda: expect_that(["blah"]).not_().contains("blah"))
    assert lines == ['  ✗ does not contain "blah"']


def test_an_and_block_can_be_negated():
    expect_that("fnord").not_().and_(lambda it: it.is_null())


def test_not_before_and_negates_every_assertion_in_the_block():
    def block(it):
        it.is_null()
        it.is_a(int)

    expect_that("fnord").not_().and_(block)


def test_not_applies_only_to_the_next_step_of_a_chain():
    lines = _report(
        lambda: expect_that("fnord").and_(
            lambda it: it.not_().is_null().is_a(int)
        )
    )
    assert lines == [
        "  ✓ is not None",
        "  ✗ is an instance of int : found str",
    ]


def test_double_negation_is_the_identity():
    def plain(it):
        it.is_a(str)
        it.is_a(Number)

    def doubled(it):
        it.not_().not_().is_a(str)
        it.not_().not_().is_a(Number)

    assert _report(lambda: expect_that("fnord", plain)) == _report(
        lambda: expect_that("fnord", doubled)
    )


def test_double_negation_inside_a_not_block():
    lines = _report(
        lambda: expect_that("fnord").not_(
            lambda it: (it.not_().is_a(str), it.is_a(str))
        )
    )
    assert lines == [
        "  ✓ is an instance of str",
        "  ✗ is not an instance of str",
    ]


def test_chain_inside_not_block_stays_negated():
    expect_that("fnord").not_(lambda it: it.is_null().is_a(int).is_empty())


def test_negated_failure_has_no_mismatch_detail():
    lines = _report(lambda: expect_that(5).not_().is_equal_to(5))
    assert lines == ["  ✗ is not equal to 5"]


def test_negation_does_not_leak_between_statements():
    subject = expect_that("fnord")
    subject.not_().is_null()
    subject.is_not_null()


def test_not_is_carried_through_a_derivation():
    expect_that("fnord").not_().get("length", len).is_equal_to(4)


@pytest.mark.parametrize(
    "assertion, affirmative, negative",
    [
        (lambda s: s.is_true(), "is True", "is not True"),
        (lambda s: s.is_in([1, 2]), "is in [1, 2]", "is not in [1, 2]"),
        (lambda s: s.has_length(2), "has length 2", "does not have length 2"),
        (lambda s: s.starts_with("ab"), 'starts with "ab"', 'does not start with "ab"'),
        (lambda s: s.is_empty(), "is empty", "is not empty"),
    ],
)
def test_descriptions_flip_with_negation(assertion, affirmative, negative):
    assert _description(assertion, negated=False) == affirmative
    assert _description(assertion, negated=True) == negative


def _description(assertion, negated):
    """Description of the node produced by ``assertion`` on a fresh subject."""
    subject = expect_that("ab")
    try:
        with subject as it:
            assertion(it.not_() if negated else it)
    except ExpectationFailed:
        pass
    return subject.node.children[-1].description
