"""Tests for chained assertions and their short-circuiting."""

import pytest

from expecto import ExpectationFailed, Outcome, expect_that
from expecto.assertions.base import AssertionNode, Predicate, Verdict
from expecto.evaluation import Chain


# --- fail-fast top-level chains ---


def test_top_level_chain_passes_silently():
    expect_that("fnord").is_not_null().is_a(str).is_equal_to("fnord")


def test_top_level_chain_raises_at_the_first_failure(spy):
    later = spy()

    with pytest.raises(ExpectationFailed) as exc_info:
        expect_that("fnord").is_not_null().is_a(int).assert_that("never runs", later)

    assert later.calls == 0
    assert str(exc_info.value) == (
        '▼ Expect that "fnord":\n'
        "  ✓ is not None\n"
        "  ✗ is an instance of int : found str"
    )


def test_separate_statements_on_one_subject_are_independent_chains():
    subject = expect_that([1, 2, 3])
    subject.has_length(3)
    subject.contains(2)
    with pytest.raises(ExpectationFailed):
        subject.is_empty()


# --- chains inside blocks ---


def test_steps_after_a_failure_are_never_invoked(spy):
    first = spy(True)
    second = spy(False)
    third = spy(True)
    fourth = spy(True)

    with pytest.raises(ExpectationFailed) as exc_info:
        with expect_that(7) as it:
            it.assert_that("first", first).assert_that("second", second).assert_that(
                "third", third
            ).assert_that("fourth", fourth)

    assert (first.calls, second.calls, third.calls, fourth.calls) == (1, 1, 0, 0)
    report = str(exc_info.value)
    assert "third" not in report
    assert "fourth" not in report


def test_skipped_steps_are_recorded_as_not_evaluated():
    with pytest.raises(ExpectationFailed) as exc_info:
        with expect_that("fnord") as it:
            it.is_a(int).is_greater_than(3).get("doubled", lambda v: v * 2).is_null()

    children = exc_info.value.subjects[0].children
    assert [node.outcome for node in children] == [
        Outcome.FAILED,
        Outcome.NOT_EVALUATED,
        Outcome.NOT_EVALUATED,
        Outcome.NOT_EVALUATED,
    ]
    assert children[2].derivation is True
    assert children[2].subjects == ()


def test_a_broken_chain_skips_blocks_attached_to_it(spy):
    inner = spy()

    with pytest.raises(ExpectationFailed):
        with expect_that("fnord") as it:
            it.is_null().and_(lambda s: s.assert_that("inner", inner))

    assert inner.calls == 0


def test_a_broken_chain_does_not_affect_sibling_statements(spy):
    sibling = spy()

    with pytest.raises(ExpectationFailed) as exc_info:
        with expect_that("fnord") as it:
            it.is_null().is_not_null()
            it.assert_that("sibling", sibling)

    assert sibling.calls == 1
    assert str(exc_info.value).splitlines()[1:] == ["  ✗ is None", "  ✓ sibling"]


def test_continuing_a_chain_from_a_saved_view():
    with pytest.raises(ExpectationFailed) as exc_info:
        with expect_that(10) as it:
            saved = it.is_less_than(5)
            saved.is_greater_than(1)

    assert [node.outcome for node in exc_info.value.subjects[0].children] == [
        Outcome.FAILED,
        Outcome.NOT_EVALUATED,
    ]


def test_predicate_errors_propagate_unchanged():
    error = RuntimeError("predicate defect")

    def broken(value):
        raise error

    with pytest.raises(RuntimeError) as exc_info:
        expect_that(1).assert_(("explodes", "does not explode"), broken)

    assert exc_info.value is error


# --- Chain bookkeeping ---


def test_chain_records_steps_and_breaks_on_failure():
    chain = Chain()
    passed = chain.record(AssertionNode("first", Outcome.PASSED))
    assert chain.broken is False

    failed = chain.record(AssertionNode("second", Outcome.FAILED))
    assert chain.broken is True

    skipped = chain.skip("third", negated=True)
    assert skipped.outcome is Outcome.NOT_EVALUATED
    assert skipped.negated is True
    assert chain.steps == [passed, failed, skipped]


def test_custom_verdict_detail_is_rendered_on_failure():
    predicate = Predicate(
        lambda negated: "is even" if not negated else "is odd",
        lambda value: Verdict.pass_() if value % 2 == 0 else Verdict.fail(f"remainder {value % 2}"),
    )

    with pytest.raises(ExpectationFailed) as exc_info:
        expect_that(3).attach(predicate)

    assert str(exc_info.value) == "▼ Expect that 3:\n  ✗ is even : remainder 1"
