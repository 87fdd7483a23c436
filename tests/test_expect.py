"""Tests for expectations about several subjects in one statement."""

import pytest

from expecto import ExpectationFailed, expect


def test_context_manager_reports_all_subjects_together():
    with pytest.raises(ExpectationFailed) as exc_info:
        with expect() as e:
            e.that("fnord").is_null()
            e.that(1).is_less_than(2)
            e.that([]).is_not_empty()

    assert str(exc_info.value) == (
        '▼ Expect that "fnord":\n'
        "  ✗ is None\n"
        "▼ Expect that 1:\n"
        "  ✓ is less than 2\n"
        "▼ Expect that []:\n"
        "  ✗ is not empty"
    )
    assert [subject.value for subject in exc_info.value.subjects] == ["fnord", 1, []]


def test_block_form():
    def block(e):
        e.that("fnord").is_a(str)
        e.that(3).is_equal_to(3)

    expect(block)


def test_block_form_failure():
    with pytest.raises(ExpectationFailed) as exc_info:
        expect(lambda e: e.that(3).is_equal_to(4))

    assert str(exc_info.value) == "▼ Expect that 3:\n  ✗ is equal to 4 : found 3"


def test_that_outside_a_block_is_fail_fast(spy):
    later = spy()
    with pytest.raises(ExpectationFailed):
        expect().that(1).is_null().assert_that("later", later)
    assert later.calls == 0


def test_subject_blocks_inside_expect():
    with pytest.raises(ExpectationFailed) as exc_info:
        with expect() as e:
            e.that("abc").and_(lambda it: (it.starts_with("a"), it.ends_with("x")))
            e.that(None).is_null()

    assert str(exc_info.value).splitlines() == [
        '▼ Expect that "abc":',
        '  ✓ starts with "a"',
        '  ✗ ends with "x" : found "c"',
        "▼ Expect that None:",
        "  ✓ is None",
    ]


def test_exception_in_body_propagates_without_report():
    with pytest.raises(LookupError):
        with expect() as e:
            e.that(1).is_null()
            raise LookupError("not an assertion")
