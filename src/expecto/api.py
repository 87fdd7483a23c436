"""Entry points: expect_that, expect, expect_catching and expect_throws."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from expecto.config import ReportConfig, default_config
from expecto.evaluation import Expectation
from expecto.subject import Block, Subject


@dataclass(frozen=True)
class Caught:
    """Outcome of calling a function under ``expect_catching``."""

    value: Any = None
    exception: BaseException | None = None

    def __repr__(self) -> str:
        if self.exception is not None:
            return f"Failure({self.exception!r})"
        return f"Success({self.value!r})"


def expect_that(
    subject: Any,
    block: Block | None = None,
    *,
    config: ReportConfig | None = None,
) -> Subject:
    """Start an expectation about ``subject``.

    Without a block, assertions chained onto the result are fail-fast. With a
    block, every assertion in it is evaluated before a single report is
    raised. The returned subject also works as a context manager::

        with expect_that(user) as it:
            it.is_not_null()
            it.get("name", attrgetter("name")).is_equal_to("Ziggy")
    """
    expectation = Expectation(config or default_config())
    subject_view = Subject(expectation, expectation.add_root(subject))
    if block is not None:
        subject_view.and_(block)
    return subject_view


class Expect:
    """Several subjects asserted in one statement and reported together."""

    def __init__(self, config: ReportConfig):
        self._expectation = Expectation(config)

    def that(self, subject: Any) -> Subject:
        return Subject(self._expectation, self._expectation.add_root(subject))

    def __enter__(self) -> Expect:
        self._expectation.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._expectation.leave(report=exc_type is None)
        return False


def expect(
    block: Callable[[Expect], Any] | None = None,
    *,
    config: ReportConfig | None = None,
) -> Expect:
    """Group assertions about several subjects into one report.

    Either pass a block receiving the Expect object, or use it as a context
    manager and call ``that`` for each subject.
    """
    expectations = Expect(config or default_config())
    if block is not None:
        expectations._expectation.run_block(block, expectations)
    return expectations


def expect_catching(
    fn: Callable[[], Any], *, config: ReportConfig | None = None
) -> Subject:
    """Call ``fn`` and start an expectation about its return value or exception."""
    try:
        caught = Caught(value=fn())
    except Exception as exc:
        caught = Caught(exception=exc)
    return expect_that(caught, config=config)


def expect_throws(
    exc_type: type[BaseException] | tuple[type[BaseException], ...],
    fn: Callable[[], Any],
    *,
    config: ReportConfig | None = None,
) -> Subject:
    """Expect ``fn`` to raise ``exc_type`` and continue with the exception as subject."""
    return expect_catching(fn, config=config).failed().is_a(exc_type)
