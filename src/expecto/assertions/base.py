"""Base data structures for the assertion system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

Description = Union[str, tuple[str, str], Callable[[bool], str]]


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    NOT_EVALUATED = "not-evaluated"


@dataclass(frozen=True)
class Verdict:
    """What a predicate reports about a subject value.

    Attributes:
        passed: Whether the un-negated predicate holds.
        detail: Optional mismatch explanation (e.g. "found str"), shown only
            when the assertion fails without negation.
    """

    passed: bool
    detail: str | None = None

    @classmethod
    def pass_(cls) -> Verdict:
        return cls(True)

    @classmethod
    def fail(cls, detail: str | None = None) -> Verdict:
        return cls(False, detail)


def describer(description: Description) -> Callable[[bool], str]:
    """Normalize a description into a ``(negated) -> str`` function.

    A plain string is prefixed with "not " when negated, unless it starts
    with "is ", "has " or "contains" where the negation is inserted in the
    usual place ("is not None", "does not have", "does not contain").
    """
    if callable(description):
        return description
    if isinstance(description, tuple):
        affirmative, negative = description
        return lambda negated: negative if negated else affirmative
    return lambda negated: negate_phrase(description) if negated else description


def negate_phrase(text: str) -> str:
    if text.startswith("is "):
        return "is not " + text[3:]
    if text.startswith("has "):
        return "does not have " + text[4:]
    if text.startswith("contains"):
        return "does not contain" + text[len("contains"):]
    return "not " + text


@dataclass(frozen=True)
class Predicate:
    """A negation-aware description paired with a test of the subject value."""

    describe: Callable[[bool], str]
    test: Callable[[Any], Verdict]

    @classmethod
    def of(cls, description: Description, check: Callable[[Any], bool]) -> Predicate:
        """Build a predicate from a plain boolean check."""
        return cls(describer(description), lambda value: Verdict(bool(check(value))))


@dataclass
class SubjectNode:
    """A value under test and the assertions declared directly against it.

    Attributes:
        value: The subject value, any type, possibly None.
        description: For derived subjects the label of the derivation
            ("length", "first element"); for roots an optional override of
            the printed value set by ``described_as``.
        root: Whether this node was created by an entry point rather than
            by a derivation or a composed assertion.
        children: Assertion nodes in declaration order.
    """

    value: Any
    description: str | None = None
    root: bool = False
    children: list[AssertionNode] = field(default_factory=list)

    def add(self, node: AssertionNode) -> AssertionNode:
        self.children.append(node)
        return node


@dataclass(frozen=True)
class AssertionNode:
    """Result of evaluating one predicate against a subject.

    Attributes:
        description: Statement already phrased for the negation state
            ("is None" / "is not None").
        outcome: Passed, Failed, or NotEvaluated for chain steps skipped
            after an earlier failure.
        negated: Whether negation applied when the node was declared.
        detail: Mismatch explanation appended to the description on failure.
        subjects: Nested subjects: one for a derivation, one per element for
            a composed assertion.
        derivation: True for the synthetic node produced by ``get``.
    """

    description: str
    outcome: Outcome
    negated: bool = False
    detail: str | None = None
    subjects: tuple[SubjectNode, ...] = ()
    derivation: bool = False

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    @property
    def evaluated(self) -> bool:
        return self.outcome is not Outcome.NOT_EVALUATED

    @property
    def message(self) -> str:
        if self.failed and self.detail:
            return f"{self.description} : {self.detail}"
        return self.description
