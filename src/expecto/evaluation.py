"""Chain and block evaluation for one expectation statement."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from expecto.assertions.base import AssertionNode, Outcome, Predicate, SubjectNode
from expecto.config import ReportConfig
from expecto.reporting.render import raise_if_failed

logger = logging.getLogger(__name__)


@dataclass
class Chain:
    """Steps declared by method chaining from one statement.

    Once a step fails the chain is broken: later steps are recorded as
    NotEvaluated and neither their predicates nor their derivations run.
    """

    steps: list[AssertionNode] = field(default_factory=list)
    broken: bool = False

    def record(self, node: AssertionNode) -> AssertionNode:
        self.steps.append(node)
        if node.failed:
            self.broken = True
        return node

    def skip(self, description: str, negated: bool, derivation: bool = False) -> AssertionNode:
        logger.debug(f"Skipping '{description}' after an earlier failure in the chain")
        return self.record(
            AssertionNode(
                description=description,
                outcome=Outcome.NOT_EVALUATED,
                negated=negated,
                derivation=derivation,
            )
        )


def evaluate(
    predicate: Predicate,
    value: Any,
    negated: bool,
    subjects: tuple[SubjectNode, ...] = (),
) -> AssertionNode:
    """Evaluate a predicate against a value, applying negation.

    The description is rendered for the negation state first, then the
    verdict is flipped if negated. Exceptions raised by the predicate
    propagate unchanged.
    """
    description = predicate.describe(negated)
    verdict = predicate.test(value)
    passed = verdict.passed != negated
    logger.debug(
        f"Evaluated '{description}' against {value!r}: "
        f"{'passed' if passed else 'failed'} (negated={negated})"
    )
    return AssertionNode(
        description=description,
        outcome=Outcome.PASSED if passed else Outcome.FAILED,
        negated=negated,
        detail=verdict.detail if not passed and not negated else None,
        subjects=subjects,
    )


class Expectation:
    """State of one expectation statement: its roots and its evaluation mode.

    Outside any block the statement is fail-fast: the first failed node
    raises the report. Inside a block every statement runs and the report is
    raised when the outermost block completes.
    """

    def __init__(self, config: ReportConfig):
        self.config = config
        self.roots: list[SubjectNode] = []
        self._depth = 0

    @property
    def collecting(self) -> bool:
        return self._depth > 0

    def add_root(self, value: Any) -> SubjectNode:
        node = SubjectNode(value=value, root=True)
        self.roots.append(node)
        return node

    def checkpoint(self, node: AssertionNode) -> None:
        if node.failed and not self.collecting:
            raise_if_failed(self.roots, self.config)

    def enter(self) -> None:
        self._depth += 1

    def leave(self, report: bool = True) -> None:
        self._depth -= 1
        if report and not self.collecting:
            raise_if_failed(self.roots, self.config)

    def run_block(self, block: Callable[[Any], Any], receiver: Any) -> None:
        """Run ``block`` against ``receiver`` evaluating every statement in it."""
        self.enter()
        try:
            block(receiver)
        except BaseException:
            self.leave(report=False)
            raise
        self.leave()

    @classmethod
    def detached(cls, config: ReportConfig) -> Expectation:
        """A statement that always collects and never reports.

        Composed assertions evaluate their element subtrees in one of these
        and summarize the result in their own node.
        """
        expectation = cls(config)
        expectation.enter()
        return expectation
