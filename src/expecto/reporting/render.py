"""Render evaluated subject trees as indented text and raise the aggregated failure."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from expecto.assertions.base import AssertionNode, SubjectNode
from expecto.config import ReportConfig
from expecto.formatting import format_value, truncate

logger = logging.getLogger(__name__)


class ExpectationFailed(AssertionError):
    """One failed expectation statement.

    The message is the full rendered tree; ``subjects`` keeps the evaluated
    roots for callers that want to inspect or export them.
    """

    def __init__(self, message: str, subjects: Sequence[SubjectNode]):
        super().__init__(message)
        self.message = message
        self.subjects = list(subjects)


def subject_header(subject: SubjectNode, config: ReportConfig) -> str:
    value = truncate(format_value(subject.value), config.max_value_length)
    if subject.root:
        return f"Expect that {subject.description or value}:"
    if subject.description is None:
        return f"{value}:"
    return f"{subject.description}: {value}"


def render(subjects: Iterable[SubjectNode], config: ReportConfig) -> str:
    lines: list[str] = []
    for subject in subjects:
        _render_subject(subject, 0, lines, config)
    return "\n".join(lines)


def _render_subject(
    subject: SubjectNode, depth: int, lines: list[str], config: ReportConfig
) -> None:
    pad = " " * (config.indent * depth)
    lines.append(f"{pad}{config.markers.subject} {subject_header(subject, config)}")
    for node in subject.children:
        _render_node(node, depth + 1, lines, config)


def _render_node(
    node: AssertionNode, depth: int, lines: list[str], config: ReportConfig
) -> None:
    if not node.evaluated:
        return
    if node.derivation:
        # The derived subject's header takes the place of the get node
        for nested in node.subjects:
            _render_subject(nested, depth, lines, config)
        return
    pad = " " * (config.indent * depth)
    marker = config.markers.passed if node.passed else config.markers.failed
    lines.append(f"{pad}{marker} {node.message}")
    for nested in node.subjects:
        _render_subject(nested, depth + 1, lines, config)


def has_failures(subjects: Iterable[SubjectNode]) -> bool:
    """Whether any node failed.

    Derived subjects are searched recursively. Composed nodes are judged by
    their own outcome: a passing "at least one element" node may legitimately
    hold failing element subtrees.
    """
    for subject in subjects:
        for node in subject.children:
            if node.failed:
                return True
            if node.derivation and has_failures(node.subjects):
                return True
    return False


def count_failures(subjects: Iterable[SubjectNode]) -> int:
    total = 0
    for subject in subjects:
        for node in subject.children:
            if node.failed:
                total += 1
            elif node.derivation:
                total += count_failures(node.subjects)
    return total


def raise_if_failed(subjects: Sequence[SubjectNode], config: ReportConfig) -> None:
    """Raise ExpectationFailed carrying the rendered tree if anything failed."""
    if not has_failures(subjects):
        return
    message = render(subjects, config)
    logger.debug(
        f"Expectation failed with {count_failures(subjects)} failed assertion(s)"
    )
    raise ExpectationFailed(message, subjects)
