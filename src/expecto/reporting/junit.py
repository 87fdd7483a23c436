from __future__ import annotations

from pathlib import Path
from typing import Iterator, Mapping, Sequence

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from expecto.assertions.base import AssertionNode, SubjectNode
from expecto.config import ReportConfig, default_config
from expecto.reporting.render import render, subject_header


def _leaf_nodes(
    subject: SubjectNode, path: tuple[str, ...], config: ReportConfig
) -> Iterator[tuple[tuple[str, ...], AssertionNode]]:
    """Yield every evaluated, non-derivation node with the headers leading to it."""
    here = path + (subject_header(subject, config).rstrip(":"),)
    for node in subject.children:
        if not node.evaluated:
            continue
        if node.derivation:
            for nested in node.subjects:
                yield from _leaf_nodes(nested, here, config)
            continue
        yield here, node


def write_junit(
    path: Path,
    results: Mapping[str, Sequence[SubjectNode]],
    config: ReportConfig | None = None,
) -> Path:
    """Write junit.xml from evaluated expectation trees, return path.

    ``results`` maps a test name to the root subjects of one expectation,
    typically ``ExpectationFailed.subjects``.
    """
    config = config or default_config()
    xml = JUnitXml()

    for test_name, subjects in results.items():
        suite = TestSuite(test_name)
        report = render(subjects, config)

        # Test cases: one per evaluated assertion
        for subject in subjects:
            for headers, node in _leaf_nodes(subject, (), config):
                case = TestCase(" / ".join(headers + (node.description,)))
                case.classname = test_name
                if node.failed:
                    case.result = Failure(node.message)
                    case.system_out = report
                suite.add_testcase(case)

        # Use append (not +=) to preserve suite properties
        xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
