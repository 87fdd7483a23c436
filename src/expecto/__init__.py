"""Fluent assertions with block evaluation, negation and tree-shaped reports."""

from expecto.api import Caught, Expect, expect, expect_catching, expect_that, expect_throws
from expecto.assertions.base import Outcome, Predicate, Verdict
from expecto.config import ReportConfig, load_config
from expecto.reporting.render import ExpectationFailed
from expecto.subject import Subject

__all__ = [
    "Caught",
    "Expect",
    "ExpectationFailed",
    "Outcome",
    "Predicate",
    "ReportConfig",
    "Subject",
    "Verdict",
    "expect",
    "expect_catching",
    "expect_that",
    "expect_throws",
    "load_config",
]
