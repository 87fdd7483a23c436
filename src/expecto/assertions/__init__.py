"""Assertion nodes, predicates and the built-in catalog."""

from expecto.assertions.base import (
    AssertionNode,
    Outcome,
    Predicate,
    SubjectNode,
    Verdict,
)
from expecto.assertions.catalog import CatalogMixin

__all__ = [
    "AssertionNode",
    "CatalogMixin",
    "Outcome",
    "Predicate",
    "SubjectNode",
    "Verdict",
]
