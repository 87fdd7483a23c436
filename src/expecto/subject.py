from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from expecto.assertions.base import (
    AssertionNode,
    Description,
    Outcome,
    Predicate,
    SubjectNode,
    Verdict,
    describer,
)
from expecto.assertions.catalog import CatalogMixin
from expecto.evaluation import Chain, Expectation, evaluate
from expecto.reporting.render import has_failures

logger = logging.getLogger(__name__)

Block = Callable[["Subject"], Any]


@dataclass(frozen=True)
class Context:
    """Negation state carried by a Subject view.

    ``negated`` applies to the next attached assertion. ``block_negated`` is
    the state every step returns to afterwards: False at the top level, True
    inside a ``not_(block)``.
    """

    negated: bool = False
    block_negated: bool = False

    def flipped(self) -> Context:
        return Context(not self.negated, self.block_negated)

    def for_block(self) -> Context:
        return Context(self.negated, self.negated)

    def after_step(self) -> Context:
        return Context(self.block_negated, self.block_negated)


def _function_description(fn: Callable[[Any], Any]) -> str:
    name = getattr(fn, "__name__", None)
    if name is None:
        return repr(fn)
    if name == "<lambda>":
        return "mapped value"
    return name


class Subject(CatalogMixin):
    """A value under test, as seen from one point of an assertion chain.

    Views are cheap and immutable: attaching an assertion records a node on
    the underlying SubjectNode and returns a new view continuing the chain.
    """

    def __init__(
        self,
        expectation: Expectation,
        node: SubjectNode,
        context: Context = Context(),
        chain: Chain | None = None,
    ):
        self._expectation = expectation
        self._node = node
        self._context = context
        self._chain = chain

    def __repr__(self) -> str:
        return f"Subject({self._node.value!r}, negated={self._context.negated})"

    @property
    def value(self) -> Any:
        return self._node.value

    @property
    def negated(self) -> bool:
        return self._context.negated

    @property
    def node(self) -> SubjectNode:
        return self._node

    @property
    def _broken(self) -> bool:
        return self._chain is not None and self._chain.broken

    def _view(
        self,
        node: SubjectNode | None = None,
        context: Context | None = None,
        chain: Chain | None = None,
    ) -> Subject:
        return Subject(
            self._expectation,
            node if node is not None else self._node,
            context if context is not None else self._context,
            chain,
        )

    # --- attaching assertions ---

    def attach(self, predicate: Predicate) -> Subject:
        """Evaluate ``predicate`` as the next step of this view's chain."""
        chain = self._chain or Chain()
        negated = self._context.negated
        if chain.broken:
            self._node.add(chain.skip(predicate.describe(negated), negated))
            return self._view(context=self._context.after_step(), chain=chain)

        node = chain.record(evaluate(predicate, self._node.value, negated))
        self._node.add(node)
        self._expectation.checkpoint(node)
        return self._view(context=self._context.after_step(), chain=chain)

    def assert_that(
        self, description: Description, predicate: Callable[[Any], bool]
    ) -> Subject:
        """Attach a boolean predicate with a (possibly negation-aware) description."""
        return self.attach(Predicate.of(description, predicate))

    def assert_(
        self, description: Description, test: Callable[[Any], Verdict]
    ) -> Subject:
        """Attach a test returning a Verdict, which may explain a mismatch."""
        return self.attach(Predicate(describer(description), test))

    # --- derived subjects ---

    def get(
        self,
        description: str | Callable[[Any], Any],
        fn: Callable[[Any], Any] | None = None,
    ) -> Subject:
        """Map the subject value and continue the chain on the result.

        ``get("length", len)`` or ``get(len)``, in which case the description
        is taken from the function name. Errors raised by the mapping are not
        assertion failures and propagate unchanged.
        """
        if fn is None:
            fn = description
            description = _function_description(fn)
        chain = self._chain or Chain()
        if chain.broken:
            self._node.add(
                chain.skip(description, self._context.negated, derivation=True)
            )
            return self._view(chain=chain)

        derived = SubjectNode(value=fn(self._node.value), description=description)
        logger.debug(f"Derived '{description}' from {self._node.value!r}: {derived.value!r}")
        node = AssertionNode(
            description=description,
            outcome=Outcome.PASSED,
            negated=self._context.negated,
            subjects=(derived,),
            derivation=True,
        )
        self._node.add(chain.record(node))
        # A pending not_() applies to the first assertion on the derived value
        return self._view(node=derived, chain=chain)

    def with_(
        self,
        description: str,
        fn: Callable[[Any], Any],
        block: Block,
    ) -> Subject:
        """Derive a value and run ``block`` against it, then continue on this subject."""
        if self._broken:
            self.get(description, fn)
            return self
        self.get(description, fn).and_(block)
        return self._view(context=self._context.after_step(), chain=self._chain)

    # --- blocks and negation ---

    def and_(self, block: Block) -> Subject:
        """Run ``block`` against this subject, evaluating every statement in it."""
        if self._broken:
            logger.debug("Skipping block after an earlier failure in the chain")
            return self
        receiver = self._view(context=self._context.for_block(), chain=None)
        self._expectation.run_block(block, receiver)
        return self._view(context=self._context.after_step(), chain=self._chain)

    def not_(self, block: Block | None = None) -> Subject:
        """Negate the next assertion, or every assertion in ``block``."""
        if block is None:
            return self._view(context=self._context.flipped(), chain=self._chain)
        return self._view(context=self._context.flipped(), chain=self._chain).and_(block)

    def described_as(self, description: str) -> Subject:
        """Print ``description`` instead of the subject value in the report."""
        self._node.description = description
        return self

    def compose(
        self,
        description: Description,
        block: Block,
        rule: Callable[[list[bool]], bool],
    ) -> Subject:
        """Run ``block`` against every element and judge the results with ``rule``.

        Each element becomes a nested subject of the composed node.
        ``rule`` receives one boolean per element, True where the element's
        subtree has no failure.
        """
        chain = self._chain or Chain()
        negated = self._context.negated
        describe = describer(description)
        if chain.broken:
            self._node.add(chain.skip(describe(negated), negated))
            return self._view(context=self._context.after_step(), chain=chain)

        inner = Expectation.detached(self._expectation.config)
        elements: list[SubjectNode] = []
        for element in self._node.value:
            element_node = SubjectNode(value=element)
            block(Subject(inner, element_node))
            elements.append(element_node)

        results = [not has_failures([element]) for element in elements]
        predicate = Predicate(describe, lambda _: Verdict(rule(results)))
        node = chain.record(
            evaluate(predicate, self._node.value, negated, subjects=tuple(elements))
        )
        self._node.add(node)
        self._expectation.checkpoint(node)
        return self._view(context=self._context.after_step(), chain=chain)

    # --- with-statement block ---

    def __enter__(self) -> Subject:
        self._expectation.enter()
        return self._view(context=self._context.for_block(), chain=None)

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._expectation.leave(report=exc_type is None)
        return False
