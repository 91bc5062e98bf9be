"""Abstract base class for all edge classification rules.

Every rule in the system implements this interface. Rules are:
- Self-contained: each recognises one geometric situation
- Ordered: the classifier tries rules by priority, first match wins
- Conditional: each rule decides if it applies to the current context
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from edgelabeler.models import DetectionContext, EdgeDetection, EdgeType


class EdgeRule(ABC):
    """
    Base class for all edge rules.

    Subclasses implement `applies()` and `classify()`.
    The classifier queries the registry, sorts by `priority`, and
    returns the result of the first rule whose `applies()` is true.
    """

    # Lower priority = tried first. Default 100.
    priority: int = 100

    @abstractmethod
    def get_id(self) -> str:
        """Unique identifier for this rule (e.g., 'edge.horizontal')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Horizontal Edge')."""
        ...

    @abstractmethod
    def applies(self, context: DetectionContext) -> bool:
        """Return True if this rule handles the edge in `context`."""
        ...

    @abstractmethod
    def classify(self, context: DetectionContext) -> EdgeDetection:
        """
        Classify the edge in `context`.

        Only called after `applies()` returned True. Must always return
        a detection; rules never raise on geometric input.
        """
        ...

    def result(self, edge_type: EdgeType, confidence: int, reason: str) -> EdgeDetection:
        return EdgeDetection(
            edge_type=edge_type,
            confidence_score=confidence,
            detection_reason=reason,
            rule_id=self.get_id(),
        )
