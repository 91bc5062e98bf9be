"""Rule registry — stores edge rules and resolves their evaluation order."""

from __future__ import annotations

from edgelabeler.models import ClassifierConfig
from edgelabeler.rules.base import EdgeRule


class RuleRegistry:
    """
    Central registry for all edge classification rules.

    Rules are registered at startup. During classification, the registry
    returns the active rules sorted by priority; the classifier walks that
    list and stops at the first rule that applies.
    """

    def __init__(self) -> None:
        self._rules: dict[str, EdgeRule] = {}

    def register(self, rule: EdgeRule) -> None:
        """Register an edge rule."""
        self._rules[rule.get_id()] = rule

    def unregister(self, rule_id: str) -> None:
        """Remove a rule from the registry."""
        self._rules.pop(rule_id, None)

    def get_rule(self, rule_id: str) -> EdgeRule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[EdgeRule]:
        """Return all registered rules in evaluation order."""
        return sorted(self._rules.values(), key=lambda r: r.priority)

    def get_active_rules(self, config: ClassifierConfig) -> list[EdgeRule]:
        """
        Return the rules to evaluate, sorted by priority.

        Respects ClassifierConfig.enabled_rules and disabled_rules.
        """
        candidates = self.list_rules()

        # If enabled_rules is specified, only use those
        if config.enabled_rules:
            candidates = [r for r in candidates if r.get_id() in config.enabled_rules]

        # Remove explicitly disabled rules
        if config.disabled_rules:
            candidates = [r for r in candidates if r.get_id() not in config.disabled_rules]

        return candidates


def create_default_registry() -> RuleRegistry:
    """Create a registry with all standard edge rules."""
    from edgelabeler.rules.edge.horizontal import HorizontalEdgeRule
    from edgelabeler.rules.edge.junction import MultiJunctionRule, PairJunctionRule
    from edgelabeler.rules.edge.perimeter import SingleConnectionRule, IsolatedEdgeRule

    registry = RuleRegistry()
    registry.register(HorizontalEdgeRule())
    registry.register(MultiJunctionRule())
    registry.register(PairJunctionRule())
    registry.register(SingleConnectionRule())
    registry.register(IsolatedEdgeRule())
    return registry
