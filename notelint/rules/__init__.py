"""Rules package."""

from collections.abc import Callable
from dataclasses import dataclass

from notelint.config import StyleConfig
from notelint.rules.ambiguous_boolean import AmbiguousBooleanRule
from notelint.rules.awkward_control_flow import AwkwardControlFlowRule
from notelint.rules.base import Finding, Rule
from notelint.rules.deep_nesting import DeepNestingRule
from notelint.rules.generic_name import GenericNameRule
from notelint.rules.negated_boolean import NegatedBooleanRule
from notelint.rules.ternary_overuse import TernaryOveruseRule
from notelint.rules.yoda_condition import YodaConditionRule

__all__ = [
    "Finding",
    "Rule",
    "RuleInfo",
    "RULE_IDS",
    "build_rules",
    "default_rules",
    "list_rule_info",
]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    category: str
    default_enabled: bool


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[StyleConfig], Rule]
    name: str
    description: str
    category: str


def default_rules() -> list[Rule]:
    """Return every built-in rule in registration order."""
    return build_rules()


def build_rules(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
    style: StyleConfig | None = None,
) -> list[Rule]:
    """Build rule instances applying enable/disable filters.

    The result always follows registration order, whatever order the ids
    were requested in.
    """
    effective_style = style or StyleConfig()
    specs = _ordered_rule_specs()
    registry = {spec.rule_id: spec for spec in specs}
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])

    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else set(registry)
    disabled_set = set(disabled_rule_ids or [])
    return [
        spec.factory(effective_style)
        for spec in specs
        if spec.rule_id in enabled_set and spec.rule_id not in disabled_set
    ]


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known rules."""
    return [
        RuleInfo(
            rule_id=spec.rule_id,
            name=spec.name,
            description=spec.description,
            category=spec.category,
            default_enabled=True,
        )
        for spec in _ordered_rule_specs()
    ]


def _ordered_rule_specs() -> list[_RuleSpec]:
    return [
        _spec(
            AmbiguousBooleanRule,
            lambda style: AmbiguousBooleanRule(style.naming),
            category="naming",
        ),
        _spec(
            NegatedBooleanRule,
            lambda style: NegatedBooleanRule(style.naming),
            category="naming",
        ),
        _spec(
            GenericNameRule,
            lambda style: GenericNameRule(style.naming),
            category="naming",
        ),
        _spec(
            TernaryOveruseRule,
            lambda style: TernaryOveruseRule(style.layout),
            category="control_flow",
        ),
        _spec(
            YodaConditionRule,
            lambda style: YodaConditionRule(),
            category="control_flow",
        ),
        _spec(
            AwkwardControlFlowRule,
            lambda style: AwkwardControlFlowRule(),
            category="control_flow",
        ),
        _spec(
            DeepNestingRule,
            lambda style: DeepNestingRule(style.layout),
            category="layout",
        ),
    ]


def _spec(
    rule_cls: type[Rule],
    factory: Callable[[StyleConfig], Rule],
    *,
    category: str,
) -> _RuleSpec:
    return _RuleSpec(
        rule_id=rule_cls.rule_id,
        factory=factory,
        name=rule_cls.__name__,
        description=(rule_cls.__doc__ or "").strip(),
        category=category,
    )


RULE_IDS = tuple(spec.rule_id for spec in _ordered_rule_specs())
