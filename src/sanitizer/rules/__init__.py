"""
Ordered regex rule sets and the pipeline that applies them to names.

Public API:
- `SanitizationRule`, `RuleSet`: rule model; rule sets are immutable values.
- `default_rule_set`, `load_catalog`, `configured_rule_set`, `build_rule_set`: catalogs.
- `pipeline.apply(rule_set, name)`: sanitize one name.
"""
from . import pipeline
from .catalog import DEFAULT_CATALOG, build_rule_set, configured_rule_set, default_rule_set, load_catalog
from .rule import RuleSet, SanitizationRule

__all__ = [
    "pipeline",
    "DEFAULT_CATALOG",
    "build_rule_set",
    "configured_rule_set",
    "default_rule_set",
    "load_catalog",
    "RuleSet",
    "SanitizationRule",
]
