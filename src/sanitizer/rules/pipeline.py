"""
The sanitization pipeline: a left fold of the active rules over a name.

Rules run strictly in RuleSet order, each one on the previous one's output.
The pipeline never reorders rules; ordering requirements are a property of
the catalog. When the final result is empty or whitespace only, the original
name is returned instead.
"""
from sanitizer.rules.rule import RuleSet
from sanitizer.utils import LogLevel, logger


def apply(rule_set: RuleSet, name: str) -> str:
    """Run every active rule of `rule_set` over `name` and return the cleaned name."""
    result = name
    for rule in rule_set.active_rules():
        before = result
        result = rule.apply(result)
        if result != before:
            logger.log("pipeline.rule", LogLevel.TRACE, rule=rule.name, before=before, after=result)

    if not result or not result.strip():
        logger.log("pipeline.empty_result", LogLevel.DEBUG, name=name)
        return name
    return result


def preview(rule_set: RuleSet, entries) -> list:
    """
    Set `new_name` on each entry from its current name.

    `new_name` always ends up set; it equals `name` when nothing changed, so
    `has_changes` is false for names that are already clean.
    """
    for entry in entries:
        entry.new_name = apply(rule_set, entry.name)
    return entries
