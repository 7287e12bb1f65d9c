"""
Sanitization rules and ordered rule sets.

A `SanitizationRule` is a named regex substitution. Its pattern is compiled
and its replacement checked against the pattern's groups when the rule is
built, so a bad catalog fails at startup instead of halfway through a batch.

A `RuleSet` is an immutable, ordered sequence of rules plus the active flag of
each one. Order is application order. Toggling returns a new RuleSet, so a
pipeline pass always works on the snapshot it was handed.
"""
import re
from dataclasses import dataclass, field

from sanitizer.errors import RuleCatalogError

# Portable "$1" / "${name}" backreferences, translated to Python's \g<...>
_DOLLAR_REFERENCE = re.compile(r"\$(\d+|\{(\w+)\})")
_PYTHON_REFERENCE = re.compile(r"\\g<(\w+)>|\\(\d{1,2})")


def _translate_replacement(replacement: str) -> str:
    def _sub(m):
        ref = m.group(2) or m.group(1)
        return f"\\g<{ref}>"

    return _DOLLAR_REFERENCE.sub(_sub, replacement)


def _check_references(name: str, pattern: re.Pattern, replacement: str) -> None:
    for m in _PYTHON_REFERENCE.finditer(replacement):
        ref = m.group(1) or m.group(2)
        if ref.isdigit():
            if int(ref) > pattern.groups:
                raise RuleCatalogError(f"Rule '{name}': replacement references missing group {ref}")
        elif ref not in pattern.groupindex:
            raise RuleCatalogError(f"Rule '{name}': replacement references unknown group '{ref}'")


@dataclass(frozen=True)
class SanitizationRule:
    """A named pattern -> replacement substitution."""

    name: str
    description: str
    pattern: re.Pattern
    replacement: str
    active: bool = True

    @classmethod
    def create(
        cls,
        name: str,
        pattern: str,
        replacement: str = "",
        description: str = "",
        active: bool = True,
        ignore_case: bool = True,
    ) -> "SanitizationRule":
        """Compile and validate a rule; raises RuleCatalogError for a bad pattern or replacement."""
        if not name:
            raise RuleCatalogError("Rule name is required")
        try:
            compiled = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
        except (re.error, TypeError) as e:
            raise RuleCatalogError(f"Rule '{name}': invalid pattern {pattern!r}: {e}") from e

        replacement = _translate_replacement(replacement or "")
        _check_references(name, compiled, replacement)
        return cls(name, description, compiled, replacement, bool(active))

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules with a snapshot of their active flags."""

    rules: tuple[SanitizationRule, ...]
    active: tuple[bool, ...] = field(default=())

    def __post_init__(self):
        if not self.active:
            object.__setattr__(self, "active", tuple(rule.active for rule in self.rules))
        if len(self.active) != len(self.rules):
            raise RuleCatalogError("Active flags do not match the number of rules")

    @classmethod
    def of(cls, rules) -> "RuleSet":
        rules = tuple(rules)
        names = [rule.name for rule in rules]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise RuleCatalogError(f"Duplicate rule names: {', '.join(sorted(duplicates))}")
        return cls(rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def active_rules(self) -> list[SanitizationRule]:
        """Active rules in application order."""
        return [rule for rule, on in zip(self.rules, self.active) if on]

    def is_active(self, index: int) -> bool:
        return self.active[index]

    def toggle(self, index: int, active: bool) -> "RuleSet":
        """Return a copy with the rule at `index` switched on or off."""
        if not 0 <= index < len(self.rules):
            raise IndexError(f"Rule index {index} out of range (0-{len(self.rules) - 1})")
        flags = list(self.active)
        flags[index] = bool(active)
        return RuleSet(self.rules, tuple(flags))

    def index_of(self, name: str) -> int:
        for i, rule in enumerate(self.rules):
            if rule.name == name:
                return i
        raise KeyError(name)
