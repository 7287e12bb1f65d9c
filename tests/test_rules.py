import json

import pytest

from sanitizer.errors import RuleCatalogError
from sanitizer.rules import (
    DEFAULT_CATALOG,
    RuleSet,
    SanitizationRule,
    build_rule_set,
    configured_rule_set,
    default_rule_set,
    load_catalog,
)
from sanitizer.rules import catalog as catalog_module


# ────────────────────────────────────────────────
# SANITIZATION RULE
# ────────────────────────────────────────────────

def test_rule_applies_substitution_case_insensitively_by_default():
    rule = SanitizationRule.create("tags", r"1080p", "")
    assert rule.apply("Movie 1080P") == "Movie "


def test_rule_can_be_case_sensitive():
    rule = SanitizationRule.create("web", r"WEB", "", ignore_case=False)
    assert rule.apply("Spider Web WEB") == "Spider Web "


def test_dollar_backreferences_are_translated():
    rule = SanitizationRule.create("swap", r"(\w+)-(\w+)", "$2-$1")
    assert rule.apply("left-right") == "right-left"

    named = SanitizationRule.create("named", r"(?P<id>tt\d+)", "{imdb-${id}}")
    assert named.apply("tt0111161") == "{imdb-tt0111161}"


def test_python_backreferences_are_kept():
    rule = SanitizationRule.create("wrap", r"(\d{4})", r"(\1)")
    assert rule.apply("Movie 1999") == "Movie (1999)"


@pytest.mark.parametrize(
    "pattern, replacement",
    [
        (r"(unclosed", ""),
        (r"(\w+)", r"\2"),
        (r"(\w+)", "$3"),
        (r"(?P<a>\w+)", "${b}"),
    ],
)
def test_malformed_rules_fail_at_construction(pattern, replacement):
    with pytest.raises(RuleCatalogError):
        SanitizationRule.create("broken", pattern, replacement)


def test_rule_catalog_error_is_a_value_error():
    with pytest.raises(ValueError):
        SanitizationRule.create("broken", r"[", "")


def test_rule_requires_a_name():
    with pytest.raises(RuleCatalogError):
        SanitizationRule.create("", r"x", "")


# ────────────────────────────────────────────────
# RULE SET
# ────────────────────────────────────────────────

def _two_rules():
    return RuleSet.of([
        SanitizationRule.create("dots", r"\.", " "),
        SanitizationRule.create("upper", r"x", "X", active=False),
    ])


def test_rule_set_takes_active_flags_from_rules():
    rule_set = _two_rules()
    assert len(rule_set) == 2
    assert rule_set.is_active(0) is True
    assert rule_set.is_active(1) is False
    assert [r.name for r in rule_set.active_rules()] == ["dots"]


def test_toggle_returns_a_new_rule_set():
    original = _two_rules()
    toggled = original.toggle(1, True)

    assert toggled is not original
    assert toggled.is_active(1) is True
    assert original.is_active(1) is False
    assert [r.name for r in toggled.active_rules()] == ["dots", "upper"]


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_toggle_out_of_range_raises_index_error(index):
    with pytest.raises(IndexError):
        _two_rules().toggle(index, False)


def test_duplicate_rule_names_are_rejected():
    rule = SanitizationRule.create("same", r"a", "")
    with pytest.raises(RuleCatalogError):
        RuleSet.of([rule, rule])


def test_index_of():
    rule_set = _two_rules()
    assert rule_set.index_of("upper") == 1
    with pytest.raises(KeyError):
        rule_set.index_of("missing")


# ────────────────────────────────────────────────
# CATALOGS
# ────────────────────────────────────────────────

def test_default_catalog_builds_in_order():
    rule_set = default_rule_set()
    assert [r.name for r in rule_set] == [record["name"] for record in DEFAULT_CATALOG]
    assert rule_set.index_of("Extract Reference ID") < rule_set.index_of("Remove Bracketed Content")
    assert rule_set.is_active(rule_set.index_of("Remove Language Labels")) is False


def test_build_rule_set_rejects_bad_records():
    with pytest.raises(RuleCatalogError):
        build_rule_set([{"name": "no pattern"}])
    with pytest.raises(RuleCatalogError):
        build_rule_set(["not an object"])


def test_load_catalog_from_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps([
        {"name": "Dots", "pattern": r"\.", "replacement": " "},
        {"name": "Year", "pattern": r"(\d{4})", "replacement": "($1)", "active": False},
    ]), encoding="utf-8")

    rule_set = load_catalog(path)

    assert [r.name for r in rule_set] == ["Dots", "Year"]
    assert rule_set.is_active(1) is False
    assert rule_set.rules[1].apply("1999") == "(1999)"


@pytest.mark.parametrize("content", ["{not json", json.dumps({"name": "x"})])
def test_load_catalog_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "rules.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(RuleCatalogError):
        load_catalog(path)


def test_load_catalog_missing_file(tmp_path):
    with pytest.raises(RuleCatalogError):
        load_catalog(tmp_path / "missing.json")


def test_configured_rule_set_defaults_to_builtin(monkeypatch):
    monkeypatch.setattr(catalog_module, "RULES_FILE", "")
    assert [r.name for r in configured_rule_set()] == [r.name for r in default_rule_set()]


def test_configured_rule_set_reads_environment_file(monkeypatch, tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps([{"name": "Only", "pattern": "x"}]), encoding="utf-8")
    monkeypatch.setattr(catalog_module, "RULES_FILE", str(path))
    assert [r.name for r in configured_rule_set()] == ["Only"]
