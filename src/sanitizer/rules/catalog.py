"""
Rule catalogs: the built-in default and JSON catalog files.

The order of the default catalog is part of its behavior:
1. Identifier extraction runs before any bracket stripping, otherwise the
   bracketed reference ID ("[tt0111161]") is removed before it can be kept.
2. Prefix removal runs before separators are normalized, because the prefix
   patterns key on the raw "[HD]" / "HD." forms.
3. The release group suffix is removed after format tags, brackets and
   separators. Only then is "-GROUP" at the very end of the name, even for
   "x264-GROUP[rarbg]" or "-GROUP." forms, so a second pass finds nothing.
4. Whitespace collapsing and trimming run last.

A JSON catalog is an array of objects with the keys `name`, `pattern`,
`replacement` and optionally `description`, `active` and `ignore_case`.
"""
import json
from pathlib import Path

from sanitizer.errors import RuleCatalogError
from sanitizer.rules.rule import RuleSet, SanitizationRule
from sanitizer.utils import RULES_FILE, LogLevel, logger

DEFAULT_CATALOG = [
    {
        "name": "Remove CJK Characters",
        "description": "Removes Japanese, Chinese and Korean characters while preserving Latin text",
        "pattern": r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uac00-\ud7af\u3000-\u303f\uff01-\uff0f]+",
        "replacement": "",
    },
    {
        "name": "Extract Reference ID",
        "description": "Keeps a bracketed IMDb id as a Plex {imdb-tt...} tag",
        "pattern": r"[\[\(\{]\s*(tt\d{7,8})\s*[\]\)\}]",
        "replacement": r" {imdb-\1} ",
    },
    {
        "name": "Remove Common Prefixes",
        "description": "Removes leading markers like [HD], [REPACK] or HD.",
        "pattern": r"^\s*(?:\[(?:HD|UHD|4K|REPACK|PROPER)\]\s*|(?:HD|UHD|4K)[._]+)+",
        "replacement": "",
    },
    {
        "name": "Remove Media Format Tags",
        "description": "Removes resolution, source, codec and audio specifications",
        "pattern": (
            r"(?<![A-Za-z0-9])(?:(?i:2160p|1080p|1080i|720p|576p|480p|UHD|HDR10|10bit|[xh]\.?26[45]|HEVC|BluRay|BDRip|BRRip|"
            r"WEB-?DL|WEBRip|HDTV|DVDRip|REMUX|AAC2\.0|AAC|AC3|DDP?5\.1|DTS-HD|DTS|Hardsub|Hi10P?|Dual Audio)"
            r"|WEB|HDR|AVC|Atmos)(?![A-Za-z0-9])"
        ),
        "replacement": "",
        # Case-sensitive so plain words like "Web" in a title survive
        "ignore_case": False,
    },
    {
        "name": "Remove Bracketed Content",
        "description": "Removes content within brackets and parentheses, keeping a (Year)",
        "pattern": r"\[[^\]]*\]|\((?!(?:19|20)\d{2}\))[^)]*\)",
        "replacement": "",
    },
    {
        "name": "Remove Language Labels",
        "description": "Removes ENG, MULTi, Subbed and Dubbed labels",
        "pattern": r"(?<![A-Za-z0-9])(?:ENG|English|MULTi|Subbed|Dubbed)(?![A-Za-z0-9])",
        "replacement": "",
        "active": False,
    },
    {
        "name": "Remove Invalid Characters",
        "description": "Removes characters not allowed in file and folder names",
        "pattern": r"[<>:\"/\\|?*]",
        "replacement": "",
    },
    {
        "name": "Replace Periods and Underscores",
        "description": "Replaces periods and underscores with spaces",
        "pattern": r"[_.]",
        "replacement": " ",
    },
    {
        "name": "Remove Release Group Suffix",
        "description": "Removes trailing -GROUP tags, including stacked ones like -EXTENDED -GROUP",
        "pattern": r"(?:\s+-+[A-Za-z0-9]*)+[\s-]*$",
        "replacement": "",
    },
    {
        "name": "Trim Dangling Separators",
        "description": "Removes hyphens and spaces left at the beginning and end",
        "pattern": r"^[\s-]+|[\s-]+$",
        "replacement": "",
    },
    {
        "name": "Replace Multiple Spaces",
        "description": "Replaces multiple spaces with a single space",
        "pattern": r"\s+",
        "replacement": " ",
    },
    {
        "name": "Remove Leading/Trailing Spaces",
        "description": "Removes spaces at the beginning and end of names",
        "pattern": r"^\s+|\s+$",
        "replacement": "",
    },
]


def build_rule_set(records) -> RuleSet:
    """Build a RuleSet from catalog records, in order. Raises RuleCatalogError on any bad record."""
    rules = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise RuleCatalogError(f"Catalog entry {position} is not an object")
        missing = [key for key in ("name", "pattern") if key not in record]
        if missing:
            raise RuleCatalogError(f"Catalog entry {position} is missing {', '.join(missing)}")
        rules.append(
            SanitizationRule.create(
                name=record["name"],
                pattern=record["pattern"],
                replacement=record.get("replacement", ""),
                description=record.get("description", ""),
                active=record.get("active", True),
                ignore_case=record.get("ignore_case", True),
            )
        )
    return RuleSet.of(rules)


def default_rule_set() -> RuleSet:
    return build_rule_set(DEFAULT_CATALOG)


def load_catalog(path: str | Path) -> RuleSet:
    """Load a JSON rule catalog file."""
    path = Path(path)
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RuleCatalogError(f"Cannot read rule catalog {path}: {e}") from e
    if not isinstance(records, list):
        raise RuleCatalogError(f"Rule catalog {path} must be a JSON array")

    rule_set = build_rule_set(records)
    logger.log("rules.loaded", LogLevel.DEBUG, path=str(path), rules=len(rule_set))
    return rule_set


def configured_rule_set(path: str | Path | None = None) -> RuleSet:
    """The catalog named by `path` or $SANITIZER_RULES_FILE, else the built-in one."""
    path = path or RULES_FILE
    return load_catalog(path) if path else default_rule_set()
