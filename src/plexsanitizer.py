"""
Plex name sanitizer: preview and apply clean folder or file names
Wraps the sanitizer scan engine for use from a terminal
"""

import argparse
import sys

import sanitizer as sanitizer_module
from sanitizer.errors import MappedDriveNotSupportedError, RuleCatalogError
from sanitizer.media.enrich import TMDbClient
from sanitizer.rules import configured_rule_set
from sanitizer.scan import FolderScanEngine, ScanMode, ScanState, ScanTarget
from sanitizer.utils import STATUS_DEMO, LogLevel, logger


def _print_rules(rule_set) -> None:
    logger.safe_print("\n📜 Sanitization rules:")
    for index, rule in enumerate(rule_set):
        marker = "x" if rule_set.is_active(index) else " "
        logger.safe_print(f"  [{marker}] {index:2d}  {rule.name}: {rule.description}")


def _print_preview(session) -> None:
    changed = session.changed
    if session.mode == ScanMode.OFFLINE:
        logger.safe_print("\n📡 Root is not reachable; showing example entries.")
    if not changed:
        logger.safe_print("⚠️ No names need to change.")
        return

    logger.safe_print("\n📋 Proposed renames:")
    for entry in changed:
        logger.safe_print(f"{entry.name} → {entry.new_name}")
    logger.safe_print(f"\nTotal entries: {len(session.entries)}, changes: {len(changed)}")


def _print_result(result, verb: str) -> None:
    for outcome in result.outcomes:
        if not outcome.ok:
            logger.safe_print(f"❌ {outcome.source}: {outcome.status}")
    if result.demo_mode:
        logger.safe_print(f"\n🧪 Demo mode: {len(result.outcomes)} entries {verb} in memory only ({STATUS_DEMO}).")
    elif result.success:
        logger.safe_print(f"\n🎉 Finished: {len(result.outcomes)} entries {verb}.")
    else:
        logger.safe_print(f"\n⚠️ Finished with {len(result.failed)} failure(s) out of {len(result.outcomes)}.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sanitize media folder and file names for a Plex Media Server. "
                    "Previews the proposed names unless --apply or --organize is given.",
        epilog="Example: plexsanitizer \\\\nas\\media\\Downloads --apply",
    )
    parser.add_argument("root", help="Folder whose immediate subfolders (or media files) are sanitized")
    parser.add_argument("--files", action="store_true", help="Sanitize media files instead of folders")
    parser.add_argument("--apply", action="store_true", help="Rename entries on disk (default: preview only)")
    parser.add_argument(
        "--organize",
        metavar="DIR",
        help="Move media files into Movies / TV Shows / Other folders under DIR (implies --files)",
    )
    parser.add_argument("--rules", metavar="FILE", help="JSON rule catalog (default: $SANITIZER_RULES_FILE or built-in)")
    parser.add_argument(
        "--disable-rule",
        metavar="N",
        type=int,
        action="append",
        default=[],
        help="Disable the rule at index N (repeatable, see --list-rules)",
    )
    parser.add_argument("--edition", action="store_true", help="Add {edition-...} to movie file names")
    parser.add_argument("--list-rules", action="store_true", help="List the rule catalog and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {sanitizer_module.__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    sanitizer_module.DEBUG = args.debug
    if args.debug:
        logger.set_log_level(LogLevel.DEBUG)

    try:
        rule_set = configured_rule_set(args.rules)
    except RuleCatalogError as e:
        logger.log("startup.error", LogLevel.ERROR, msg="Invalid rule catalog", error=str(e))
        return 2

    for index in args.disable_rule:
        try:
            rule_set = rule_set.toggle(index, False)
        except IndexError as e:
            parser.error(str(e))

    if args.list_rules:
        _print_rules(rule_set)
        return 0

    engine = FolderScanEngine(
        rule_set=rule_set,
        include_edition=args.edition,
        progress=True,
    )
    target = ScanTarget.FILES if (args.files or args.organize) else ScanTarget.FOLDERS

    try:
        session = engine.scan(args.root, target)
    except MappedDriveNotSupportedError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e), root=args.root)
        return 2

    if session.state == ScanState.EMPTY:
        logger.safe_print("⚠️ Nothing to sanitize.")
        return 0

    engine.preview(session)
    if target == ScanTarget.FILES:
        client = TMDbClient()
        if client.available:
            engine.enrich(session, client)
    _print_preview(session)

    if args.organize:
        result = engine.organize(session, args.organize)
        _print_result(result, "organized")
    elif args.apply and session.changed:
        result = engine.apply(session)
        _print_result(result, "renamed")
    else:
        return 0

    logger.log(
        "sanitizer.end",
        LogLevel.INFO,
        root=args.root,
        mode=session.mode.value,
        attempted=len(result.outcomes),
        failed=len(result.failed),
        demo_mode=result.demo_mode,
    )
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
