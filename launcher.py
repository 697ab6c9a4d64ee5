"""
PortableApps Universal Launcher Replacer - command line entry point.

Usage:
    pa-replacer <PortableAppsDirectory> [UniversalLauncher.exe] [options]

Swaps every ``*Portable.exe`` launcher found under the directory for the
universal launcher, keeping the original as ``*Portable_original.exe``.
``--restore`` puts the originals back and ``--update`` re-copies the
universal launcher over apps that are already patched.
"""
import argparse
import logging
import sys

from pa_replacer.config import Mode, ReplacerConfig, check_preconditions
from pa_replacer.core import (
    DiscoveryError,
    WalkPolicy,
    find_launchers,
    find_patched_launchers,
    launcher_path_for_backup,
    refresh_launcher,
    restore_launcher,
    swap_launcher,
)
from pa_replacer.ui.report import BACKUP_PATTERN, RESTORE_TITLE, Reporter
from pa_replacer.utils.common import DEFAULT_REPLACEMENT
from pa_replacer.utils.log import install_crash_handler, setup_logging
from pa_replacer.utils.process import find_running
from version import get_version

log = logging.getLogger("launcher")

RUNNING_CAUSE = "launcher is running, close it and run again"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pa-replacer",
        description="Replace PortableApps launchers with a universal launcher.",
        epilog=(
            "Examples:\n"
            "  pa-replacer D:\\PortableApps\n"
            "  pa-replacer D:\\PortableApps C:\\Tools\\UniversalLauncher.exe\n"
            "  pa-replacer D:\\PortableApps --log C:\\Temp\\replacer.log"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root", nargs="?",
        help="Root directory containing PortableApps (e.g. D:\\PortableApps)",
    )
    parser.add_argument(
        "replacement", nargs="?", default=DEFAULT_REPLACEMENT,
        help=f"Path to the universal launcher (default: {DEFAULT_REPLACEMENT} in the current directory)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--restore", action="store_const", dest="mode", const=Mode.RESTORE,
        help="Put the original launchers back",
    )
    mode.add_argument(
        "--update", action="store_const", dest="mode", const=Mode.UPDATE,
        help="Re-copy the universal launcher over already patched apps",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Abort the scan on the first unreadable file or directory",
    )
    parser.add_argument("--log", metavar="FILE", help="Write a detailed log to FILE")
    parser.add_argument("--json-log", action="store_true", help="Use JSON lines for log output")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    parser.add_argument(
        "--include-running", action="store_true",
        help="Also swap launchers that are currently running",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.set_defaults(mode=Mode.SWAP)
    return parser


def config_from_args(args, isatty=False):
    """Build a ReplacerConfig from parsed arguments."""
    return ReplacerConfig(
        root=args.root,
        replacement=args.replacement,
        mode=args.mode,
        walk_policy=WalkPolicy.FAIL_FAST if args.strict else WalkPolicy.CONTINUE,
        log_file=args.log,
        structured_log=args.json_log,
        verbose=args.verbose,
        color=isatty and not args.no_color,
        assume_yes=args.yes,
        skip_running=not args.include_running,
    )


def _running(cfg, paths):
    return find_running(paths) if cfg.skip_running else set()


def run_swap(cfg, reporter):
    reporter.banner()
    reporter.setting("PortableApps Directory", cfg.root.absolute())
    reporter.setting("Universal Launcher", cfg.replacement.absolute())
    if cfg.log_file:
        reporter.setting("Log File", cfg.log_file)
    reporter.line()

    apps = find_launchers(cfg.root, cfg.walk_policy)
    if not apps:
        reporter.none_found()
        return 0

    reporter.found(apps)
    running = _running(cfg, apps)

    success_count = 0
    for app in apps:
        if app in running:
            reporter.failure(app.name, RUNNING_CAUSE)
            continue
        result = swap_launcher(app, cfg.replacement)
        if result.ok:
            reporter.success(app.name)
            success_count += 1
        else:
            reporter.failure(app.name, result.error)

    log.info("Patched %d of %d launchers", success_count, len(apps))
    reporter.summary(success_count, len(apps), "patched")
    if success_count > 0:
        reporter.celebrate("🎉 PortableApps have been patched! No more 'not closed properly' warnings!")
    return 0


def run_update(cfg, reporter):
    reporter.banner()
    reporter.setting("PortableApps Directory", cfg.root.absolute())
    reporter.setting("Universal Launcher", cfg.replacement.absolute())
    reporter.line()

    backups = find_patched_launchers(cfg.root, cfg.walk_policy)
    if not backups:
        reporter.none_found("patched PortableApps", BACKUP_PATTERN)
        return 0

    apps = [launcher_path_for_backup(b) for b in backups]
    reporter.found(apps, "patched PortableApps")
    running = _running(cfg, apps)

    success_count = 0
    for app in apps:
        if app in running:
            reporter.failure(app.name, RUNNING_CAUSE)
            continue
        result = refresh_launcher(app, cfg.replacement)
        if result.ok:
            reporter.success(app.name, "Updated")
            success_count += 1
        else:
            reporter.failure(app.name, result.error)

    log.info("Updated %d of %d launchers", success_count, len(apps))
    reporter.summary(success_count, len(apps), "updated")
    if success_count > 0:
        reporter.celebrate("🎉 Universal launcher updated!")
    return 0


def _confirm(prompt, ask):
    try:
        answer = ask(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def run_restore(cfg, reporter, ask=input):
    reporter.banner(RESTORE_TITLE)
    reporter.setting("PortableApps Directory", cfg.root.absolute())
    reporter.line()

    backups = find_patched_launchers(cfg.root, cfg.walk_policy)
    if not backups:
        reporter.none_found("patched PortableApps", BACKUP_PATTERN)
        return 0

    reporter.found(backups, "patched PortableApps")

    if not cfg.assume_yes:
        reporter.line("This will bring back the 'not closed properly' warnings.")
        if not _confirm("Continue? (y/N): ", ask):
            log.info("User cancelled restoration")
            reporter.line("Restoration cancelled by user.")
            return 0

    launchers = {b: launcher_path_for_backup(b) for b in backups}
    running = _running(cfg, [p for p in launchers.values() if p is not None])

    success_count = 0
    for backup in backups:
        if launchers[backup] in running:
            reporter.failure(launchers[backup].name, RUNNING_CAUSE)
            continue
        result = restore_launcher(backup)
        name = result.launcher.name if result.launcher else backup.name
        if result.ok:
            reporter.success(name, "Restored")
            success_count += 1
        else:
            reporter.failure(name, result.error)

    log.info("Restored %d of %d launchers", success_count, len(backups))
    reporter.summary(success_count, len(backups), "restored")
    if success_count > 0:
        reporter.celebrate("Original launchers are back in place.")
    return 0


def run(cfg, reporter=None, ask=input):
    """Execute one run described by *cfg* and return the exit code.

    Returns 1 for precondition or strict-mode discovery failures and 0
    otherwise, whatever the per-launcher outcomes were.
    """
    reporter = reporter or Reporter(color=cfg.color)

    errors = check_preconditions(cfg)
    if errors:
        for err in errors:
            log.error(err)
            reporter.error(err)
        return 1

    try:
        if cfg.mode is Mode.RESTORE:
            return run_restore(cfg, reporter, ask=ask)
        if cfg.mode is Mode.UPDATE:
            return run_update(cfg, reporter)
        return run_swap(cfg, reporter)
    except DiscoveryError as e:
        log.error("Scan aborted: %s", e)
        reporter.error(f"Scan aborted: {e}")
        return 1


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.root is None:
        parser.print_help()
        return 1

    cfg = config_from_args(args, isatty=sys.stdout.isatty())
    try:
        setup_logging(
            level=logging.DEBUG if cfg.verbose else logging.INFO,
            log_file=cfg.log_file,
            console_level=logging.DEBUG if cfg.verbose else logging.WARNING,
            structured=cfg.structured_log,
        )
    except OSError as e:
        Reporter(color=cfg.color).error(f"Cannot open log file {cfg.log_file}: {e}")
        return 1
    install_crash_handler()
    log.info("pa-replacer %s: mode=%s root=%s", get_version(), cfg.mode.value, cfg.root)
    return run(cfg)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(1)
