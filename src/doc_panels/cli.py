"""CLI entry point for doc-panels."""

import argparse
import logging
import sys

import doc_panels.app.settings
import doc_panels.io.layout_store
import doc_panels.io.logging_setup
from doc_panels.app import extension as _extension
from doc_panels.app.catalog import ordered
from doc_panels.app.host import CommandRegistry, Host, LauncherModel, MenuModel, PaletteModel
from doc_panels.app.layout_restorer import LayoutRestorer
from doc_panels.tui.app import DocPanelsApp

logger = logging.getLogger(__name__)


class _NullShell:
    """Shell for offline inspection; nothing is ever attached."""

    def attach(self, instance, area="main"):
        pass

    def activate_by_id(self, panel_id):
        pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-panels", description="Browse documentation panels in the terminal"
    )
    parser.add_argument(
        "--open",
        dest="open_commands",
        action="append",
        default=[],
        metavar="COMMAND_ID",
        help="Open a panel by command id after restoring the layout (repeatable)",
    )
    parser.add_argument(
        "--no-restore",
        action="store_true",
        default=False,
        help="Do not reopen the panels that were open at last exit",
    )
    parser.add_argument("--no-launcher", action="store_true", default=False, help="Hide the launcher tab")
    parser.add_argument("--no-menu", action="store_true", default=False, help="Hide the menu bar")
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        help="Print the registered documentation commands and exit",
    )
    parser.add_argument(
        "--clear-layout",
        action="store_true",
        default=False,
        help="Forget the saved panel layout and exit",
    )
    parser.add_argument("--log-level", default=None, help="Log level (env: DOC_PANELS_LOG_LEVEL)")
    return parser


def resolve_settings(args: argparse.Namespace):
    settings = doc_panels.app.settings.load()
    return settings.with_overrides(
        restore_enabled=False if args.no_restore else None,
        launcher_enabled=False if args.no_launcher else None,
        menu_enabled=False if args.no_menu else None,
    )


def list_commands(settings, out=None) -> int:
    if out is None:
        out = sys.stdout
    commands = CommandRegistry()
    host = Host(
        commands=commands,
        palette=PaletteModel(),
        shell=_NullShell(),
        launcher=LauncherModel(),
        menu=MenuModel(),
    )
    ext = _extension.activate_defaults(host, LayoutRestorer(commands, enabled=False), settings)
    for descriptor in ordered(ext.descriptors):
        print(
            f"{descriptor.command_id}\t{descriptor.category}\t{descriptor.rank}\t"
            f"{descriptor.title}\t{descriptor.url}",
            file=out,
        )
    for failure in ext.failures:
        print(f"skipped: {failure}", file=sys.stderr)
    return 1 if ext.failures else 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    runtime = doc_panels.io.logging_setup.configure(args.log_level)
    logger.info("doc-panels starting (log level %s, file %s)", runtime.level_name, runtime.file_path)

    settings = resolve_settings(args)

    if args.clear_layout:
        removed = doc_panels.io.layout_store.clear_layout()
        print("layout cleared" if removed else "no saved layout")
        return 0

    if args.list:
        return list_commands(settings)

    app = DocPanelsApp(settings=settings, open_commands=args.open_commands)
    app.run()
    logger.info("doc-panels exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())
