"""App lifecycle management for Textual in-process tests.

Creates DocPanelsApp instances wired for testing and manages run_test() lifecycle.
Settings and layout paths must already be redirected (see conftest fixtures).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from textual.pilot import Pilot

from doc_panels.app.settings import Settings
from doc_panels.tui.app import DocPanelsApp


@asynccontextmanager
async def run_app(
    *,
    size: tuple[int, int] = (120, 40),
    settings: Settings | None = None,
    descriptors=None,
    open_commands=(),
) -> AsyncIterator[tuple[Pilot, DocPanelsApp]]:
    """Create and run a DocPanelsApp in test mode. Yields (pilot, app)."""
    # [LAW:no-shared-mutable-globals] Fresh app and registries for every test
    app = DocPanelsApp(settings=settings, descriptors=descriptors, open_commands=open_commands)
    async with app.run_test(size=size) as pilot:
        # Ensure on_mount processing (including restoration) has completed
        await settle(pilot)
        yield pilot, app


async def settle(pilot: Pilot, rounds: int = 3) -> None:
    """Let pending mounts, workers and messages drain."""
    for _ in range(rounds):
        await pilot.pause()


async def run_and_settle(pilot: Pilot, app: DocPanelsApp, command_id: str) -> None:
    app.run_command(command_id)
    await settle(pilot)


async def press_and_settle(pilot: Pilot, *keys: str) -> None:
    await pilot.press(*keys)
    await settle(pilot)
