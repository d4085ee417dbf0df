"""Extension activation: wires descriptors into a host.

// [LAW:locality-or-seam] The single place where binder, catalog and restoration meet.

Order matters: commands are bound first, then the catalog references them, then
restoration entries are registered so they exist before the host's restore pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from doc_panels.app import doc_registry
from doc_panels.app.catalog import PresentationCatalog
from doc_panels.app.command_binder import CommandBinder
from doc_panels.app.host import Host
from doc_panels.app.layout_restorer import LayoutRestorer
from doc_panels.app.restoration import RestorationCoordinator, RestorationEntry
from doc_panels.app.settings import Settings
from doc_panels.app.tracker import PanelTracker
from doc_panels.core.descriptor import DescriptorFactory, PanelDescriptor, RankSequence
from doc_panels.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Extension:
    binder: CommandBinder
    tracker: PanelTracker
    catalog: PresentationCatalog
    restoration: RestorationCoordinator
    descriptors: list[PanelDescriptor] = field(default_factory=list)
    failures: list[ConfigurationError] = field(default_factory=list)
    entries: list[RestorationEntry] = field(default_factory=list)


def activate(
    host: Host,
    restorer: LayoutRestorer,
    descriptors: Iterable[PanelDescriptor],
    settings: Settings | None = None,
    failures: Iterable[ConfigurationError] = (),
) -> Extension:
    settings = settings or Settings()
    tracker = PanelTracker(settings.namespace)
    binder = CommandBinder(host, tracker)
    bound, bind_failures = binder.bind_all(descriptors)

    catalog = PresentationCatalog(host, settings.catalog_options())
    catalog.register_all(bound)

    restoration = RestorationCoordinator(restorer, tracker)
    entries = restoration.register_all(bound)

    all_failures = [*failures, *bind_failures]
    logger.info(
        "activated %d documentation panel(s), %d skipped", len(bound), len(all_failures)
    )
    return Extension(
        binder=binder,
        tracker=tracker,
        catalog=catalog,
        restoration=restoration,
        descriptors=bound,
        failures=all_failures,
        entries=entries,
    )


def activate_defaults(
    host: Host,
    restorer: LayoutRestorer,
    settings: Settings | None = None,
    sequence: RankSequence | None = None,
) -> Extension:
    """Activate the built-in documentation panels plus settings ``extra_docs``."""
    settings = settings or Settings()
    factory = DescriptorFactory(sequence)
    descriptors, failures = doc_registry.build_descriptors(
        factory,
        doc_registry.default_entries(settings.extra_docs),
        taken=(command.command_id for command in host.commands.commands()),
    )
    return activate(host, restorer, descriptors, settings, failures)
