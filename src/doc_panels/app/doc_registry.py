"""Documentation registry: the built-in panels plus user-configured ones.

// [LAW:one-source-of-truth] Built-in documentation targets are declared here.
"""

from __future__ import annotations

import logging
from typing import Iterable

from doc_panels.core.descriptor import DEFAULT_CATEGORY, DescriptorFactory, PanelDescriptor
from doc_panels.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

BUILTIN_DOCS: tuple[dict, ...] = (
    {
        "title": "Python SDK Docs",
        "url": "https://cognite-sdk-python.readthedocs-hosted.com/en/latest/",
        "command_id": "docs:open_python_sdk",
        "category": DEFAULT_CATEGORY,
        "rank": 0,
    },
    {
        "title": "API Docs",
        "url": "https://docs.cognite.com/api/v1/",
        "command_id": "docs:open_api",
        "category": DEFAULT_CATEGORY,
        "rank": 1,
    },
)


def build_descriptors(
    factory: DescriptorFactory,
    entries: Iterable[dict],
    taken: Iterable[str] = (),
) -> tuple[list[PanelDescriptor], list[ConfigurationError]]:
    """Build a descriptor per entry. A bad entry is logged and skipped alone."""
    taken = set(taken)
    descriptors: list[PanelDescriptor] = []
    failures: list[ConfigurationError] = []
    for entry in entries:
        try:
            descriptor = factory.from_mapping(entry, taken=taken)
        except ConfigurationError as exc:
            logger.error("invalid documentation entry: %s", exc)
            failures.append(exc)
            continue
        descriptors.append(descriptor)
    return descriptors, failures


def default_entries(extra: Iterable[dict] = ()) -> list[dict]:
    return [*BUILTIN_DOCS, *extra]
