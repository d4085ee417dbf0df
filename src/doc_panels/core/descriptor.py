"""Panel descriptors: immutable metadata for one documentation target.

// [LAW:one-source-of-truth] Descriptor field validation lives in this module only.
// [LAW:no-shared-mutable-globals] Default ranks come from an injected RankSequence,
//   never from a class-level counter.

This module is pure data with no dependencies on other layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable
from urllib.parse import urlsplit

from doc_panels.core.errors import DuplicateCommandError, InvalidDescriptorError

DEFAULT_CATEGORY = "Docs"
DEFAULT_CAPTION = "Open documentation"
DEFAULT_ICON = "◆"

# [LAW:one-source-of-truth] Capabilities the embedding surface may be granted.
# Everything not listed here is denied.
SANDBOX_PERMISSIONS = frozenset({"allow-same-origin", "allow-scripts", "allow-forms"})
DEFAULT_SANDBOX = frozenset({"allow-same-origin", "allow-scripts"})

_URL_SCHEMES = {"http", "https"}


class RankSequence:
    """Monotonic source of default ranks.

    Values handed out are strictly increasing and never reused. One sequence is
    shared by every descriptor built for a process, so creation order decides
    default ordering. Explicit ranks are observed so later defaults sort after them.
    """

    def __init__(self, start: int = 0) -> None:
        self._next = start
        self._last: int | None = None

    def next(self) -> int:
        value = self._next
        self._next += 1
        self._last = value
        return value

    def observe(self, rank: int) -> None:
        """Move past an explicitly assigned ``rank``."""
        if rank >= self._next:
            self._next = rank + 1

    @property
    def last(self) -> int | None:
        """Most recently issued rank, or None if nothing was issued yet."""
        return self._last


def _check_url(command_id: str, url: str) -> None:
    parts = urlsplit(url)
    if parts.scheme not in _URL_SCHEMES or not parts.netloc:
        raise InvalidDescriptorError(command_id, f"invalid url {url!r}")


def normalize_sandbox(command_id: str, permissions: Iterable[str] | None) -> frozenset[str]:
    """Return the permission set as a frozenset, rejecting unknown capabilities."""
    if permissions is None:
        return DEFAULT_SANDBOX
    if isinstance(permissions, str):
        permissions = permissions.split()
    normalized = frozenset(str(p).strip() for p in permissions if str(p).strip())
    unknown = normalized - SANDBOX_PERMISSIONS
    if unknown:
        raise InvalidDescriptorError(
            command_id, f"unsupported sandbox permission(s): {', '.join(sorted(unknown))}"
        )
    return normalized


@dataclass(frozen=True)
class PanelDescriptor:
    """Immutable description of one documentation panel.

    ``command_id`` is the join key across the command binder, the restoration
    coordinator and the presentation catalog.
    """

    title: str
    url: str
    command_id: str
    category: str = DEFAULT_CATEGORY
    rank: int = 0
    sandbox: frozenset[str] = field(default=DEFAULT_SANDBOX)
    caption: str = DEFAULT_CAPTION
    icon: str = DEFAULT_ICON

    def __post_init__(self) -> None:
        if not str(self.command_id or "").strip():
            raise InvalidDescriptorError(self.command_id, "command id must not be empty")
        if not str(self.title or "").strip():
            raise InvalidDescriptorError(self.command_id, "title must not be empty")
        _check_url(self.command_id, self.url)
        if not isinstance(self.rank, int) or isinstance(self.rank, bool):
            raise InvalidDescriptorError(self.command_id, f"rank must be an int, got {self.rank!r}")
        if not isinstance(self.sandbox, frozenset) or not self.sandbox <= SANDBOX_PERMISSIONS:
            raise InvalidDescriptorError(self.command_id, f"invalid sandbox {self.sandbox!r}")

    @property
    def sort_key(self) -> tuple[str, int]:
        return (self.category, self.rank)


class DescriptorFactory:
    """Builds descriptors, enforcing process-wide command id uniqueness.

    Collision and field checks run before a default rank is drawn, so a failed
    construction leaves the sequence untouched.
    """

    def __init__(self, sequence: RankSequence | None = None) -> None:
        self.sequence = sequence if sequence is not None else RankSequence()
        self._issued: set[str] = set()

    @property
    def command_ids(self) -> frozenset[str]:
        return frozenset(self._issued)

    def create(
        self,
        title: str,
        url: str,
        command_id: str,
        category: str | None = None,
        rank: int | None = None,
        sandbox: Iterable[str] | None = None,
        caption: str | None = None,
        icon: str | None = None,
        taken: Iterable[str] = (),
    ) -> PanelDescriptor:
        """Create a descriptor.

        Args:
            taken: Command ids registered elsewhere (e.g. in the dispatcher)
                that must also be treated as collisions.

        Raises:
            DuplicateCommandError: command id already issued or taken.
            InvalidDescriptorError: a field failed validation.
        """
        if command_id in self._issued or command_id in set(taken):
            raise DuplicateCommandError(command_id)

        fields = dict(
            title=title,
            url=url,
            command_id=command_id,
            category=category or DEFAULT_CATEGORY,
            sandbox=normalize_sandbox(command_id, sandbox),
            caption=caption or DEFAULT_CAPTION,
            icon=icon or DEFAULT_ICON,
        )
        # Validate with a placeholder rank first; only a valid descriptor draws one.
        PanelDescriptor(rank=rank if rank is not None else 0, **fields)
        if rank is None:
            rank = self.sequence.next()
        else:
            self.sequence.observe(rank)
        descriptor = PanelDescriptor(rank=rank, **fields)
        self._issued.add(command_id)
        return descriptor

    def from_mapping(self, data: dict, taken: Iterable[str] = ()) -> PanelDescriptor:
        """Create a descriptor from a settings-file style mapping."""
        if not isinstance(data, dict):
            raise InvalidDescriptorError("", f"descriptor entry must be a mapping, got {type(data).__name__}")
        command_id = str(data.get("command_id") or data.get("commandId") or "")
        rank = data.get("rank")
        return self.create(
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            command_id=command_id,
            category=data.get("category"),
            rank=rank if rank is None else _coerce_rank(command_id, rank),
            sandbox=data.get("sandbox"),
            caption=data.get("caption"),
            icon=data.get("icon"),
            taken=taken,
        )


def _coerce_rank(command_id: str, value: object) -> int:
    if isinstance(value, bool):
        raise InvalidDescriptorError(command_id, f"rank must be an int, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidDescriptorError(command_id, f"rank must be an int, got {value!r}") from exc
