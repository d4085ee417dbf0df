"""Exception hierarchy for doc-panels.

// [LAW:one-source-of-truth] Every error this package raises derives from DocPanelsError.
"""


class DocPanelsError(Exception):
    """Base class for doc-panels errors."""


class ConfigurationError(DocPanelsError):
    """A descriptor or command could not be registered.

    Scoped to one descriptor: callers that register many descriptors catch this
    per descriptor and keep going.
    """

    def __init__(self, command_id: str, message: str) -> None:
        self.command_id = command_id
        super().__init__(f"{command_id or '<empty>'}: {message}")


class DuplicateCommandError(ConfigurationError):
    """The command id is already registered in this process."""

    def __init__(self, command_id: str) -> None:
        super().__init__(command_id, "command id is already registered")


class InvalidDescriptorError(ConfigurationError):
    """A descriptor field failed validation (title, url, sandbox...)."""


class RestorationError(DocPanelsError):
    """Restoration was configured after the restore pass already ran."""


class UnknownCommandError(DocPanelsError):
    """A command id was dispatched that nobody registered."""

    def __init__(self, command_id: str) -> None:
        self.command_id = command_id
        super().__init__(f"unknown command: {command_id}")
