"""Agent error types."""


class AgentError(Exception):
    """Base class for all agent errors."""


class ConfigError(AgentError):
    """Invalid startup configuration."""


class ToolError(AgentError):
    """Registry / dispatch level failure."""


class DuplicateToolError(ToolError):
    pass


class UnknownToolError(ToolError):
    pass


class ArgumentMismatchError(ToolError):
    pass


class RemoteError(AgentError):
    """Failure talking to an external data source."""


class RemoteFormatError(RemoteError):
    pass


class RemoteUnavailableError(RemoteError):
    pass


class CompletionUnavailableError(AgentError):
    """The completion service could not be reached or returned an error."""
