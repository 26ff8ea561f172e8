"""
Exceptions raised while building a shader definition.

Every failure of the build pipeline derives from ShaderBuildError so that the
command line interface can report it uniformly. None of these errors are
retried; they abort the build.
"""


class ShaderBuildError(Exception):
    """Base class for all shader build failures.

    Attributes:
        message: Human readable description of the failure
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderError(ShaderBuildError):
    """The shader provider failed to produce a draft definition."""

    def __init__(self, message: str, tool: str | None = None):
        if tool:
            message = f"Shader provider '{tool}' failed: {message}"
        super().__init__(message)
        self.tool = tool


class EmptyPassesError(ShaderBuildError):
    """The shader provider returned a definition without any pass."""

    def __init__(self) -> None:
        super().__init__("Shader should define at least one pass.")


class MinifierError(ShaderBuildError):
    """The shader minifier failed or broke the definition it was given."""

    def __init__(self, message: str, tool: str | None = None):
        if tool:
            message = f"Shader minifier '{tool}' failed: {message}"
        super().__init__(message)
        self.tool = tool


class InvalidConfigurationError(ShaderBuildError):
    """A configuration value is missing or not valid."""

    def __init__(self, message: str, key: str | None = None):
        if key:
            message = f'Config key "{key}" is not valid: {message}'
        super().__init__(message)
        self.key = key


class InvalidVariableError(ShaderBuildError):
    """A variable was declared with an unusable name or without a value."""


class DuplicateVariableError(InvalidVariableError):
    """Two variables share a name within one compilation unit."""

    def __init__(self, name: str):
        super().__init__(f'Variable "{name}" is already declared.')
        self.name = name


class PipelineStateError(ShaderBuildError):
    """A pipeline stage was run out of order or twice."""
