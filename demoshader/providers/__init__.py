"""Shader providers, selected by the `demo:shaderProvider:tool` config key."""

from demoshader.config import Config
from demoshader.pipeline.errors import InvalidConfigurationError
from demoshader.providers.base import ShaderProvider
from demoshader.providers.simple import SimpleShaderProvider
from demoshader.providers.synthclipse import SynthclipseShaderProvider

PROVIDERS: dict[str, type[ShaderProvider]] = {
    SimpleShaderProvider.name: SimpleShaderProvider,
    SynthclipseShaderProvider.name: SynthclipseShaderProvider,
}


def create_shader_provider(tool: str, config: Config) -> ShaderProvider:
    """Create the provider registered under a tool name.

    Raises:
        InvalidConfigurationError: If no provider is registered for the tool
    """
    if tool not in PROVIDERS:
        raise InvalidConfigurationError(
            f"unknown shader provider '{tool}', expected one of: "
            f"{', '.join(PROVIDERS)}",
            "demo:shaderProvider:tool",
        )
    return PROVIDERS[tool](config)


__all__ = [
    "PROVIDERS",
    "ShaderProvider",
    "SimpleShaderProvider",
    "SynthclipseShaderProvider",
    "create_shader_provider",
]
