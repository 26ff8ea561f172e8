"""Shader minifiers, selected by the `demo:shaderMinifier:tool` config key."""

from demoshader.config import Config
from demoshader.minifiers.base import ShaderMinifier
from demoshader.minifiers.builtin import BuiltinShaderMinifier
from demoshader.minifiers.shader_minifier import ShaderMinifierShaderMinifier
from demoshader.pipeline.errors import InvalidConfigurationError

MINIFIERS: dict[str, type[ShaderMinifier]] = {
    ShaderMinifierShaderMinifier.name: ShaderMinifierShaderMinifier,
    BuiltinShaderMinifier.name: BuiltinShaderMinifier,
}


def create_shader_minifier(tool: str, config: Config) -> ShaderMinifier:
    """Create the minifier registered under a tool name.

    Raises:
        InvalidConfigurationError: If no minifier is registered for the tool
    """
    if tool not in MINIFIERS:
        raise InvalidConfigurationError(
            f"unknown shader minifier '{tool}', expected one of: "
            f"{', '.join(MINIFIERS)}",
            "demo:shaderMinifier:tool",
        )
    return MINIFIERS[tool](config)


__all__ = [
    "MINIFIERS",
    "BuiltinShaderMinifier",
    "ShaderMinifier",
    "ShaderMinifierShaderMinifier",
    "create_shader_minifier",
]
