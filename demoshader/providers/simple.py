"""Provider reading a plain GLSL file from the demo directory."""

from typing import Any

from loguru import logger

from demoshader.pipeline.errors import ProviderError
from demoshader.pipeline.models import ShaderDefinition
from demoshader.providers.base import ShaderProvider
from demoshader.providers.source import (
    extract_declarations,
    extract_version,
    split_sections,
)


class SimpleShaderProvider(ShaderProvider):
    """Reads `shader.frag` and registers its top-level uniforms and constants.

    Extra variables can be declared in the `demo:shaderProvider:variables`
    config list, each entry being a mapping with `kind`, `type`, `name` and,
    for constants, `value`.
    """

    name = "simple"
    default_filename = "shader.frag"

    def get_default_config(self) -> dict[str, Any]:
        return {**super().get_default_config(), "variables": []}

    def _register_config_variables(self, definition: ShaderDefinition) -> None:
        for entry in self.config.get("demo:shaderProvider:variables", []):
            try:
                definition.variables.add_variable(
                    entry["kind"], entry["type"], entry["name"], entry.get("value")
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ProviderError(
                    f"Invalid variable declaration {entry!r}: {e}", self.name
                ) from e

    async def provide(self, definition: ShaderDefinition) -> None:
        source = self.read_source()
        logger.info(f"Reading shader from {self.shader_path}")

        version, body = extract_version(source)
        if version and definition.glsl_version is None:
            definition.glsl_version = version

        definition.common_code, definition.passes = split_sections(body)
        self._register_config_variables(definition)
        extract_declarations(definition)

        logger.debug(
            f"Provided {len(definition.passes)} pass(es) and "
            f"{len(definition.variables)} variable(s)"
        )
