"""
Provider reading a Synthclipse `.stoy` shader.

Synthclipse annotates uniforms with UI controls (`//! slider[...]`,
`//! color[...]`, ...) and stores named presets of their values in a
`/*! ... */` block. When a constants preset is configured, controls with a
value in that preset are frozen into constants.
"""

import re
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

PRESET_BLOCK_PATTERN = re.compile(r"/\*!(.*?)\*/[^\S\n]*\n?", re.DOTALL)
PRESET_PATTERN = re.compile(r'<preset\s+name="([^"]*)"\s*>(.*?)</preset>', re.DOTALL)
PRESET_VALUE_PATTERN = re.compile(r"^[\s*]*(\w+)\s*=\s*(.+?)\s*$", re.MULTILINE)
CONTROL_UNIFORM_PATTERN = re.compile(
    r"^uniform[ \t]+(\w+)[ \t]+(\w+)[ \t]*;[ \t]*//![^\n]*\n?", re.MULTILINE
)


def parse_presets(source: str) -> dict[str, dict[str, list[str]]]:
    """Parse every preset of the Synthclipse preset blocks.

    Returns:
        Mapping of preset name to a mapping of uniform name to its values
    """
    presets: dict[str, dict[str, list[str]]] = {}
    for block in PRESET_BLOCK_PATTERN.finditer(source):
        for preset in PRESET_PATTERN.finditer(block.group(1)):
            presets[preset.group(1)] = {
                match.group(1): [v.strip() for v in match.group(2).split(",")]
                for match in PRESET_VALUE_PATTERN.finditer(preset.group(2))
            }
    return presets


def format_preset_value(type_: str, values: list[str]) -> str:
    """Render preset values as a GLSL literal of the given type."""
    if type_ == "bool":
        return "true" if values[0].lower() in ("true", "1") else "false"
    if len(values) == 1 and type_ in ("float", "int", "uint"):
        return values[0]
    return f"{type_}({','.join(values)})"


class SynthclipseShaderProvider(ShaderProvider):
    """Reads a Synthclipse `.stoy` file."""

    name = "synthclipse"
    default_filename = "shader.stoy"

    def get_default_config(self) -> dict[str, Any]:
        return {**super().get_default_config(), "constantsPreset": None}

    def _select_preset(self, source: str) -> dict[str, list[str]]:
        preset_name = self.config.get("demo:shaderProvider:constantsPreset")
        if not preset_name:
            return {}

        presets = parse_presets(source)
        if preset_name not in presets:
            raise ProviderError(
                f'Preset "{preset_name}" not found, available: '
                f"{', '.join(presets) or 'none'}",
                self.name,
            )
        logger.info(f'Using preset "{preset_name}" for constants')
        return presets[preset_name]

    def _extract_controls(
        self, definition: ShaderDefinition, preset: dict[str, list[str]]
    ) -> None:
        registry = definition.variables

        def register(match: re.Match[str]) -> str:
            type_, name = match.group(1), match.group(2)
            if name in preset:
                registry.add_constant(
                    type_, name, format_preset_value(type_, preset[name])
                )
            else:
                registry.add_uniform(type_, name)
            return ""

        def extract(code: str | None) -> str | None:
            return CONTROL_UNIFORM_PATTERN.sub(register, code) if code else code

        definition.common_code = extract(definition.common_code) or ""
        for render_pass in definition.passes:
            render_pass.vertex_code = extract(render_pass.vertex_code)
            render_pass.fragment_code = extract(render_pass.fragment_code)

    async def provide(self, definition: ShaderDefinition) -> None:
        source = self.read_source()
        logger.info(f"Reading Synthclipse shader from {self.shader_path}")

        preset = self._select_preset(source)
        source = PRESET_BLOCK_PATTERN.sub("", source)

        version, body = extract_version(source)
        if version and definition.glsl_version is None:
            definition.glsl_version = version

        definition.common_code, definition.passes = split_sections(body)
        self._extract_controls(definition, preset)
        extract_declarations(definition)
