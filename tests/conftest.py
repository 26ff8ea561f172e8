"""Fixtures and configuration for pytest."""

from pathlib import Path

import pytest

from demoshader.config import Config
from demoshader.minifiers.base import ShaderMinifier
from demoshader.pipeline.models import Pass, ShaderDefinition, VariableKind
from demoshader.providers.base import ShaderProvider

DEMO_SHADER = """#version 330
uniform float time, speed;
const float PI = 3.14159;
float wave(float x) {
    return sin(x * PI + time * speed);
}
//! VERTEX
void main() {
    gl_Position = vec4(wave(0.0));
}
//! FRAGMENT
void main() {
    gl_FragColor = vec4(wave(resolutionWidth));
}
"""


class StaticShaderProvider(ShaderProvider):
    """Provider returning fixed code and variables."""

    name = "static"

    def __init__(
        self,
        common_code: str = "",
        passes: list[Pass] | None = None,
        variables: list[tuple] | None = None,
        prolog_code: str | None = None,
        glsl_version: str | None = None,
        error: Exception | None = None,
    ):
        super().__init__(Config())
        self.common_code = common_code
        self.passes = passes if passes is not None else [Pass(fragment_code="")]
        self.variables = variables or []
        self.prolog_code = prolog_code
        self.glsl_version = glsl_version
        self.error = error
        self.calls = 0

    async def provide(self, definition: ShaderDefinition) -> None:
        self.calls += 1
        if self.error:
            raise self.error

        definition.common_code = self.common_code
        definition.passes = [
            Pass(vertex_code=p.vertex_code, fragment_code=p.fragment_code)
            for p in self.passes
        ]
        definition.prolog_code = self.prolog_code
        if self.glsl_version:
            definition.glsl_version = self.glsl_version
        for kind, type_, name, *value in self.variables:
            definition.variables.add_variable(
                VariableKind(kind), type_, name, value[0] if value else None
            )


class RecordingShaderMinifier(ShaderMinifier):
    """Minifier counting its calls and optionally running an action."""

    name = "recording"

    def __init__(self, action=None):
        super().__init__(Config())
        self.action = action
        self.calls = 0

    async def minify(self, definition: ShaderDefinition):
        self.calls += 1
        if self.action:
            return self.action(definition)
        return None


@pytest.fixture
def static_provider():
    """Fixture providing the static provider class."""
    return StaticShaderProvider


@pytest.fixture
def recording_minifier():
    """Fixture providing the recording minifier class."""
    return RecordingShaderMinifier


@pytest.fixture
def demo_dir(tmp_path: Path) -> Path:
    """Create a demo directory with a shader and a config file."""
    directory = tmp_path / "demo"
    directory.mkdir()
    (directory / "shader.frag").write_text(DEMO_SHADER, encoding="utf-8")
    (directory / "config.yml").write_text(
        "demo:\n"
        "  resolution:\n"
        "    width: 1280\n"
        "    height: 720\n"
        "  shaderMinifier:\n"
        "    tool: builtin\n"
        f"paths:\n  build: {(tmp_path / 'build').as_posix()}\n",
        encoding="utf-8",
    )
    return directory
