"""End-to-end tests building a demo from its configuration."""

from pathlib import Path

import pytest

from demoshader.build import build_shader_definition, create_pipeline
from demoshader.config import load_config
from demoshader.minifiers import BuiltinShaderMinifier
from demoshader.pipeline.errors import InvalidConfigurationError
from demoshader.providers import SimpleShaderProvider


def test_create_pipeline(demo_dir: Path) -> None:
    """Test tool selection from the configuration."""
    config = load_config(demo_dir, {"demo": {"glslVersion": 450}})

    pipeline = create_pipeline(config)

    assert isinstance(pipeline.provider, SimpleShaderProvider)
    assert isinstance(pipeline.minifier, BuiltinShaderMinifier)
    assert pipeline.minify is True
    assert pipeline.glsl_version == "450"
    assert config.get("demo:shaderProvider:filename") == "shader.frag"


def test_unknown_tool_fails_before_building(demo_dir: Path) -> None:
    config = load_config(demo_dir, {"demo": {"shaderMinifier": {"tool": "crinkler"}}})

    with pytest.raises(InvalidConfigurationError):
        create_pipeline(config)


@pytest.mark.asyncio
async def test_build_demo(demo_dir: Path) -> None:
    """Test a full build without minification."""
    config = load_config(demo_dir, {"minify": False})

    definition = await build_shader_definition(config)

    assert definition.prolog_code == "#version 330\n"
    assert definition.common_code == (
        "uniform float floatUniforms[2];"
        "float wave(float x) {\n"
        "    return sin(x * 3.14159 + floatUniforms[0] * floatUniforms[1]);\n"
        "}\n"
    )
    assert definition.passes[0].fragment_code == (
        "void main() {\n    gl_FragColor = vec4(wave(1280.0));\n}\n"
    )
    assert not definition.variables.get("resolutionHeight").active


@pytest.mark.asyncio
async def test_build_demo_minified(demo_dir: Path) -> None:
    """Test a full build with the builtin minifier."""
    config = load_config(demo_dir)

    definition = await build_shader_definition(config)

    assert definition.uniform_arrays["float"].display_name == "a"
    assert definition.common_code == (
        "uniform float a[2];float wave(float x){return sin(x*3.14159+a[0]*a[1]);}"
    )
    assert len(definition.passes) == 1
    assert definition.passes[0].vertex_code == (
        "void main(){gl_Position=vec4(wave(0.0));}"
    )
    assert definition.passes[0].fragment_code == (
        "void main(){gl_FragColor=vec4(wave(1280.0));}"
    )


@pytest.mark.asyncio
async def test_builds_are_independent(demo_dir: Path) -> None:
    """Test that two builds from one config produce the same output."""
    config = load_config(demo_dir)

    first = await build_shader_definition(config)
    second = await build_shader_definition(config)

    assert first.common_code == second.common_code
    assert first.passes == second.passes
    assert first.variables is not second.variables
