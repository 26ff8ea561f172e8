"""Tests for uniform packing."""

import pytest

from demoshader.pipeline.errors import PipelineStateError
from demoshader.pipeline.models import Pass, ShaderDefinition, UniformArray
from demoshader.pipeline.uniforms import pack_uniforms, uniform_array_name


@pytest.fixture
def definition() -> ShaderDefinition:
    """Fixture providing a definition with uniforms of two types."""
    definition = ShaderDefinition(
        prolog_code="// time\n",
        common_code="float t() { return time * speed; }",
        passes=[
            Pass(
                vertex_code="void main() { gl_Position = vec4(mouse, time, 1.); }",
                fragment_code="void main() { gl_FragColor = vec4(speed); }",
            )
        ],
    )
    registry = definition.variables
    registry.add_uniform("float", "time")
    registry.add_global("vec3", "color")
    registry.add_uniform("vec2", "mouse")
    registry.add_uniform("float", "speed")
    return definition


def test_uniform_array_name() -> None:
    assert uniform_array_name("vec3") == "vec3Uniforms"


def test_uniforms_are_packed_in_discovery_order(definition: ShaderDefinition) -> None:
    """Test bucket creation and contiguous indices per type."""
    pack_uniforms(definition)

    assert list(definition.uniform_arrays) == ["float", "vec2"]
    floats = definition.uniform_arrays["float"]
    assert floats.name == "floatUniforms"
    assert [v.name for v in floats.variables] == ["time", "speed"]
    assert floats.variables[1] is definition.variables.get("speed")
    assert [v.name for v in definition.uniform_arrays["vec2"].variables] == ["mouse"]


def test_usages_are_rewritten(definition: ShaderDefinition) -> None:
    """Test that usages become array accesses outside of the prolog."""
    pack_uniforms(definition)

    assert definition.common_code == (
        "float t() { return floatUniforms[0] * floatUniforms[1]; }"
    )
    assert definition.passes[0].vertex_code == (
        "void main() { gl_Position = vec4(vec2Uniforms[0], floatUniforms[0], 1.); }"
    )
    assert definition.passes[0].fragment_code == (
        "void main() { gl_FragColor = vec4(floatUniforms[1]); }"
    )
    assert definition.prolog_code == "// time\n"


def test_inactive_uniforms_are_not_packed(definition: ShaderDefinition) -> None:
    """Test that deactivated uniforms get no index."""
    definition.variables.get("time").active = False

    pack_uniforms(definition)

    assert [v.name for v in definition.uniform_arrays["float"].variables] == ["speed"]
    assert "floatUniforms[0]" in definition.passes[0].fragment_code


def test_existing_display_name_is_used(definition: ShaderDefinition) -> None:
    """Test rewriting with an already assigned array display name."""
    definition.uniform_arrays["float"] = UniformArray(
        name="floatUniforms", display_name="f"
    )

    pack_uniforms(definition)

    assert definition.common_code == "float t() { return f[0] * f[1]; }"


def test_indices_are_never_reassigned(definition: ShaderDefinition) -> None:
    """Test that packing twice is rejected."""
    pack_uniforms(definition)

    with pytest.raises(PipelineStateError):
        pack_uniforms(definition)
    assert len(definition.uniform_arrays["float"].variables) == 2
