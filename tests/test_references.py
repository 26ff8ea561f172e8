"""Tests for whole-token reference analysis."""

import pytest

from demoshader.pipeline.models import Pass, ShaderDefinition
from demoshader.pipeline.references import (
    count_occurrences,
    is_referenced,
    replace_in_definition,
    replace_occurrences,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("time", 1),
        ("time timer _time time2 time", 2),
        ("u.time + time.x", 2),
        ("floatUniforms[time]", 1),
        ("mytime", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_count_occurrences(text: str | None, expected: int) -> None:
    """Test that only whole tokens are counted."""
    assert count_occurrences(text, "time") == expected


def test_count_occurrences_escapes_name() -> None:
    """Test that the name is matched literally."""
    assert count_occurrences("a+b", "a") == 1
    assert count_occurrences("axb", "a.b") == 0


def test_replace_occurrences_is_verbatim() -> None:
    """Test that replacement text is not interpreted as a template."""
    assert replace_occurrences("x = k;", "k", r"\1\g<0>") == r"x = \1\g<0>;"
    assert replace_occurrences("kk k", "k", "2.0") == "kk 2.0"
    assert replace_occurrences(None, "k", "2.0") is None


def test_is_referenced_searches_common_and_passes() -> None:
    """Test reference detection in every code section but the prolog."""
    definition = ShaderDefinition(
        prolog_code="#define USE_FOG fog\n",
        common_code="float f() { return speed; }",
        passes=[
            Pass(vertex_code="void main() { gl_Position = pos; }"),
            Pass(fragment_code="void main() { gl_FragColor = color; }"),
        ],
    )

    assert is_referenced(definition, "speed")
    assert is_referenced(definition, "pos")
    assert is_referenced(definition, "color")
    assert not is_referenced(definition, "fog")
    assert not is_referenced(definition, "missing")


def test_replace_in_definition() -> None:
    """Test that rewriting skips the prolog unless asked."""
    definition = ShaderDefinition(
        prolog_code="// k\n",
        common_code="k",
        passes=[Pass(vertex_code="k*k", fragment_code=None)],
    )

    replace_in_definition(definition, "k", "1.0")
    assert definition.prolog_code == "// k\n"
    assert definition.common_code == "1.0"
    assert definition.passes[0].vertex_code == "1.0*1.0"
    assert definition.passes[0].fragment_code is None

    replace_in_definition(definition, "k", "2.0", include_prolog=True)
    assert definition.prolog_code == "// 2.0\n"
