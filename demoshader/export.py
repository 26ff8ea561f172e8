"""
Rendering of finished shader definitions.

The C header produced here is what the native demo build includes: the shader
code as string literals, plus the uniform array names and indices needed to
upload uniform values.
"""

import re
from pathlib import Path

import arrow
from loguru import logger

from demoshader.pipeline.models import ShaderDefinition

STAGES = ("vertex", "fragment")


def c_string(text: str | None) -> str:
    """Render text as a C string literal, one source line per code line."""
    if text is None:
        return "0"
    if not text:
        return '""'

    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\t", "\\t")
    lines = escaped.split("\n")
    literals = [f'"{line}\\n"' for line in lines[:-1]]
    if lines[-1]:
        literals.append(f'"{lines[-1]}"')
    return "\n\t".join(literals)


def macro_name(name: str) -> str:
    """Convert an identifier such as `floatUniforms` to `FLOAT_UNIFORMS`."""
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    return re.sub(r"\W", "_", name).upper()


def render_glsl(definition: ShaderDefinition, pass_index: int, stage: str) -> str:
    """Return the full GLSL unit compiled for one stage of one pass.

    Raises:
        ValueError: If the pass or stage does not exist
    """
    if stage not in STAGES:
        raise ValueError(f"Unknown stage: {stage}, expected one of {STAGES}")
    if not 0 <= pass_index < len(definition.passes):
        raise ValueError(
            f"Pass {pass_index} does not exist, "
            f"the shader has {len(definition.passes)} pass(es)"
        )

    code = getattr(definition.passes[pass_index], f"{stage}_code")
    if code is None:
        raise ValueError(f"Pass {pass_index} has no {stage} code")

    return (definition.prolog_code or "") + definition.common_code + code


def render_header(definition: ShaderDefinition, timestamp: bool = True) -> str:
    """Render a definition as a C header.

    Args:
        definition: Finished shader definition
        timestamp: Whether to write the generation time in the banner

    Returns:
        Header source code
    """
    from demoshader import __version__

    lines = [f"// Generated by demoshader v{__version__}"]
    if timestamp:
        lines.append(
            f"// Generation time: {arrow.utcnow().format('YYYY-MM-DD HH:mm:ss UTC')}"
        )
    lines += ["", "#pragma once", "", f"#define PASS_COUNT {len(definition.passes)}"]

    for type_, uniform_array in definition.uniform_arrays.items():
        if not uniform_array.variables:
            continue
        prefix = f"UNIFORM_{macro_name(type_)}"
        lines.append(f'#define {prefix}_ARRAY "{uniform_array.declared_name}"')
        lines.append(f"#define {prefix}_COUNT {len(uniform_array.variables)}")
        for index, variable in enumerate(uniform_array.variables):
            lines.append(f"#define UNIFORM_{macro_name(variable.name)}_INDEX {index}")

    lines.append("")
    if definition.prolog_code:
        lines.append("#define HAS_SHADER_PROLOG")
        lines.append(
            f"static const char *shaderPrologCode = {c_string(definition.prolog_code)};"
        )
    lines.append(
        f"static const char *shaderCommonCode = {c_string(definition.common_code)};"
    )

    lines.append("static const char *shaderPassCodes[PASS_COUNT][2] = {")
    for render_pass in definition.passes:
        lines.append("\t{")
        lines.append(f"\t\t{c_string(render_pass.vertex_code)},")
        lines.append(f"\t\t{c_string(render_pass.fragment_code)},")
        lines.append("\t},")
    lines.append("};")

    return "\n".join(lines) + "\n"


def write_header(
    definition: ShaderDefinition, path: Path, timestamp: bool = True
) -> Path:
    """Write the C header of a definition, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_header(definition, timestamp=timestamp))
    logger.info(f"Shader header written to {path}")
    return path
