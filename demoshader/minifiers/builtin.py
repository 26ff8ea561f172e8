"""
Minifier implemented in Python.

Removes comments and whitespace, and gives the shortest free names to the
declared globals and uniform arrays. Local identifiers and functions are left
untouched since the code is never parsed.
"""

import itertools
import re
import string
from collections.abc import Iterator

from loguru import logger

from demoshader.minifiers.base import ShaderMinifier
from demoshader.pipeline.models import ShaderDefinition, VariableKind
from demoshader.pipeline.references import replace_in_definition

GLSL_RESERVED_WORDS = {
    # Statements and qualifiers
    "attribute", "break", "case", "centroid", "const", "continue", "default",
    "discard", "do", "else", "flat", "for", "highp", "if", "in", "inout",
    "invariant", "layout", "lowp", "mediump", "noperspective", "out",
    "precision", "return", "smooth", "struct", "switch", "uniform", "varying",
    "void", "while", "true", "false",
    # Types
    "bool", "int", "uint", "float", "double",
    "bvec2", "bvec3", "bvec4", "ivec2", "ivec3", "ivec4",
    "uvec2", "uvec3", "uvec4", "vec2", "vec3", "vec4",
    "mat2", "mat3", "mat4", "sampler2D", "sampler3D", "samplerCube",
    # Short built-in functions
    "abs", "cos", "dot", "exp", "log", "max", "min", "mix", "mod", "pow",
    "sin", "tan", "main",
}

BLOCK_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
LINE_COMMENT_PATTERN = re.compile(r"//[^\n]*")
PUNCTUATION_SPACES_PATTERN = re.compile(r"\s*([;,(){}\[\]=*/<>!&|?:])\s*")
# Keeps "a - -b" and "i++" intact
ADDITIVE_SPACES_PATTERN = re.compile(r"(?<![+\-])\s*([+\-])\s*(?![+\-])")
TOKEN_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def name_generator() -> Iterator[str]:
    """Generate a, b, ..., z, aa, ab, ... forever."""
    letters = string.ascii_lowercase
    for length in itertools.count(1):
        for name_tuple in itertools.product(letters, repeat=length):
            yield "".join(name_tuple)


def compact_code(code: str) -> str:
    """Remove comments and unnecessary whitespace.

    Preprocessor directives are kept on their own lines, including when the
    code is appended to a previous section.
    """
    code = BLOCK_COMMENT_PATTERN.sub("", code)
    lines = [LINE_COMMENT_PATTERN.sub("", line).strip() for line in code.splitlines()]

    output: list[str] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            compacted = PUNCTUATION_SPACES_PATTERN.sub(r"\1", " ".join(buffer))
            output.append(ADDITIVE_SPACES_PATTERN.sub(r"\1", compacted))
            buffer.clear()

    for line in lines:
        if not line:
            continue
        if line.startswith("#"):
            flush()
            if not output or not output[-1].endswith("\n"):
                output.append("\n")
            output.append(line + "\n")
        else:
            buffer.append(line)
    flush()

    return "".join(output)


class BuiltinShaderMinifier(ShaderMinifier):
    """Minifier that needs no external tool."""

    name = "builtin"

    def _used_tokens(self, definition: ShaderDefinition) -> set[str]:
        tokens = set(GLSL_RESERVED_WORDS)
        for code in definition.code_sections(include_prolog=True):
            tokens.update(TOKEN_PATTERN.findall(code))
        for variable in definition.variables:
            tokens.add(variable.name)
        return tokens

    def _rename(self, definition: ShaderDefinition) -> None:
        used = self._used_tokens(definition)
        names = (name for name in name_generator() if name not in used)

        for uniform_array in definition.uniform_arrays.values():
            if not uniform_array.variables:
                continue
            uniform_array.display_name = next(names)
            replace_in_definition(
                definition,
                uniform_array.name,
                uniform_array.display_name,
                include_prolog=True,
            )
            logger.debug(
                f"Renamed uniform array {uniform_array.name} to "
                f"{uniform_array.display_name}"
            )

        for variable in definition.variables.active():
            if variable.kind == VariableKind.UNIFORM:
                continue
            variable.display_name = next(names)
            replace_in_definition(
                definition, variable.name, variable.display_name, include_prolog=True
            )
            logger.debug(f"Renamed {variable.name} to {variable.display_name}")

    async def minify(self, definition: ShaderDefinition) -> None:
        size_before = sum(len(code) for code in definition.code_sections())

        self._rename(definition)

        definition.common_code = compact_code(definition.common_code)
        for render_pass in definition.passes:
            if render_pass.vertex_code is not None:
                render_pass.vertex_code = compact_code(render_pass.vertex_code)
            if render_pass.fragment_code is not None:
                render_pass.fragment_code = compact_code(render_pass.fragment_code)

        size_after = sum(len(code) for code in definition.code_sections())
        logger.info(f"Minified shader code from {size_before} to {size_after} bytes")
