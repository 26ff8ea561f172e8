"""
Helpers shared by the providers to cut a shader file into sections.

A shader file is made of an optional `#version` line, common code, then
passes introduced by `//! VERTEX` and `//! FRAGMENT` marker lines.
"""

import re

from demoshader.pipeline.models import Pass, ShaderDefinition
from demoshader.pipeline.variables import VariableRegistry

VERSION_PATTERN = re.compile(r"\A\s*#version[ \t]+([^\r\n]+?)[ \t]*(?:\r?\n|\Z)")
MARKER_PATTERN = re.compile(r"^[ \t]*//![ \t]*(VERTEX|FRAGMENT)[ \t]*\r?\n?", re.MULTILINE)

UNIFORM_DECLARATION_PATTERN = re.compile(
    r"^uniform[ \t]+(\w+)[ \t]+(\w+(?:[ \t]*,[ \t]*\w+)*)[ \t]*;[^\S\n]*\n?",
    re.MULTILINE,
)
CONST_DECLARATION_PATTERN = re.compile(
    r"^const[ \t]+(\w+)[ \t]+([^;\n]+?)[ \t]*;[^\S\n]*\n?",
    re.MULTILINE,
)
CONST_DECLARATOR_PATTERN = re.compile(r"\A\s*(\w+)\s*=\s*(.*?)\s*\Z", re.DOTALL)


def extract_version(source: str) -> tuple[str | None, str]:
    """Split a leading `#version` directive from the source.

    Returns:
        Tuple of (version or None, remaining source)
    """
    match = VERSION_PATTERN.match(source)
    if not match:
        return None, source
    return match.group(1), source[match.end() :]


def split_sections(source: str) -> tuple[str, list[Pass]]:
    """Split a shader file body into common code and passes.

    Each marker fills that stage of the current pass, or starts a new pass
    when the stage is already set. Without any marker the whole body is the
    fragment code of a single pass.

    Returns:
        Tuple of (common code, passes)
    """
    parts = MARKER_PATTERN.split(source)
    if len(parts) == 1:
        return "", [Pass(fragment_code=source)]

    common_code = parts[0]
    passes: list[Pass] = []
    current: Pass | None = None

    for stage, code in zip(parts[1::2], parts[2::2]):
        attribute = "vertex_code" if stage == "VERTEX" else "fragment_code"
        if current is None or getattr(current, attribute) is not None:
            current = Pass()
            passes.append(current)
        setattr(current, attribute, code)

    return common_code, passes


def split_declarators(declarators: str) -> list[str]:
    """Split a declarator list on the commas outside of any brackets.

    Example:
        >>> split_declarators("A = vec2(1.0, 2.0), B = 3.0")
        ['A = vec2(1.0, 2.0)', ' B = 3.0']
    """
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(declarators):
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(declarators[start:index])
            start = index + 1
    parts.append(declarators[start:])
    return parts


def parse_const_declarators(declarators: str) -> list[tuple[str, str]] | None:
    """Parse `A = 1.0, B = vec2(A, 2.0)` into (name, value) pairs.

    Returns:
        The pairs, or None when a declarator is not a plain `name = value`
        (arrays, missing initializers)
    """
    pairs = []
    for declarator in split_declarators(declarators):
        match = CONST_DECLARATOR_PATTERN.match(declarator)
        if not match or not match.group(2):
            return None
        pairs.append((match.group(1), match.group(2)))
    return pairs


def _extract(code: str, pattern: re.Pattern[str], register) -> str:
    def replace(match: re.Match[str]) -> str:
        return "" if register(match) else match.group(0)

    return pattern.sub(replace, code)


def extract_declarations(
    definition: ShaderDefinition,
    extract_uniforms: bool = True,
    extract_constants: bool = True,
) -> None:
    """Move top-level uniform and const declarations of the shared code into
    the registry.

    The shared code is the common code, or the fragment code of a shader made
    of a single fragment-only pass without common code. Only declarations
    starting at the first column are considered, so that function-local
    constants stay in the code. Other pass code is left untouched.
    """
    registry: VariableRegistry = definition.variables
    single_pass = None
    if (
        not definition.common_code
        and len(definition.passes) == 1
        and definition.passes[0].vertex_code is None
        and definition.passes[0].fragment_code
    ):
        single_pass = definition.passes[0]

    def register_uniforms(match: re.Match[str]) -> bool:
        for name in match.group(2).split(","):
            registry.add_uniform(match.group(1), name.strip())
        return True

    def register_constants(match: re.Match[str]) -> bool:
        pairs = parse_const_declarators(match.group(2))
        if pairs is None:
            return False
        for name, value in pairs:
            registry.add_constant(match.group(1), name, value)
        return True

    for pattern, register, enabled in (
        (UNIFORM_DECLARATION_PATTERN, register_uniforms, extract_uniforms),
        (CONST_DECLARATION_PATTERN, register_constants, extract_constants),
    ):
        if not enabled:
            continue
        if single_pass is not None:
            single_pass.fragment_code = _extract(
                single_pass.fragment_code or "", pattern, register
            )
        elif definition.common_code:
            definition.common_code = _extract(definition.common_code, pattern, register)
