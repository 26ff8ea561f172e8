"""
Declaration assembly.

Renders the declarations of the surviving variables and prepends them to the
common code. Uniform arrays come first, then plain globals grouped by type,
then the rewritten body: the output is a single linear unit without forward
declarations.
"""

from demoshader.pipeline.models import ShaderDefinition, VariableKind


def render_global_declarations(definition: ShaderDefinition) -> list[str]:
    """Render one declaration statement per type of active non-uniform variables."""
    globals_by_types: dict[str, list[str]] = {}

    for variable in definition.variables.active():
        if variable.kind == VariableKind.UNIFORM:
            continue

        entry = variable.declared_name
        if variable.kind == VariableKind.CONST:
            entry += "=" + (variable.value or "")
        globals_by_types.setdefault(variable.type, []).append(entry)

    return [
        f"{type_} {','.join(entries)};"
        for type_, entries in globals_by_types.items()
    ]


def render_uniform_declarations(definition: ShaderDefinition) -> list[str]:
    """Render the uniform array declarations, skipping empty arrays."""
    return [
        f"uniform {type_} {uniform_array.declared_name}"
        f"[{len(uniform_array.variables)}];"
        for type_, uniform_array in definition.uniform_arrays.items()
        if uniform_array.variables
    ]


def render_prolog(glsl_version: str) -> str:
    return f"#version {glsl_version}\n"


def assemble_declarations(definition: ShaderDefinition) -> None:
    """Prepend every declaration to the common code, in place."""
    global_declarations = render_global_declarations(definition)
    uniform_declarations = render_uniform_declarations(definition)

    if definition.glsl_version:
        definition.prolog_code = render_prolog(definition.glsl_version)

    definition.common_code = (
        "".join(uniform_declarations + global_declarations) + definition.common_code
    )
