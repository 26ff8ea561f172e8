"""
Uniform packing.

Active uniforms are grouped into one array per type. A uniform's array index
is its discovery position within that type and is fixed once assigned: every
usage is rewritten to the array access right away.
"""

from loguru import logger

from demoshader.pipeline.errors import PipelineStateError
from demoshader.pipeline.models import (
    ShaderDefinition,
    UniformArray,
    Variable,
    VariableKind,
)
from demoshader.pipeline.references import replace_in_definition


def uniform_array_name(type_: str) -> str:
    return f"{type_}Uniforms"


def _packed_variables(definition: ShaderDefinition) -> set[int]:
    return {
        id(variable)
        for uniform_array in definition.uniform_arrays.values()
        for variable in uniform_array.variables
    }


def pack_uniform(definition: ShaderDefinition, variable: Variable) -> int:
    """Append a uniform to the array of its type and rewrite its usages.

    Args:
        definition: Definition being built
        variable: Active uniform variable

    Returns:
        The array index assigned to the variable
    """
    uniform_array = definition.uniform_arrays.get(variable.type)
    if uniform_array is None:
        uniform_array = UniformArray(name=uniform_array_name(variable.type))
        definition.uniform_arrays[variable.type] = uniform_array

    index = len(uniform_array.variables)
    uniform_array.variables.append(variable)

    new_writing = f"{uniform_array.declared_name}[{index}]"
    replace_in_definition(definition, variable.name, new_writing)
    logger.debug(f'Packed uniform "{variable.name}" as {new_writing}')
    return index


def pack_uniforms(definition: ShaderDefinition) -> None:
    """Pack every active uniform of the registry, in registry order.

    Raises:
        PipelineStateError: If a uniform was already packed, since indices
            must never be reassigned
    """
    packed = _packed_variables(definition)

    for variable in definition.variables.active():
        if variable.kind != VariableKind.UNIFORM:
            continue
        if id(variable) in packed:
            raise PipelineStateError(
                f'Uniform "{variable.name}" has already been packed.'
            )
        pack_uniform(definition, variable)
