"""
Variable resolution: constant inlining and dead-variable elimination.

Both stages run in a single pass over the registry. Constants are always
retired once inlined, so they can never reach the uniform packer.
"""

from loguru import logger

from demoshader.pipeline.models import ShaderDefinition, Variable, VariableKind
from demoshader.pipeline.references import is_referenced, replace_in_definition


def inline_constant(definition: ShaderDefinition, variable: Variable) -> None:
    """Replace every occurrence of a constant by its literal value.

    The prolog is rewritten as well. The constant is deactivated even when no
    occurrence was found.
    """
    logger.info(
        f'Replacing references to constant "{variable.name}" '
        f'by its value "{variable.value}".'
    )
    replace_in_definition(
        definition, variable.name, variable.value or "", include_prolog=True
    )
    variable.active = False


def eliminate_if_unreferenced(
    definition: ShaderDefinition, variable: Variable
) -> bool:
    """Deactivate a variable that nothing in the unit refers to.

    Returns:
        True if the variable is still active
    """
    if is_referenced(definition, variable.name):
        return True

    logger.info(
        f'Global variable "{variable.name}" is not referenced and won\'t be used.'
    )
    variable.active = False
    return False


def resolve_variables(definition: ShaderDefinition) -> None:
    """Inline constants and deactivate unreferenced variables, in registry order."""
    for variable in definition.variables:
        if not variable.active:
            continue

        if variable.kind == VariableKind.CONST:
            inline_constant(definition, variable)
        else:
            eliminate_if_unreferenced(definition, variable)
