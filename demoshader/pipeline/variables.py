"""
Variable registry for a shader build.

The registry keeps declared variables in insertion order. That order is the
only source of determinism for uniform indices and declaration ordering, so
variables can be appended but never reordered or removed.
"""

import re
from collections.abc import Iterator

from loguru import logger

from demoshader.pipeline.errors import DuplicateVariableError, InvalidVariableError
from demoshader.pipeline.models import Variable, VariableKind

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class VariableRegistry:
    """Ordered, append-only collection of uniquely named variables."""

    def __init__(self, variables: list[Variable] | None = None):
        self._variables: list[Variable] = []
        self._names: set[str] = set()
        for variable in variables or []:
            self.add(variable)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"VariableRegistry({self._variables!r})"

    def get(self, name: str) -> Variable | None:
        for variable in self._variables:
            if variable.name == name:
                return variable
        return None

    def active(self) -> Iterator[Variable]:
        """Iterate over the variables that are still active."""
        return (variable for variable in self._variables if variable.active)

    def add(self, variable: Variable) -> Variable:
        """Append a variable to the registry.

        Args:
            variable: Variable to register

        Returns:
            The registered variable

        Raises:
            InvalidVariableError: If the name is not an identifier or a
                constant has no value
            DuplicateVariableError: If the name is already registered
        """
        if not IDENTIFIER_PATTERN.match(variable.name):
            raise InvalidVariableError(
                f'Variable name "{variable.name}" is not a valid identifier.'
            )
        if variable.kind == VariableKind.CONST and variable.value is None:
            raise InvalidVariableError(
                f'Constant "{variable.name}" must have a value.'
            )
        if variable.name in self._names:
            raise DuplicateVariableError(variable.name)

        self._variables.append(variable)
        self._names.add(variable.name)
        logger.debug(
            f"Registered {variable.kind.value} variable: {variable.type} "
            f"{variable.name}"
        )
        return variable

    def add_variable(
        self,
        kind: VariableKind | str,
        type_: str,
        name: str,
        value: object | None = None,
    ) -> Variable:
        """Create an active variable and append it to the registry.

        Values are stored as their literal text since they are inserted
        verbatim into the shader code.
        """
        return self.add(
            Variable(
                kind=VariableKind(kind),
                type=type_,
                name=name,
                value=None if value is None else str(value),
            )
        )

    def add_constant(self, type_: str, name: str, value: object) -> Variable:
        return self.add_variable(VariableKind.CONST, type_, name, value)

    def add_uniform(self, type_: str, name: str) -> Variable:
        return self.add_variable(VariableKind.UNIFORM, type_, name)

    def add_global(self, type_: str, name: str) -> Variable:
        return self.add_variable(VariableKind.GLOBAL, type_, name)
