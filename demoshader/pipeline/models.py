"""
Data models for the shader assembly pipeline.

This module contains the dataclass definitions shared by every pipeline stage:
variables, render passes, uniform arrays and the shader definition under
construction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from demoshader.pipeline.variables import VariableRegistry


class VariableKind(Enum):
    """How a declared variable ends up in the compilation unit."""

    CONST = "const"
    UNIFORM = "uniform"
    GLOBAL = "global"


@dataclass
class Variable:
    """A declared shader-level symbol.

    Attributes:
        kind: Whether the variable is a constant, a uniform or a plain global
        type: GLSL type name, used to group declarations and uniform arrays
        name: Unique token used for textual substitution
        value: Literal text of the value, only meaningful for constants
        active: False once the variable was inlined or found unreferenced
        display_name: Shorter name assigned by a minifier for declarations
    """

    kind: VariableKind
    type: str
    name: str
    value: str | None = None
    active: bool = True
    display_name: str | None = None

    @property
    def declared_name(self) -> str:
        return self.display_name or self.name


@dataclass
class Pass:
    """One render pass with independently rewritten vertex and fragment code."""

    vertex_code: str | None = None
    fragment_code: str | None = None


@dataclass
class UniformArray:
    """Per-type array packing the active uniforms of that type.

    Attributes:
        name: Array name, "<type>Uniforms" unless a minifier renames it
        variables: Members in discovery order; the position is the array index
        display_name: Shorter name assigned by a minifier
    """

    name: str
    variables: list[Variable] = field(default_factory=list)
    display_name: str | None = None

    @property
    def declared_name(self) -> str:
        return self.display_name or self.name


def _new_registry() -> "VariableRegistry":
    from demoshader.pipeline.variables import VariableRegistry

    return VariableRegistry()


@dataclass
class ShaderDefinition:
    """The compilation unit built for one invocation of the pipeline.

    Attributes:
        common_code: Code shared by every pass
        passes: Render passes, at least one once the provider has run
        uniform_arrays: Uniform arrays keyed by type, in discovery order
        variables: The variable registry owned by this build
        prolog_code: Optional header text such as a version directive
        glsl_version: Target GLSL version, regenerates the prolog when set
    """

    common_code: str = ""
    passes: list[Pass] = field(default_factory=list)
    uniform_arrays: dict[str, UniformArray] = field(default_factory=dict)
    variables: "VariableRegistry" = field(default_factory=_new_registry)
    prolog_code: str | None = None
    glsl_version: str | None = None

    def code_sections(self, include_prolog: bool = False) -> list[str]:
        """Return the non-empty code sections of the unit, in document order."""
        sections = []
        if include_prolog and self.prolog_code:
            sections.append(self.prolog_code)
        if self.common_code:
            sections.append(self.common_code)
        for render_pass in self.passes:
            if render_pass.vertex_code:
                sections.append(render_pass.vertex_code)
            if render_pass.fragment_code:
                sections.append(render_pass.fragment_code)
        return sections
