"""
Pipeline orchestration.

A build goes through the states DRAFTING, RESOLVING, PACKING, MINIFYING
(only when minification is enabled), ASSEMBLING and DONE. Any failure moves
the pipeline to FAILED. Stages run strictly in sequence; the provider and the
minifier are the only points where the build awaits a collaborator.
"""

from enum import Enum, auto
from typing import TYPE_CHECKING

from loguru import logger

from demoshader.pipeline.declarations import assemble_declarations
from demoshader.pipeline.errors import (
    EmptyPassesError,
    MinifierError,
    PipelineStateError,
    ProviderError,
    ShaderBuildError,
)
from demoshader.pipeline.models import ShaderDefinition
from demoshader.pipeline.resolve import resolve_variables
from demoshader.pipeline.uniforms import pack_uniforms

if TYPE_CHECKING:
    from demoshader.minifiers.base import ShaderMinifier
    from demoshader.providers.base import ShaderProvider


class PipelineState(Enum):
    """States of a shader build."""

    IDLE = auto()
    DRAFTING = auto()
    RESOLVING = auto()
    PACKING = auto()
    MINIFYING = auto()
    ASSEMBLING = auto()
    DONE = auto()
    FAILED = auto()


def _snapshot(definition: ShaderDefinition) -> tuple[list[str], dict[str, list[int]]]:
    active_names = [variable.name for variable in definition.variables.active()]
    members = {
        type_: [id(variable) for variable in uniform_array.variables]
        for type_, uniform_array in definition.uniform_arrays.items()
    }
    return active_names, members


class ShaderPipeline:
    """Builds one shader definition from a provider and an optional minifier.

    A pipeline instance runs a single build; each build owns its definition
    and variable registry.
    """

    def __init__(
        self,
        provider: "ShaderProvider",
        minifier: "ShaderMinifier | None" = None,
        minify: bool = False,
        glsl_version: str | None = None,
    ):
        """Initialize the pipeline.

        Args:
            provider: Collaborator drafting the definition
            minifier: Collaborator shrinking the definition, if any
            minify: Whether to run the minifier
            glsl_version: Target GLSL version, takes precedence over the
                version found by the provider
        """
        if minify and minifier is None:
            raise PipelineStateError("Minification is enabled but no minifier is set.")

        self.provider = provider
        self.minifier = minifier
        self.minify = minify
        self.glsl_version = glsl_version
        self.state = PipelineState.IDLE

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Shader pipeline: {self.state.name} -> {state.name}")
        self.state = state

    async def build(self, definition: ShaderDefinition | None = None) -> ShaderDefinition:
        """Run every stage and return the finished definition.

        Args:
            definition: Definition to fill, typically pre-seeded with
                configuration variables; a new one is created if omitted

        Returns:
            The same definition instance, fully assembled

        Raises:
            ProviderError: If the provider fails
            EmptyPassesError: If the provider produced no pass
            MinifierError: If the minifier fails or alters the variable set
            PipelineStateError: If the pipeline was already used
        """
        if self.state != PipelineState.IDLE:
            raise PipelineStateError(
                f"Shader pipeline already used (state: {self.state.name})."
            )

        if definition is None:
            definition = ShaderDefinition()

        try:
            await self._draft(definition)

            self._enter(PipelineState.RESOLVING)
            resolve_variables(definition)

            self._enter(PipelineState.PACKING)
            pack_uniforms(definition)

            if self.minify:
                await self._minify(definition)

            self._enter(PipelineState.ASSEMBLING)
            assemble_declarations(definition)
        except Exception:
            self._enter(PipelineState.FAILED)
            raise

        self._enter(PipelineState.DONE)
        return definition

    async def _draft(self, definition: ShaderDefinition) -> None:
        self._enter(PipelineState.DRAFTING)

        if self.glsl_version:
            definition.glsl_version = self.glsl_version

        try:
            await self.provider.provide(definition)
        except ProviderError:
            raise
        except ShaderBuildError as e:
            raise ProviderError(e.message, self.provider.name) from e
        except Exception as e:
            raise ProviderError(str(e), self.provider.name) from e

        if self.glsl_version and definition.glsl_version != self.glsl_version:
            logger.warning(
                f"Ignoring GLSL version {definition.glsl_version} from the "
                f"provider, using {self.glsl_version}."
            )
            definition.glsl_version = self.glsl_version

        if len(definition.passes) == 0:
            raise EmptyPassesError()

    async def _minify(self, definition: ShaderDefinition) -> None:
        self._enter(PipelineState.MINIFYING)
        if self.minifier is None:
            raise PipelineStateError("Minification is enabled but no minifier is set.")

        before = _snapshot(definition)
        try:
            result = await self.minifier.minify(definition)
        except ShaderBuildError:
            raise
        except Exception as e:
            raise MinifierError(str(e), self.minifier.name) from e

        if result is not None and result is not definition:
            raise MinifierError(
                "returned a different shader definition", self.minifier.name
            )
        if _snapshot(definition) != before:
            raise MinifierError(
                "changed the active variables or the uniform arrays",
                self.minifier.name,
            )
