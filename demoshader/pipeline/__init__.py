from demoshader.pipeline.declarations import assemble_declarations
from demoshader.pipeline.errors import (
    DuplicateVariableError,
    EmptyPassesError,
    InvalidConfigurationError,
    InvalidVariableError,
    MinifierError,
    PipelineStateError,
    ProviderError,
    ShaderBuildError,
)
from demoshader.pipeline.models import (
    Pass,
    ShaderDefinition,
    UniformArray,
    Variable,
    VariableKind,
)
from demoshader.pipeline.orchestrator import PipelineState, ShaderPipeline
from demoshader.pipeline.references import count_occurrences, is_referenced
from demoshader.pipeline.resolve import resolve_variables
from demoshader.pipeline.uniforms import pack_uniforms
from demoshader.pipeline.variables import VariableRegistry

__all__ = [
    "DuplicateVariableError",
    "EmptyPassesError",
    "InvalidConfigurationError",
    "InvalidVariableError",
    "MinifierError",
    "Pass",
    "PipelineState",
    "PipelineStateError",
    "ProviderError",
    "ShaderBuildError",
    "ShaderDefinition",
    "ShaderPipeline",
    "UniformArray",
    "Variable",
    "VariableKind",
    "VariableRegistry",
    "assemble_declarations",
    "count_occurrences",
    "is_referenced",
    "pack_uniforms",
    "resolve_variables",
]
