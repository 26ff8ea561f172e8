from demoshader.build import build_shader_definition, create_pipeline
from demoshader.config import Config, load_config
from demoshader.pipeline import (
    Pass,
    ShaderBuildError,
    ShaderDefinition,
    ShaderPipeline,
    UniformArray,
    Variable,
    VariableKind,
    VariableRegistry,
)

__version__ = "0.1.0"


__all__ = [
    "Config",
    "Pass",
    "ShaderBuildError",
    "ShaderDefinition",
    "ShaderPipeline",
    "UniformArray",
    "Variable",
    "VariableKind",
    "VariableRegistry",
    "build_shader_definition",
    "create_pipeline",
    "load_config",
]
