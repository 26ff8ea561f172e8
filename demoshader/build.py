"""
Entry points wiring the configuration to the shader pipeline.

Tools are selected once from the configuration, before any stage runs, so an
unknown provider or minifier name fails the build early.
"""

from demoshader.config import Config
from demoshader.minifiers import create_shader_minifier
from demoshader.pipeline.models import ShaderDefinition
from demoshader.pipeline.orchestrator import ShaderPipeline
from demoshader.providers import create_shader_provider


def create_pipeline(config: Config) -> ShaderPipeline:
    """Create a pipeline from the configured provider and minifier.

    Raises:
        InvalidConfigurationError: If a tool name is unknown
    """
    provider = create_shader_provider(config.get("demo:shaderProvider:tool"), config)
    config.set_defaults("demo:shaderProvider", provider.get_default_config())

    minifier = create_shader_minifier(config.get("demo:shaderMinifier:tool"), config)

    glsl_version = config.get("demo:glslVersion")
    return ShaderPipeline(
        provider,
        minifier,
        minify=bool(config.get("minify")),
        glsl_version=None if glsl_version is None else str(glsl_version),
    )


async def build_shader_definition(config: Config) -> ShaderDefinition:
    """Build the shader definition of the configured demo.

    The registry is seeded with the variables declared by the configuration
    before the provider runs.
    """
    pipeline = create_pipeline(config)
    definition = ShaderDefinition(variables=config.create_registry())
    return await pipeline.build(definition)
