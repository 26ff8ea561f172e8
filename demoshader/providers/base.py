"""Base class for shader providers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from demoshader.config import Config
from demoshader.pipeline.errors import ProviderError
from demoshader.pipeline.models import ShaderDefinition


class ShaderProvider(ABC):
    """Drafts a shader definition from the demo sources.

    A provider fills the passes, the common code, optionally the prolog and
    GLSL version, and appends the variables it declares to the registry.
    """

    name: str = ""
    default_filename: str = ""

    def __init__(self, config: Config):
        self.config = config

    def get_default_config(self) -> dict[str, Any]:
        """Get the defaults of the `demo:shaderProvider` config section."""
        return {"filename": self.default_filename}

    @property
    def shader_path(self) -> Path:
        filename = self.config.get(
            "demo:shaderProvider:filename", self.default_filename
        )
        return self.config.directory / filename

    def read_source(self) -> str:
        path = self.shader_path
        if not path.is_file():
            raise ProviderError(f"Shader file not found: {path}", self.name)
        with open(path, encoding="utf-8") as f:
            return f.read()

    @abstractmethod
    async def provide(self, definition: ShaderDefinition) -> None:
        """Fill the definition in place.

        Args:
            definition: Fresh definition, possibly pre-seeded with variables
        """
        pass
