"""Base class for shader minifiers."""

from abc import ABC, abstractmethod

from demoshader.config import Config
from demoshader.pipeline.models import ShaderDefinition


class ShaderMinifier(ABC):
    """Shrinks a resolved and packed shader definition in place.

    A minifier may rewrite the code and assign display names to variables
    and uniform arrays. It must keep the shader entry points, the set of
    active variables and the uniform array indices intact.
    """

    name: str = ""

    def __init__(self, config: Config):
        self.config = config

    @abstractmethod
    async def minify(self, definition: ShaderDefinition) -> None:
        """Minify the definition in place."""
        pass
