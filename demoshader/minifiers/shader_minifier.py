"""
Wrapper around the external Shader Minifier tool.

Each code section is minified separately with externals preserved, so that
the names shared between sections (functions, globals, uniform arrays) stay
consistent without any renaming list.
"""

import asyncio
import sys
from pathlib import Path

from loguru import logger

from demoshader.minifiers.base import ShaderMinifier
from demoshader.pipeline.errors import MinifierError
from demoshader.pipeline.models import ShaderDefinition

MINIFIER_ARGS = [
    "--format",
    "text",
    "--preserve-externals",
    "--no-renaming-list",
    "main",
]


class ShaderMinifierShaderMinifier(ShaderMinifier):
    """Runs Shader Minifier on the common code and every pass stage."""

    name = "shader-minifier"

    @property
    def work_directory(self) -> Path:
        return self.config.build_directory / "minifier"

    def command(self, input_path: Path, output_path: Path) -> list[str]:
        tool = self.config.get("tools:shader-minifier")
        command = [tool, *MINIFIER_ARGS, "-o", str(output_path), str(input_path)]
        # .NET executables need mono outside of Windows
        if tool.lower().endswith(".exe") and sys.platform != "win32":
            command.insert(0, self.config.get("tools:mono", "mono"))
        return command

    async def _run(self, label: str, code: str) -> str:
        input_path = self.work_directory / f"{label}.glsl"
        output_path = self.work_directory / f"{label}.min.glsl"
        input_path.write_text(code, encoding="utf-8")

        command = self.command(input_path, output_path)
        logger.debug(f"Running: {' '.join(command)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise MinifierError(f"executable not found: {command[0]}", self.name) from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            details = (stderr or stdout).decode(errors="replace").strip()
            raise MinifierError(
                f"exited with code {process.returncode} on {label}: {details}",
                self.name,
            )

        return output_path.read_text(encoding="utf-8")

    async def minify(self, definition: ShaderDefinition) -> None:
        self.work_directory.mkdir(parents=True, exist_ok=True)

        if definition.common_code:
            definition.common_code = await self._run("common", definition.common_code)

        for index, render_pass in enumerate(definition.passes):
            if render_pass.vertex_code:
                render_pass.vertex_code = await self._run(
                    f"pass{index}.vertex", render_pass.vertex_code
                )
            if render_pass.fragment_code:
                render_pass.fragment_code = await self._run(
                    f"pass{index}.fragment", render_pass.fragment_code
                )

        logger.info(f"Minified shader code with {self.config.get('tools:shader-minifier')}")
