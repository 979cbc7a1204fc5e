# The module defines the local filesystem tools: readFile, writeFile and listFiles.
# Date: 2025-07-02
# Version: 0.1.0

import asyncio
from pathlib import Path
from typing import List, Type

from pydantic import BaseModel, Field

from .base_tool import BaseTool
from tool_gateway.core.errors import HandlerError
from tool_gateway.utils.logger import console


def _resolve(path: str) -> Path:
    return Path(path).expanduser().resolve()


class PathInput(BaseModel):
    """Input model for tools that take a single filesystem path."""
    path: str = Field(..., description="Path of the file or directory, absolute or relative to the gateway's working directory.")


class WriteFileInput(BaseModel):
    """Input model for the writeFile tool."""
    path: str = Field(..., description="Path of the file to write. Missing parent directories are created.")
    content: str = Field(..., description="Text written to the file, replacing any previous content.")


class ReadFileTool(BaseTool):
    """Reads the full text content of a file."""
    name: str = "readFile"
    description: str = "Reads the content of a file from the local filesystem."
    args_schema: Type[BaseModel] = PathInput

    async def execute(self, path: str) -> str:
        target = _resolve(path)
        console.info(f"Executing tool '{self.name}' on '{target}'")
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise HandlerError(str(e)) from e


class WriteFileTool(BaseTool):
    """Writes text to a file, creating all missing parent directories first."""
    name: str = "writeFile"
    description: str = "Writes content to a file on the local filesystem, creating parent directories as needed."
    args_schema: Type[BaseModel] = WriteFileInput

    async def execute(self, path: str, content: str) -> str:
        target = _resolve(path)
        console.info(f"Executing tool '{self.name}' on '{target}'")
        try:
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_text, content, encoding="utf-8")
        except OSError as e:
            raise HandlerError(str(e)) from e
        return f"File written successfully: {path}"


class ListFilesTool(BaseTool):
    """Lists the entry names of a directory, sorted by name."""
    name: str = "listFiles"
    description: str = "Lists the names of the entries in a directory on the local filesystem."
    args_schema: Type[BaseModel] = PathInput

    async def execute(self, path: str) -> List[str]:
        target = _resolve(path)
        console.info(f"Executing tool '{self.name}' on '{target}'")

        def _list() -> List[str]:
            return sorted(entry.name for entry in target.iterdir())

        try:
            return await asyncio.to_thread(_list)
        except OSError as e:
            raise HandlerError(str(e)) from e
