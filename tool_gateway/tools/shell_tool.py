# The module defines the executeShellCommand tool.
# Date: 2025-07-02
# Version: 0.1.0

import asyncio
import os
import re
import signal
from typing import Type

from pydantic import BaseModel, Field

from .base_tool import BaseTool
from tool_gateway.core.config import get_settings
from tool_gateway.core.errors import HandlerError
from tool_gateway.utils.logger import console

# Control characters, shell operators, redirections, substitutions and globs.
_RESTRICTED_PATTERN = re.compile(r"[\x00-\x1F\x7F]|;|&&|\|\||\||>|<|!|\$|\(|\)|\{|\}|\[|\]|\*|\?|~|`|\\")

_READ_CHUNK = 64 * 1024


class ShellCommandInput(BaseModel):
    """Input model for the executeShellCommand tool."""
    command: str = Field(..., description="The command line, run through the system shell.")


class ShellCommandTool(BaseTool):
    """
    Runs a command through the system shell and waits for it to finish.
    Standard output is returned on success; on failure the captured standard
    error becomes the error message.
    """
    name: str = "executeShellCommand"
    description: str = "Executes a shell command on the gateway host and returns its standard output."
    args_schema: Type[BaseModel] = ShellCommandInput

    def __init__(self):
        super().__init__()
        settings = get_settings()
        self.timeout = settings.SHELL_TIMEOUT
        self.max_output = settings.SHELL_MAX_OUTPUT
        self.restricted = settings.SHELL_RESTRICTED

    def _check_restrictions(self, command: str):
        if _RESTRICTED_PATTERN.search(command) or ".." in command:
            raise HandlerError("Security Violation: Command contains restricted characters or traversal.")

    async def _read_capped(self, stream: asyncio.StreamReader) -> bytes:
        """Reads a stream to EOF, keeping at most max_output bytes and discarding the rest."""
        kept = bytearray()
        while True:
            chunk = await stream.read(_READ_CHUNK)
            if not chunk:
                return bytes(kept)
            room = self.max_output - len(kept)
            if room > 0:
                kept += chunk[:room]

    def _kill(self, process: asyncio.subprocess.Process):
        # The shell runs in its own session, so its group id is its pid.
        if os.name != "posix":
            process.kill()
            return
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass

    def _decode(self, data: bytes) -> str:
        return data.decode("utf-8", errors="replace")

    async def execute(self, command: str) -> str:
        command = command.strip()
        if self.restricted:
            self._check_restrictions(command)

        console.info(f"Executing tool '{self.name}': {command!r}")
        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            raise HandlerError(str(e)) from e

        try:
            stdout, stderr, _ = await asyncio.wait_for(
                asyncio.gather(
                    self._read_capped(process.stdout),
                    self._read_capped(process.stderr),
                    process.wait(),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            self._kill(process)
            await process.wait()
            raise HandlerError(f"Command timed out after {self.timeout:g}s")

        if process.returncode != 0:
            message = self._decode(stderr).strip() or f"Command failed with exit code {process.returncode}"
            console.warning(f"Command {command!r} exited with {process.returncode}")
            raise HandlerError(message)

        return self._decode(stdout)
