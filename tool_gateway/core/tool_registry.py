# Discovers and manages the gateway's internal tools automatically.
# Date: 2025-07-02
# Version: 0.2.0

import pkgutil
import inspect
from typing import Any, Dict, List, Mapping, Optional

import pydantic

from tool_gateway import tools as tools_package
from tool_gateway.core.errors import UnknownToolError, ValidationError
from tool_gateway.tools.base_tool import BaseTool
from tool_gateway.utils.logger import console


def _format_validation_error(tool_name: str, error: pydantic.ValidationError) -> str:
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "args"
        problems.append(f"{field}: {item['msg']}")
    return f"Invalid arguments for tool '{tool_name}': " + "; ".join(problems)


class ToolRegistry:
    """
    A class to automatically discover, register, and execute internal tools by exact name.
    """
    def __init__(self):
        self.tools: Dict[str, BaseTool] = {}
        self._discover_tools()
        console.success(f"Tool discovery complete. Found {len(self.tools)} tools: {list(self.tools.keys())}")

    def _discover_tools(self):
        """
        Scans the tools package, imports all modules, finds classes that
        inherit from BaseTool, and creates an instance of each to register.
        """
        for _, modname, _ in pkgutil.iter_modules(tools_package.__path__, f"{tools_package.__name__}."):
            if modname.endswith(".base_tool"):
                continue
            try:
                module = __import__(modname, fromlist="dummy")
            except Exception as e:
                console.error(f"Failed to load tool module {modname}: {e}")
                continue
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, BaseTool) and obj is not BaseTool and obj.__module__ == module.__name__:
                    self.register(obj())

    def register(self, tool: BaseTool):
        self.tools[tool.name] = tool
        console.info(f"Successfully registered tool: '{tool.name}'")

    def get(self, tool_name: str) -> Optional[BaseTool]:
        return self.tools.get(tool_name)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self.tools

    def get_definitions(self) -> List[Dict[str, Any]]:
        """Returns the list of all tool definitions."""
        return [tool.get_definition() for tool in self.tools.values()]

    async def execute(self, tool_name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Validates the arguments against the tool's schema and executes it.

        Raises:
            UnknownToolError: If no internal tool has this exact name.
            ValidationError: If the arguments do not match the tool's schema.
        """
        tool = self.tools.get(tool_name)
        if tool is None:
            console.error(f"Attempted to execute unknown tool: {tool_name}")
            raise UnknownToolError(tool_name)

        try:
            validated = tool.args_schema.model_validate(dict(args or {}))
        except pydantic.ValidationError as e:
            raise ValidationError(_format_validation_error(tool_name, e)) from e

        return await tool.execute(**validated.model_dump())

# Create a singleton instance for global use throughout the application.
tool_registry = ToolRegistry()
