# The module is to define the base class for all internal tools of the gateway.
# Date: 2025-07-02
# Version: 0.2.0

from abc import ABC, abstractmethod
from typing import Any, Dict, Type

from pydantic import BaseModel


class BaseTool(ABC):
    """
    Abstract Base Class for all internal tools.

    This class defines a standard interface that all tools must implement.
    Attributes:
        name (str): The exact tool name callers use in '{"tool": ...}'.
        description (str): A brief description of what the tool does.
        args_schema (Type[BaseModel]): A Pydantic model defining the arguments
            that the tool accepts, which will be validated before execution.
    """
    name: str
    description: str
    args_schema: Type[BaseModel]

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        The core logic of the tool. This method must be implemented by all subclasses.

        Args:
            **kwargs: The arguments for the tool, already validated against args_schema.

        Returns:
            The tool's result. It is passed to the caller unchanged and must be JSON serializable.

        Raises:
            HandlerError: If the tool cannot complete.
        """
        pass

    def get_definition(self) -> Dict[str, Any]:
        """
        Returns the tool's definition in a format compliant with OpenAI's
        function-calling specification.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.args_schema.model_json_schema()
            }
        }
