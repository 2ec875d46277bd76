"""Base contract shared by all calendar tool handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, NoReturn

from loguru import logger
from pydantic import BaseModel, Field

import gcal_client
from auth_gcal import OAuth2Client
from gcal_errors import ApiErrorKind, AuthenticationExpiredError, api_error_kind


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolResult(BaseModel):
    """
    Text blocks returned by a tool. ``is_error`` is part of the tool-result shape;
    handlers here raise on failure instead of setting it.
    """

    content: List[TextContent] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


class BaseToolHandler(ABC):
    """A tool that runs against Google Calendar on behalf of an authenticated client."""

    @abstractmethod
    async def run_tool(self, args: Dict[str, Any], oauth2_client: OAuth2Client) -> ToolResult:
        """
        Runs the tool with the given arguments and OAuth2 client.

        Args:
            args: Tool arguments as received from the caller.
            oauth2_client: Client whose credentials authorize the API calls.

        Returns:
            The tool result.
        """
        ...

    def classify_api_error(self, error: BaseException) -> NoReturn:
        """
        Re-raise an API failure. An invalid/expired grant becomes AuthenticationExpiredError;
        anything else is raised again as the same object.
        """
        if api_error_kind(error) is ApiErrorKind.INVALID_GRANT:
            logger.warning("{} hit an invalid grant: {}", type(self).__name__, error)
            raise AuthenticationExpiredError() from error
        raise error

    def get_calendar_client(self, oauth2_client: OAuth2Client) -> Any:
        """Calendar API v3 service bound to ``oauth2_client``."""
        return gcal_client.get_calendar_client(oauth2_client)
