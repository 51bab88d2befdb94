# -*- coding: utf-8 -*-
"""Uniform result envelope returned by every tool."""

from __future__ import annotations

import json
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from camunda_mcp.api.scheme.errors import BackendRejection

NO_DETAILS = "No additional information"


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str

    model_config = ConfigDict(frozen=True)


class ToolResponse(BaseModel):
    content: List[TextBlock] = Field(..., min_length=1, description="Ordered content blocks")
    is_error: bool = Field(False, alias="isError")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


def pretty_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2, default=str)


def success_response(data: Any) -> ToolResponse:
    return ToolResponse(content=[TextBlock(text=pretty_json(data))], is_error=False)


def rejection_response(exc: BackendRejection) -> ToolResponse:
    body = exc.body if exc.body not in (None, "") else NO_DETAILS
    text = f"HTTP Error: {exc.status_code} - {exc.reason}\n{pretty_json(body)}"
    return ToolResponse(content=[TextBlock(text=text)], is_error=True)


def error_response(message: Any) -> ToolResponse:
    return ToolResponse(content=[TextBlock(text=f"Error: {message}")], is_error=True)
