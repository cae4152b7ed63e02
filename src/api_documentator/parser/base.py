"""Structured records produced by the doc-block parser.

Downstream builders only read these; they are never mutated after parsing.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class DocParam(BaseModel):
    """A ``@queryParam`` / ``@bodyParam`` / ``@urlParam`` entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"
    # None when the tag carried neither "required" nor "optional"
    required: bool | None = None
    description: str = ""


class DocResponse(BaseModel):
    """An explicit ``@response`` example."""

    model_config = ConfigDict(frozen=True)

    status: int = 200
    content: Any  # decoded JSON, or the raw text when it is not JSON


class ParsedDoc(BaseModel):
    """Everything a controller action's doc block says about the operation."""

    model_config = ConfigDict(frozen=True)

    summary: str | None = None
    description: str | None = None
    group: str | None = None
    resource: str | None = None
    deprecated: bool | None = None
    authenticated: bool | None = None
    tags: list[str] = []
    responses: list[DocResponse] = []
    query_params: list[DocParam] = []
    body_params: list[DocParam] = []
    url_params: list[DocParam] = []

    def to_dict(self) -> dict:
        """Plain dict without null or empty entries."""
        return {
            key: value
            for key, value in self.model_dump().items()
            if value is not None and value != []
        }

    def url_param(self, name: str) -> DocParam | None:
        return next((p for p in self.url_params if p.name == name), None)
