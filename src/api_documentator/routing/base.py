"""Route table models.

Routes are owned by the host application; the documentator only reads them.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

_PARAMETER = re.compile(r"\{(\w+)\??\}")


class ActionRef(BaseModel):
    """Controller class (dotted import path) and method handling a route."""

    model_config = ConfigDict(frozen=True)

    controller: str
    method: str


class Route(BaseModel):
    """A single route of the host application."""

    model_config = ConfigDict(frozen=True)

    uri: str
    methods: list[str]
    name: str | None = None
    middleware: list[str] = []
    action: ActionRef | Literal["closure"] = "closure"

    @field_validator("action", mode="before")
    @classmethod
    def _parse_action(cls, value):
        # "pkg.module.Controller@method" shorthand
        if isinstance(value, str) and "@" in value:
            controller, method = value.split("@", 1)
            return {"controller": controller, "method": method}
        if value is None or (isinstance(value, str) and value.lower() == "closure"):
            return "closure"
        return value

    @property
    def action_ref(self) -> ActionRef | None:
        return self.action if isinstance(self.action, ActionRef) else None

    def parameter_names(self) -> list[str]:
        return _PARAMETER.findall(self.uri)
