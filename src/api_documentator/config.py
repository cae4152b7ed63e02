"""Generator configuration.

Loaded from a YAML file (``documentator.yaml``); every key is optional::

    info:
      title: Shop API
      version: 2.1.0
    format: json-api
    routes:
      include: ["api/*"]
    examples:
      seed: 42
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from api_documentator.errors import ConfigError
from api_documentator.schema.builder import DEFAULT_TYPE_MAP

DEFAULT_CONFIG_FILE = "documentator.yaml"


class InfoConfig(BaseModel):
    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str | None = None
    contact: dict[str, str] = {}
    license: dict[str, str] = {}


class ServerVariable(BaseModel):
    default: str = ""
    description: str | None = None
    enum: list[str] | None = None


class ServerConfig(BaseModel):
    url: str = "http://localhost"
    description: str | None = None
    variables: dict[str, ServerVariable] = {}


class SecurityConfig(BaseModel):
    schemes: dict[str, dict] = {
        "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
    }
    # scheme names applied to every operation unless it opts out
    default: list[str] = ["bearerAuth"]

    @field_validator("default", mode="before")
    @classmethod
    def _single_scheme(cls, value):
        if isinstance(value, str):
            return [value]
        return value or []


class RoutesConfig(BaseModel):
    include: list[str] = ["api/*"]
    exclude: list[str] = ["sanctum/*", "horizon/*", "_ignition/*", "__clockwork/*"]
    exclude_middleware: list[str] = []
    methods: list[str] = ["get", "post", "put", "patch", "delete"]


class TagsConfig(BaseModel):
    definitions: dict[str, str] = {}
    auto_generate: bool = True
    sort: bool = True


class ResourcesConfig(BaseModel):
    namespaces: list[str] = ["app.http.resources", "app.models"]


class ExamplesConfig(BaseModel):
    locale: str = "en_US"
    seed: int | None = None
    collection_size: int = Field(default=2, ge=1)
    per_page: int = Field(default=15, ge=1)


class OutputConfig(BaseModel):
    path: str = "docs/openapi.json"
    format: str = "json"
    pretty: bool = True

    @field_validator("format")
    @classmethod
    def _known_format(cls, value):
        value = value.lower()
        if value not in ("json", "yaml"):
            raise ValueError("output format must be 'json' or 'yaml'")
        return value


class DocumentatorConfig(BaseModel):
    """Everything the generator can be told."""

    openapi_version: str = "3.0.3"
    info: InfoConfig = InfoConfig()
    servers: list[ServerConfig] = [ServerConfig()]
    security: SecurityConfig = SecurityConfig()
    format: str = "simple"
    formats: dict[str, str] = {}
    routes: RoutesConfig = RoutesConfig()
    locale: str = "en"
    type_map: dict[str, str] = dict(DEFAULT_TYPE_MAP)
    tags: TagsConfig = TagsConfig()
    default_responses: dict[str, dict] = {}
    resources: ResourcesConfig = ResourcesConfig()
    examples: ExamplesConfig = ExamplesConfig()
    output: OutputConfig = OutputConfig()
    # replace invalid UTF-8 in strings instead of failing the write
    sanitize_utf8: bool = True

    @field_validator("default_responses", mode="before")
    @classmethod
    def _status_keys(cls, value):
        return {str(k): v for k, v in (value or {}).items()}


def load_config(file_path: Path | None = None) -> DocumentatorConfig:
    """Load configuration from YAML; no file means all defaults."""
    if file_path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return DocumentatorConfig()
        file_path = default

    try:
        data = yaml.safe_load(Path(file_path).read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {file_path} must be a mapping")

    try:
        return DocumentatorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {file_path}: {e}") from e
