"""Route manifest loading.

A manifest is a YAML (or JSON) file listing the host application's routes::

    routes:
      - uri: api/users
        methods: [GET, HEAD]
        name: users.index
        middleware: [api]
        action: app.http.controllers.UserController@index
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from api_documentator.errors import ConfigError
from api_documentator.routing.base import Route


def load_routes(file_path: Path) -> list[Route]:
    """Load a route manifest. JSON is read by the YAML parser as well."""
    try:
        data = yaml.safe_load(Path(file_path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read route manifest {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("routes", [])
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"Route manifest {file_path} must contain a list of routes")

    try:
        return [Route(**item) for item in data]
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Invalid route in {file_path}: {e}") from e
