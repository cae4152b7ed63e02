"""Format lookup by name or dotted class path."""

import importlib
import inspect
from collections.abc import Callable

from api_documentator.errors import ConfigError, UnknownFormatError
from api_documentator.formats.base import ResponseFormat
from api_documentator.formats.jsonapi import JsonApiFormat
from api_documentator.formats.simple import SimpleFormat

FormatFactory = Callable[..., ResponseFormat]

BUILTIN_FORMATS: dict[str, FormatFactory] = {
    "simple": SimpleFormat,
    "json-api": JsonApiFormat,
}


class FormatRegistry:
    """Maps format identifiers to factories.

    Factories are called with the keyword arguments given to :meth:`create`
    (``schema_builder``, ``messages``, ``per_page``, ``collection_size``).
    """

    def __init__(self, formats: dict[str, FormatFactory | str] | None = None):
        self._factories: dict[str, FormatFactory] = dict(BUILTIN_FORMATS)
        for name, factory in (formats or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: FormatFactory | str) -> None:
        if isinstance(factory, str):
            factory = _import_format(factory)
        self._factories[name] = factory

    def names(self) -> list[str]:
        return list(self._factories)

    def create(self, name: str, **kwargs) -> ResponseFormat:
        factory = self._factories.get(name)

        if factory is None and "." in name:
            factory = _import_format(name)

        if factory is None:
            raise UnknownFormatError(name, self.names())

        instance = factory(**kwargs)
        if not isinstance(instance, ResponseFormat):
            raise ConfigError(f"Format {name} does not implement ResponseFormat")
        return instance


def _import_format(path: str) -> FormatFactory:
    module_name, _, class_name = path.rpartition(".")
    try:
        cls = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError, ValueError) as e:
        raise ConfigError(f"Cannot import format class {path}: {e}") from e

    if not inspect.isclass(cls) or not issubclass(cls, ResponseFormat):
        raise ConfigError(f"Format class {path} must subclass ResponseFormat")
    return cls
