"""Top-level OpenAPI document assembly."""

import logging
from collections.abc import Callable, Iterable

from api_documentator.builders.operation import OperationBuilder, path_segments
from api_documentator.config import DocumentatorConfig
from api_documentator.formats.base import ResponseFormat
from api_documentator.formats.registry import FormatRegistry
from api_documentator.i18n import Messages
from api_documentator.introspection.provider import CodeMetadataProvider, PythonMetadataProvider
from api_documentator.introspection.resources import ResourceExtractor
from api_documentator.introspection.validation import ValidationExtractor
from api_documentator.parser.base import ParsedDoc
from api_documentator.parser.docblock import parse_docblock
from api_documentator.routing.base import Route
from api_documentator.routing.collector import RouteCollector
from api_documentator.schema.builder import SchemaBuilder
from api_documentator.schema.examples import ExampleGenerator
from api_documentator.schema.types import FieldTypeResolver
from api_documentator.text import headline

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Route, str, list[str]], None]


class SpecificationBuilder:
    """Turns a route table into an OpenAPI document in a single pass.

    Raises:
        UnknownFormatError: on construction, when the configured format
            is not registered.
    """

    def __init__(
        self,
        routes: Iterable[Route] | RouteCollector,
        config: DocumentatorConfig | None = None,
        provider: CodeMetadataProvider | None = None,
        registry: FormatRegistry | None = None,
    ):
        self.config = config or DocumentatorConfig()
        self.collector = routes if isinstance(routes, RouteCollector) else RouteCollector(routes)
        self.provider = provider or PythonMetadataProvider()
        self.messages = Messages(self.config.locale)
        self.progress_callback: ProgressCallback | None = None

        examples_config = self.config.examples
        self.examples = ExampleGenerator(locale=examples_config.locale, seed=examples_config.seed)
        self.schema_builder = SchemaBuilder(self.config.type_map, self.examples, self.messages)

        registry = registry or FormatRegistry(self.config.formats)
        self.format: ResponseFormat = registry.create(
            self.config.format,
            schema_builder=self.schema_builder,
            messages=self.messages,
            per_page=examples_config.per_page,
            collection_size=examples_config.collection_size,
        )

        self.validation = ValidationExtractor(self.provider)
        self.resources = ResourceExtractor(self.provider, FieldTypeResolver())
        self.operation_builder = OperationBuilder(
            self.schema_builder,
            self.format,
            resources=self.resources,
            default_responses=self.config.default_responses,
            resource_namespaces=self.config.resources.namespaces,
            messages=self.messages,
        )

        self.schemas: dict[str, dict] = {}
        self.used_tags: dict[str, bool] = {}
        self.processed_count = 0

    def set_progress_callback(self, callback: ProgressCallback | None) -> None:
        self.progress_callback = callback

    def build(self) -> dict:
        """Build the complete document."""
        paths = self.build_paths()

        spec = {
            "openapi": self.config.openapi_version,
            "info": self.build_info(),
            "servers": self.build_servers(),
            "paths": paths,
            "components": {
                "schemas": {**self.format.schemas(), **self.schemas},
                "responses": self.format.responses(),
                "securitySchemes": self.config.security.schemes,
            },
        }

        if not spec["components"]["securitySchemes"]:
            del spec["components"]["securitySchemes"]

        tags = self.build_tags()
        if tags:
            spec["tags"] = tags

        if self.config.security.default:
            spec["security"] = [{scheme: []} for scheme in self.config.security.default]

        return spec

    def build_info(self) -> dict:
        info = self.config.info
        result = {
            "title": info.title,
            "description": info.description or self.format.description(),
            "version": info.version,
            "contact": {k: v for k, v in info.contact.items() if v},
            "license": {k: v for k, v in info.license.items() if v},
        }
        return {k: v for k, v in result.items() if v}

    def build_servers(self) -> list[dict]:
        servers = []
        for s in self.config.servers:
            server = {"url": s.url.rstrip("/")}
            if s.description:
                server["description"] = s.description
            if s.variables:
                server["variables"] = {
                    name: var.model_dump(exclude_none=True)
                    for name, var in s.variables.items()
                }
            servers.append(server)
        return servers

    def build_paths(self) -> dict:
        routes_config = self.config.routes
        routes = self.collector.collect(
            routes_config.include,
            routes_config.exclude,
            routes_config.exclude_middleware,
        )

        if not routes:
            logger.warning("No routes found matching criteria")
            return {}

        paths: dict[str, dict] = {}

        for route in routes:
            methods = self.collector.allowed_methods(route, routes_config.methods)
            if not methods:
                continue

            path = self.collector.normalize_path(route)
            self.processed_count += 1
            if self.progress_callback:
                self.progress_callback(route, path, methods)

            doc = self.extract_doc(route)
            validation = self.validation.extract(route)
            tags = self.extract_tags(route, doc)
            for tag in tags:
                self.used_tags[tag] = True

            for method in methods:
                paths.setdefault(path, {})[method] = self.operation_builder.generate(
                    route, method, doc, self.schemas, validation=validation, tags=tags,
                )

        return dict(sorted(paths.items()))

    def extract_doc(self, route: Route) -> ParsedDoc:
        action = route.action_ref
        if action is None:
            return ParsedDoc()

        try:
            cls = self.provider.load_class(action.controller)
            if cls is None or not self.provider.has_method(cls, action.method):
                return ParsedDoc()
            return parse_docblock(self.provider.get_method_doc(cls, action.method))
        except Exception as exc:
            logger.debug("Cannot read doc block of %s: %s", route.uri, exc)
            return ParsedDoc()

    def extract_tags(self, route: Route, doc: ParsedDoc) -> list[str]:
        if doc.group:
            return [doc.group]

        if doc.tags:
            return list(doc.tags)

        # "attributes.index" -> "Attributes"
        if route.name:
            parts = route.name.split(".")
            if len(parts) > 1:
                return [headline(parts[0])]

        segments = path_segments(route)
        if not segments:
            return ["General"]
        return [headline(segments[-1])]

    def build_tags(self) -> list[dict]:
        tags_config = self.config.tags
        tags: dict[str, dict] = {
            name: {"name": name, "description": description}
            for name, description in tags_config.definitions.items()
        }

        if tags_config.auto_generate:
            for name in self.used_tags:
                tags.setdefault(name, {"name": name})

        result = list(tags.values())
        if tags_config.sort:
            result.sort(key=lambda t: t["name"])
        return result
