"""Response-shape inference from resource classes.

A resource class renders a domain object into a response dict. Its
attributes come from a declared ``attributes`` list and from the literal
keys in its ``to_dict`` source; relationships from ``to_relationships``::

    class PostResource(JsonResource):
        attributes = ["title", "published_at"]

        def to_dict(self):
            return {"id": self.id, "title": self.title, "comments_count": ...}

        def to_relationships(self):
            return {
                "author": lambda: UserResource.make(self.author),
                "comments": lambda: CommentResource.collection(self.comments),
            }

Source scanning is best effort. Hosts with exact metadata can pass their own
:class:`AttributeScanner` instead.
"""

import inspect
import logging
import re

from pydantic import BaseModel

from api_documentator.introspection.provider import CodeMetadataProvider
from api_documentator.schema.types import FieldTypeResolver
from api_documentator.text import singular, snake, studly

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACES = ("app.http.resources",)

ATTRIBUTE_METHODS = ("to_dict", "to_array")
RELATIONSHIP_METHOD = "to_relationships"

_KEY = re.compile(r"""['"](\w+)['"]\s*:""")
_RELATION = re.compile(
    r"""['"](\w+)['"]\s*:\s*(?:lambda\s*:\s*)?(\w+Resource)\.(\w+)"""
)
_MAKE_CALL = re.compile(r"(\w+Resource)\.(?:make|collection)\s*\(")
_CONSTRUCTOR = re.compile(r"\b(\w+Resource)\s*\(")
_REFERENCE = re.compile(r"\b(\w+Resource)\b")


class Relationship(BaseModel):
    type: str
    resource: str | None = None
    collection: bool = False


class ResourceDescriptor(BaseModel):
    """Attributes and relationships of one resource class."""

    attributes: dict[str, dict] = {}
    relationships: dict[str, Relationship] = {}


class AttributeScanner:
    """Pattern scanning over rendering-method source text."""

    def attribute_keys(self, source: str) -> list[str]:
        keys: list[str] = []
        for key in _KEY.findall(source):
            if key not in keys:
                keys.append(key)
        return keys

    def relationships(self, source: str) -> list[tuple[str, str, bool]]:
        """``(name, short resource class, is_collection)`` triples."""
        return [
            (name, resource, method == "collection")
            for name, resource, method in _RELATION.findall(source)
            if method in ("make", "collection")
        ]


class ResourceExtractor:
    """Finds resource classes and infers their response shape.

    Descriptors are cached per class for the lifetime of the extractor.
    """

    def __init__(
        self,
        provider: CodeMetadataProvider,
        types: FieldTypeResolver | None = None,
        scanner: AttributeScanner | None = None,
    ):
        self.provider = provider
        self.types = types or FieldTypeResolver()
        self.scanner = scanner or AttributeScanner()
        self._cache: dict[str, ResourceDescriptor | None] = {}

    def parse_resource(self, class_path: str) -> ResourceDescriptor | None:
        """Descriptor for a resource class, or None when it cannot be loaded."""
        if class_path in self._cache:
            return self._cache[class_path]

        cls = self.provider.load_class(class_path)
        descriptor = None
        if cls is not None:
            try:
                descriptor = ResourceDescriptor(
                    attributes=self._attributes(cls),
                    relationships=self._relationships(cls),
                )
            except Exception as exc:
                logger.debug("Cannot parse resource %s: %s", class_path, exc)

        self._cache[class_path] = descriptor
        return descriptor

    def find_resource_class(self, controller: str, method: str) -> str | None:
        """Resource class a controller action renders its response with."""
        cls = self.provider.load_class(controller)
        if cls is None or not self.provider.has_method(cls, method):
            return None

        annotation = self.provider.get_return_annotation(cls, method)
        if inspect.isclass(annotation) and self.is_resource_class(annotation):
            return self.provider.class_path(annotation)
        if isinstance(annotation, str) and annotation.endswith("Resource"):
            resolved = self.provider.resolve_short_name(annotation, cls)
            if resolved:
                return resolved

        source = self.provider.get_method_source(cls, method)
        for pattern in (_MAKE_CALL, _CONSTRUCTOR, _REFERENCE):
            match = pattern.search(source)
            if match:
                return self.provider.resolve_short_name(match.group(1), cls)

        return None

    def guess_resource_class(self, name: str, namespaces=()) -> str | None:
        """Look for ``<Name>Resource`` in the conventional resource packages."""
        base = studly(singular(name))
        resource_name = f"{base}Resource"

        candidates = [*DEFAULT_NAMESPACES, f"{DEFAULT_NAMESPACES[0]}.{snake(base)}", *namespaces]
        for namespace in candidates:
            path = f"{namespace.rstrip('.')}.{resource_name}"
            cls = self.provider.load_class(path)
            if cls is not None and self.is_resource_class(cls):
                return path

        return None

    def is_resource_class(self, cls: type) -> bool:
        return any("Resource" in base.__name__ for base in cls.__mro__[1:])

    def _attributes(self, cls: type) -> dict[str, dict]:
        attributes = {
            name: {"type": self.types.from_field_name(name)}
            for name in self.provider.get_declared_fields(cls, "attributes")
        }

        for method in ATTRIBUTE_METHODS:
            if not self.provider.has_method(cls, method):
                continue
            for key in self.scanner.attribute_keys(self.provider.get_method_source(cls, method)):
                attributes.setdefault(key, {"type": self.types.from_field_name(key)})

        return attributes

    def _relationships(self, cls: type) -> dict[str, Relationship]:
        if not self.provider.has_method(cls, RELATIONSHIP_METHOD):
            return {}

        source = self.provider.get_method_source(cls, RELATIONSHIP_METHOD)
        return {
            name: Relationship(
                type=snake(name),
                resource=self.provider.resolve_short_name(short_name, cls),
                collection=collection,
            )
            for name, short_name, collection in self.scanner.relationships(source)
        }
