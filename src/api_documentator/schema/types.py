"""Field type resolution: validation tokens, declared types and field names
mapped onto OpenAPI primitive types.

Every function here is total: anything unrecognized resolves to ``string``.
"""

import re

OPENAPI_TYPES = ("string", "integer", "number", "boolean", "array", "object")

DEFAULT_TYPE = "string"

INTEGER_NAMES = {
    "age", "year", "month", "day", "hour", "minute", "second",
    "order", "position", "priority", "level", "sort", "rank",
    "page", "per_page", "limit", "offset", "skip",
    "width", "height", "size", "duration",
}

BOOLEAN_NAMES = {
    "active", "enabled", "visible", "published", "verified",
    "mandatory", "filterable", "unique", "localizable", "is_multiple",
    "disabled", "hidden", "deleted", "blocked", "banned", "expired", "archived",
}

# Tried in order; the first class with a matching pattern decides the type.
_NUMBER_PARTS = (
    "price", "amount", "cost",
    "total", "sum", "balance",
    "tax", "discount", "rate",
)
_RATIO_PARTS = ("percent", "weight", "rating", "latitude", "longitude")

# "count" as a whole segment, so "discount" and "country" are not counts
_COUNT = re.compile(r"(^|_)count(_|$)")


class FieldTypeResolver:
    """Resolves the OpenAPI type of a single field."""

    def from_field_name(self, name: str) -> str:
        n = name.lower()

        if n == "id" or n.endswith("_id"):
            return "integer"
        if n.endswith("_at"):
            # ISO 8601 datetime
            return "string"
        if _COUNT.search(n) or "quantity" in n or "stock" in n:
            return "integer"
        if any(p in n for p in _NUMBER_PARTS):
            return "number"
        if any(p in n for p in _RATIO_PARTS):
            return "number"
        if n.startswith(("is_", "has_", "can_")):
            return "boolean"
        if n in INTEGER_NAMES:
            return "integer"
        if n in BOOLEAN_NAMES:
            return "boolean"
        return DEFAULT_TYPE

    def from_validation_rule(self, rule: str) -> str:
        if rule.startswith(("integer", "numeric")):
            return "integer"
        if rule.startswith(("boolean", "bool")):
            return "boolean"
        if rule.startswith("array"):
            return "array"
        # email, url, date and string all stay strings
        return DEFAULT_TYPE

    def from_python_type(self, annotation) -> str:
        """Map a Python annotation (a type or its name) onto an OpenAPI type."""
        if annotation is None:
            return DEFAULT_TYPE
        origin = getattr(annotation, "__origin__", None) or annotation
        name = origin if isinstance(origin, str) else getattr(origin, "__name__", "")

        return {
            "int": "integer",
            "float": "number",
            "Decimal": "number",
            "bool": "boolean",
            "list": "array",
            "tuple": "array",
            "set": "array",
            "dict": "object",
        }.get(name, DEFAULT_TYPE)

    def normalize(self, type_name: str | None) -> str:
        """Normalize a free-form type name (as written in doc blocks)."""
        t = (type_name or "").lower()
        if t in ("int", "integer", "numeric"):
            return "integer"
        if t in ("float", "double", "number"):
            return "number"
        if t in ("bool", "boolean"):
            return "boolean"
        if t in ("array", "list"):
            return "array"
        if t in ("object", "dict"):
            return "object"
        return DEFAULT_TYPE

    def resolve(self, field_name: str, validation_rule: str | None = None, python_type=None) -> str:
        """Resolve with priority: validation rule > declared type > field name."""
        if validation_rule:
            return self.from_validation_rule(validation_rule)

        if python_type is not None:
            resolved = self.from_python_type(python_type)
            if resolved != DEFAULT_TYPE:
                return resolved

        return self.from_field_name(field_name)
