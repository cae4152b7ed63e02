"""Request-body schema construction from validation rules and doc params."""

from api_documentator.i18n import Messages
from api_documentator.schema.examples import ExampleGenerator
from api_documentator.schema.types import FieldTypeResolver
from api_documentator.text import headline

DEFAULT_TYPE_MAP = {
    "int": "integer",
    "integer": "integer",
    "numeric": "integer",
    "bool": "boolean",
    "boolean": "boolean",
    "float": "number",
    "double": "number",
    "number": "number",
    "array": "array",
    "object": "object",
    "file": "string",
    "image": "string",
}

FORMAT_RULES = {
    "email": "email",
    "url": "uri",
    "uuid": "uuid",
    "date": "date",
}

# (min key, max key) per type; other types carry no bounds
BOUND_KEYS = {
    "string": ("minLength", "maxLength"),
    "integer": ("minimum", "maximum"),
    "number": ("minimum", "maximum"),
    "array": ("minItems", "maxItems"),
}


def split_rules(rules) -> list:
    """Normalize a rule declaration (``"required|max:5"`` or a list) to a list."""
    if isinstance(rules, str):
        return [r for r in rules.split("|") if r]
    if isinstance(rules, (list, tuple)):
        return list(rules)
    return [rules]


class SchemaBuilder:
    """Builds OpenAPI object schemas and exposes example generation.

    Args:
        type_map: validation rule name -> OpenAPI type.
        examples: example generator shared with the response formats.
        messages: localized strings for field descriptions.
    """

    def __init__(
        self,
        type_map: dict[str, str] | None = None,
        examples: ExampleGenerator | None = None,
        messages: Messages | None = None,
    ):
        self.type_map = dict(DEFAULT_TYPE_MAP if type_map is None else type_map)
        self.examples = examples or ExampleGenerator()
        self.messages = messages or Messages()
        self.types = FieldTypeResolver()

    def build(self, rules: dict, doc_params=()) -> dict:
        """Build an object schema from ``{field: rules}`` plus doc-block body params."""
        props: dict[str, dict] = {}
        required: list[str] = []

        for field, declared in (rules or {}).items():
            rule_list = split_rules(declared)
            is_required = "required" in rule_list

            # items.*.sku
            parts = field.split(".")
            if len(parts) == 3 and parts[1] == "*":
                array_field, _, item_field = parts
                items = self._array_items(props, array_field)
                items["properties"][item_field] = self._field_schema(item_field, rule_list)
                if is_required and item_field not in items["required"]:
                    items["required"].append(item_field)
                continue

            # anything else nested is not represented
            if "." in field:
                continue

            if is_required and field not in required:
                required.append(field)
            schema = self._field_schema(field, rule_list)
            # wildcard rules seen earlier already built the item schema
            if schema["type"] == "array" and "items" in props.get(field, {}):
                schema["items"] = props[field]["items"]
            props[field] = schema

        for param in doc_params or ():
            name, type_, description, is_required = _param_fields(param)

            if "." in name:
                array_field, item_field = name.split(".", 1)
                items = self._array_items(props, array_field)
                items["properties"].setdefault(item_field, {
                    "type": self.types.normalize(type_),
                    "description": description,
                })
                if is_required and item_field not in items["required"]:
                    items["required"].append(item_field)
                continue

            props.setdefault(name, {
                "type": self.types.normalize(type_),
                "description": description,
            })
            if is_required and name not in required:
                required.append(name)

        return _prune({
            "type": "object",
            "properties": props,
            "required": required,
        })

    def _array_items(self, props: dict, array_field: str) -> dict:
        schema = props.setdefault(array_field, {
            "type": "array",
            "description": headline(array_field),
        })
        if not isinstance(schema.get("items"), dict):
            schema["items"] = {"type": "object", "properties": {}, "required": []}
        items = schema["items"]
        items.setdefault("type", "object")
        items.setdefault("properties", {})
        items.setdefault("required", [])
        return items

    def _field_schema(self, field: str, rules: list) -> dict:
        type_ = self._resolve_type(rules)
        schema = {
            "type": type_,
            "description": self._description(field, rules),
        }

        for rule in rules:
            if not isinstance(rule, str):
                continue

            if rule.startswith(("max:", "min:")):
                bound = _to_number(rule[4:])
                keys = BOUND_KEYS.get(type_)
                if bound is not None and keys:
                    schema[keys[0] if rule.startswith("min:") else keys[1]] = bound
            elif rule.startswith("in:"):
                schema["enum"] = rule[3:].split(",")
            elif rule in FORMAT_RULES:
                schema["format"] = FORMAT_RULES[rule]
            elif rule == "nullable":
                schema["nullable"] = True

        return schema

    def _resolve_type(self, rules: list) -> str:
        for rule in rules:
            if not isinstance(rule, str):
                continue
            name = rule.split(":", 1)[0]
            if name in self.type_map:
                return self.type_map[name]
        return "string"

    def _description(self, field: str, rules: list) -> str:
        notes = []

        for rule in rules:
            if isinstance(rule, str):
                if rule.startswith("max:"):
                    notes.append(self.messages.get("max", value=rule[4:]))
                elif rule.startswith("min:"):
                    notes.append(self.messages.get("min", value=rule[4:]))
                elif rule == "email":
                    notes.append("email")
                elif rule.startswith("unique"):
                    notes.append(self.messages.get("unique"))
                elif rule.startswith("exists:"):
                    notes.append(self.messages.get("exists"))
                continue

            # rule objects
            kind = type(rule).__name__
            if kind == "Unique":
                notes.append(self.messages.get("unique"))
            elif kind == "Exists":
                notes.append(self.messages.get("exists"))

        label = headline(field)
        return f"{label} ({', '.join(notes)})" if notes else label

    def random_int(self, min: int = 1, max: int = 100) -> int:
        return self.examples.random_int(min, max)

    def generate_value(self, field: str, type_: str = "string"):
        return self.examples.value(field, type_)

    def generate_object(self, attributes: dict | None, id: int = 1) -> dict:
        return self.examples.generate_object(attributes, id)

    def generate_json_api_resource(self, resource_type: str, attributes: dict | None, id: int = 1) -> dict:
        return self.examples.generate_json_api_resource(resource_type, attributes, id)


def _param_fields(param) -> tuple[str, str, str, bool]:
    if isinstance(param, dict):
        return (
            param["name"],
            param.get("type") or "string",
            param.get("description") or "",
            bool(param.get("required")),
        )
    return param.name, param.type, param.description, bool(param.required)


def _to_number(value: str):
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return None


def _prune(schema: dict) -> dict:
    """Drop empty ``required``/``properties`` (recursively through array items)."""
    for prop in schema.get("properties", {}).values():
        items = prop.get("items") if isinstance(prop, dict) else None
        if isinstance(items, dict):
            _prune(items)
    if not schema.get("required"):
        schema.pop("required", None)
    if not schema.get("properties"):
        schema.pop("properties", None)
    return schema
