"""JSON:API envelope: ``data`` / ``included`` / ``links`` / ``meta`` documents."""

from api_documentator.formats.base import ResponseFormat
from api_documentator.text import plural


def _ref(name: str) -> dict:
    return {"$ref": f"#/components/schemas/{name}"}


class JsonApiFormat(ResponseFormat):

    def name(self) -> str:
        return "json-api"

    def description(self) -> str:
        return self.messages.get("format_json_api")

    def success_schema(self) -> str:
        return "JsonApiDocument"

    def error_schema(self) -> str:
        return "JsonApiError"

    def schemas(self) -> dict:
        free_object = {"type": "object", "additionalProperties": True}
        return {
            "JsonApiResource": {
                "type": "object",
                "required": ["type", "id"],
                "properties": {
                    "type": {"type": "string", "example": "users"},
                    "id": {"type": "string", "example": "1"},
                    "attributes": free_object,
                    "relationships": free_object,
                    "links": free_object,
                    "meta": free_object,
                },
            },
            "JsonApiDocument": {
                "type": "object",
                "properties": {
                    "data": {"oneOf": [
                        _ref("JsonApiResource"),
                        {"type": "array", "items": _ref("JsonApiResource")},
                    ]},
                    "included": {"type": "array", "items": _ref("JsonApiResource")},
                    "links": free_object,
                    "meta": free_object,
                },
            },
            "JsonApiError": {
                "type": "object",
                "required": ["errors"],
                "properties": {
                    "errors": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "status": {"type": "string"},
                                "code": {"type": "string"},
                                "title": {"type": "string"},
                                "detail": {"type": "string"},
                                "source": {
                                    "type": "object",
                                    "properties": {
                                        "pointer": {"type": "string"},
                                        "parameter": {"type": "string"},
                                    },
                                },
                            },
                        },
                    },
                },
            },
        }

    def operation_response(self, method, resource, attributes=None, is_collection=False, relationships=None) -> dict:
        status = self.status_for(method)

        if status == "204":
            return {"204": {"description": self.messages.get("response_no_content")}}

        resource_type = plural(resource)
        item = self._resource_schema(resource_type, attributes, relationships)
        properties: dict = {}

        if is_collection:
            properties["data"] = {"type": "array", "items": item}
            example = {
                "data": [
                    self._resource_example(resource_type, attributes, relationships, i + 1)
                    for i in range(self.collection_size)
                ],
                **self._pagination(resource_type),
            }
            properties["links"] = {"type": "object", "additionalProperties": True}
            properties["meta"] = {"type": "object", "additionalProperties": True}
        else:
            properties["data"] = item
            example = {"data": self._resource_example(resource_type, attributes, relationships, 1)}

        if relationships:
            properties["included"] = {"type": "array", "items": _ref("JsonApiResource")}
            example["included"] = self._included(relationships)

        description = self.messages.get("response_created" if status == "201" else "response_success")
        responses = {status: self.wrap_schema(description, {"type": "object", "properties": properties}, example)}
        responses.update(self.error_refs(method, is_collection))
        return responses

    def _resource_schema(self, resource_type: str, attributes: dict | None, relationships: dict | None) -> dict:
        if attributes:
            attributes_schema = {"type": "object", "properties": self.attribute_properties(attributes)}
        else:
            attributes_schema = {"type": "object", "additionalProperties": True}

        properties = {
            "type": {"type": "string", "example": resource_type},
            "id": {"type": "string"},
            "attributes": attributes_schema,
        }
        if relationships:
            properties["relationships"] = {
                "type": "object",
                "properties": {
                    name: self._relationship_schema(bool(_get(rel, "collection")))
                    for name, rel in relationships.items()
                },
            }
        properties["links"] = {"type": "object", "properties": {"self": {"type": "string"}}}

        return {"type": "object", "required": ["type", "id"], "properties": properties}

    def _relationship_schema(self, collection: bool) -> dict:
        linkage = {
            "type": "object",
            "properties": {"type": {"type": "string"}, "id": {"type": "string"}},
        }
        return {
            "type": "object",
            "properties": {
                "data": {"type": "array", "items": linkage} if collection else linkage,
                "links": {"type": "object", "properties": {"related": {"type": "string"}}},
            },
        }

    def _resource_example(self, resource_type, attributes, relationships, id: int) -> dict:
        example = self.schema_builder.generate_json_api_resource(resource_type, attributes, id)
        if not relationships:
            return example

        rendered = {}
        for name, rel in relationships.items():
            rel_type = _get(rel, "type") or name
            if _get(rel, "collection"):
                data = [{"type": rel_type, "id": str(i + 1)} for i in range(self.collection_size)]
            else:
                data = {"type": rel_type, "id": "1"}
            rendered[name] = {
                "data": data,
                "links": {"related": f"/{resource_type}/{id}/{name}"},
            }

        # keep links last, as in a rendered document
        links = example.pop("links")
        example["relationships"] = rendered
        example["links"] = links
        return example

    def _included(self, relationships: dict) -> list:
        included = []
        for name, rel in relationships.items():
            rel_type = _get(rel, "type") or name
            included.append(self.schema_builder.generate_json_api_resource(rel_type, None, 1))
        return included

    def _pagination(self, resource_type: str) -> dict:
        total = self.pagination_total()
        last_page = -(-total // self.per_page)
        base = f"/{resource_type}"
        return {
            "links": {
                "first": f"{base}?page[number]=1",
                "last": f"{base}?page[number]={last_page}",
                "prev": None,
                "next": f"{base}?page[number]=2" if last_page > 1 else None,
            },
            "meta": {
                "current_page": 1,
                "per_page": self.per_page,
                "total": total,
                "last_page": last_page,
            },
        }


def _get(rel, key: str):
    """Relationships arrive as models or plain dicts."""
    if isinstance(rel, dict):
        return rel.get(key)
    return getattr(rel, key, None)
