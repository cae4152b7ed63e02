"""Plain REST envelope: ``{"success": true, "data": ..., "meta": ...}``."""

from api_documentator.formats.base import ResponseFormat


class SimpleFormat(ResponseFormat):

    def name(self) -> str:
        return "simple"

    def description(self) -> str:
        return self.messages.get("format_simple")

    def success_schema(self) -> str:
        return "SuccessResponse"

    def error_schema(self) -> str:
        return "ErrorResponse"

    def schemas(self) -> dict:
        return {
            "SuccessResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": True},
                    "data": {"oneOf": [
                        {"type": "object", "additionalProperties": True},
                        {"type": "array", "items": {"type": "object"}},
                    ]},
                    "meta": {"type": "object", "additionalProperties": True},
                },
            },
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": False},
                    "message": {"type": "string"},
                    "errors": {
                        "type": "object",
                        "additionalProperties": {"type": "array", "items": {"type": "string"}},
                    },
                },
            },
        }

    def operation_response(self, method, resource, attributes=None, is_collection=False, relationships=None) -> dict:
        status = self.status_for(method)

        if status == "204":
            return {"204": {"description": self.messages.get("response_no_content")}}

        item = self._item_schema(attributes)
        properties = {"success": {"type": "boolean", "example": True}}
        example = {"success": True}

        if is_collection:
            properties["data"] = {"type": "array", "items": item}
            properties["meta"] = self._meta_schema()
            example["data"] = [
                self.schema_builder.generate_object(attributes, i + 1)
                for i in range(self.collection_size)
            ]
            example["meta"] = self._meta_example()
        else:
            properties["data"] = item
            example["data"] = self.schema_builder.generate_object(attributes, 1)

        description = self.messages.get("response_created" if status == "201" else "response_success")
        responses = {status: self.wrap_schema(description, {"type": "object", "properties": properties}, example)}
        responses.update(self.error_refs(method, is_collection))
        return responses

    def _item_schema(self, attributes: dict | None) -> dict:
        if not attributes:
            return {"type": "object", "additionalProperties": True}
        return {
            "type": "object",
            "properties": {"id": {"type": "integer"}, **self.attribute_properties(attributes)},
        }

    def _meta_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "current_page": {"type": "integer"},
                "per_page": {"type": "integer"},
                "total": {"type": "integer"},
                "last_page": {"type": "integer"},
            },
        }

    def _meta_example(self) -> dict:
        total = self.pagination_total()
        return {
            "current_page": 1,
            "per_page": self.per_page,
            "total": total,
            "last_page": -(-total // self.per_page),
        }
