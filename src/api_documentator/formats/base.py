"""Response format contract shared by the built-in and custom formats."""

from abc import ABC, abstractmethod

from api_documentator.i18n import Messages
from api_documentator.schema.builder import SchemaBuilder

JSON = "application/json"

DEFAULT_PER_PAGE = 15
DEFAULT_COLLECTION_SIZE = 2


class ResponseFormat(ABC):
    """Shapes success/error payloads and picks status codes per HTTP method.

    Subclasses provide the envelope schemas; the reusable named responses
    (``Success``, ``NotFound``, ...) are derived from them here.
    """

    def __init__(
        self,
        schema_builder: SchemaBuilder | None = None,
        messages: Messages | None = None,
        per_page: int = DEFAULT_PER_PAGE,
        collection_size: int = DEFAULT_COLLECTION_SIZE,
    ):
        self.schema_builder = schema_builder or SchemaBuilder()
        self.messages = messages or Messages()
        self.per_page = per_page
        self.collection_size = max(1, collection_size)

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def description(self) -> str:
        """Used as the document description when none is configured."""

    @abstractmethod
    def schemas(self) -> dict:
        """Base component schemas of this format."""

    @abstractmethod
    def operation_response(
        self,
        method: str,
        resource: str,
        attributes: dict | None = None,
        is_collection: bool = False,
        relationships: dict | None = None,
    ) -> dict:
        """Responses object for one operation, keyed by status code."""

    @abstractmethod
    def success_schema(self) -> str:
        ...

    @abstractmethod
    def error_schema(self) -> str:
        ...

    def responses(self) -> dict:
        success = {"$ref": f"#/components/schemas/{self.success_schema()}"}
        error = {"$ref": f"#/components/schemas/{self.error_schema()}"}
        t = self.messages.get

        return {
            "Success": self.wrap_schema(t("response_success"), success),
            "Created": self.wrap_schema(t("response_created"), success),
            "BadRequest": self.wrap_schema(t("response_bad_request"), error),
            "Unauthorized": self.wrap_schema(t("response_unauthorized"), error),
            "NotFound": self.wrap_schema(t("response_not_found"), error),
            "ValidationError": self.wrap_schema(t("response_validation_error"), error),
            "NoContent": {"description": t("response_no_content")},
        }

    def wrap_schema(self, description: str, schema: dict, example=None) -> dict:
        media = {"schema": schema}
        if example is not None:
            media["example"] = example
        return {"description": description, "content": {JSON: media}}

    def status_for(self, method: str) -> str:
        method = method.lower()
        if method == "post":
            return "201"
        if method == "delete":
            return "204"
        return "200"

    def error_refs(self, method: str, is_collection: bool) -> dict:
        """References to reusable error responses that apply to ``method``."""
        method = method.lower()
        refs = {}
        if method in ("get", "put", "patch") and not is_collection:
            refs["404"] = {"$ref": "#/components/responses/NotFound"}
        if method in ("post", "put", "patch"):
            refs["422"] = {"$ref": "#/components/responses/ValidationError"}
        return refs

    def attribute_properties(self, attributes: dict | None) -> dict:
        """``{name: {"type": ...}}`` for each attribute, ``id`` excluded."""
        return {
            name: {"type": (config or {}).get("type", "string")}
            for name, config in (attributes or {}).items()
            if name != "id"
        }

    def pagination_total(self) -> int:
        return self.schema_builder.random_int(self.per_page, self.per_page * 10)
