"""Builds one OpenAPI operation for a route and HTTP method."""

from api_documentator.formats.base import JSON, ResponseFormat
from api_documentator.i18n import Messages, status_text
from api_documentator.introspection.resources import ResourceDescriptor, ResourceExtractor
from api_documentator.parser.base import ParsedDoc
from api_documentator.routing.base import Route
from api_documentator.schema.builder import SchemaBuilder
from api_documentator.text import camel, headline, singular, snake, studly

WRITE_METHODS = ("post", "put", "patch")

# response shape used when no resource class describes the payload
GENERIC_ATTRIBUTES = {
    "created_at": {"type": "string"},
    "updated_at": {"type": "string"},
}


def path_segments(route: Route) -> list[str]:
    """Non-parameter URI segments: ``api/users/{user}/posts`` -> ``[api, users, posts]``."""
    return [s for s in route.uri.strip("/").split("/") if s and not s.startswith("{")]


def is_collection(route: Route, method: str) -> bool:
    """GET on a URI that does not end in a parameter."""
    if method.lower() != "get":
        return False
    segments = route.uri.strip("/").split("/")
    return not segments[-1].startswith("{")


class OperationBuilder:
    """Assembles operations: parameters, request body and responses.

    Args:
        schema_builder: builds request-body schemas.
        response_format: shapes generated responses.
        resources: resolves response attributes from resource classes; optional.
        default_responses: merged into every operation without overriding.
        resource_namespaces: where to look for ``<Name>Resource`` classes.
    """

    def __init__(
        self,
        schema_builder: SchemaBuilder,
        response_format: ResponseFormat,
        resources: ResourceExtractor | None = None,
        default_responses: dict | None = None,
        resource_namespaces=(),
        messages: Messages | None = None,
    ):
        self.schema_builder = schema_builder
        self.format = response_format
        self.resources = resources
        self.default_responses = default_responses or {}
        self.resource_namespaces = list(resource_namespaces)
        self.messages = messages or Messages()

    def generate(
        self,
        route: Route,
        method: str,
        doc: ParsedDoc,
        schemas: dict,
        validation: dict | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Operation for ``method`` on ``route``; request schemas are added to ``schemas``."""
        method = method.lower()
        segments = path_segments(route)
        resource = self.resource_name(segments, doc)
        collection = is_collection(route, method)
        operation_id = self.operation_id(route, method, segments)

        request_body = None
        if method in WRITE_METHODS:
            request_body = self._request_body(route, method, validation or {}, doc, segments, resource, schemas)

        descriptor = self._response_descriptor(route, resource)

        operation = {
            "operationId": operation_id,
            "summary": doc.summary or self.summary(method, segments),
            "description": doc.description,
            "tags": tags or doc.tags or self._tags(segments),
            "deprecated": doc.deprecated,
            "parameters": self.parameters(route, method, doc),
            "requestBody": request_body,
            "responses": self._responses(method, resource, doc, descriptor, collection),
        }
        operation = {k: v for k, v in operation.items() if v not in (None, [], {})}

        responses = operation.setdefault("responses", {})
        for status, response in self.default_responses.items():
            responses.setdefault(str(status), response)

        if doc.authenticated is False:
            operation["security"] = []

        return operation

    def parameters(self, route: Route, method: str, doc: ParsedDoc) -> list[dict]:
        params = []

        for name in route.parameter_names():
            url_param = doc.url_param(name)
            params.append({
                "name": name,
                "in": "path",
                # path parameters are required unless marked optional
                "required": url_param is None or url_param.required is not False,
                "description": (url_param.description if url_param and url_param.description
                                else self.messages.get("id_of", name=headline(name))),
                "schema": {"type": self.schema_builder.types.normalize(url_param.type if url_param else "string")},
            })

        if method == "get":
            for p in doc.query_params:
                params.append({
                    "name": query_name(p.name),
                    "in": "query",
                    "required": bool(p.required),
                    "description": p.description,
                    "schema": {"type": self.schema_builder.types.normalize(p.type)},
                })

        return params

    def resource_name(self, segments: list[str], doc: ParsedDoc) -> str:
        if doc.resource:
            return doc.resource
        return singular(snake(segments[-1] if segments else "resource"))

    def operation_id(self, route: Route, method: str, segments: list[str]) -> str:
        if route.name:
            return route.name.replace(".", "_")
        return f"{method}_{snake('_'.join(segments)) or 'root'}"

    def summary(self, method: str, segments: list[str]) -> str:
        name = headline(segments[-1]) if segments else "Resource"
        key = {
            "get": "summary_get",
            "post": "summary_post",
            "put": "summary_update",
            "patch": "summary_update",
            "delete": "summary_delete",
        }.get(method)
        if key is None:
            return f"{headline(method)} {name}"
        return self.messages.get(key, name=name)

    def schema_name(self, resource: str, method: str, segments: list[str]) -> str:
        schema_operation = camel(f"{method}_{'_'.join(segments)}")
        return studly(f"{resource}_{schema_operation}_Request")

    def _tags(self, segments: list[str]) -> list[str]:
        return [headline(segments[-1])] if segments else ["General"]

    def _request_body(self, route, method, rules, doc, segments, resource, schemas) -> dict | None:
        schema = self.schema_builder.build(rules, doc.body_params)

        for param in route.parameter_names():
            schema.get("properties", {}).pop(param, None)
            if "required" in schema:
                schema["required"] = [f for f in schema["required"] if f != param]
                if not schema["required"]:
                    del schema["required"]

        if not schema.get("properties"):
            return None

        name = self.schema_name(resource, method, segments)
        schemas[name] = schema

        return {
            "required": True,
            "content": {JSON: {"schema": {"$ref": f"#/components/schemas/{name}"}}},
        }

    def _response_descriptor(self, route: Route, resource: str) -> ResourceDescriptor | None:
        if self.resources is None:
            return None

        class_path = None
        action = route.action_ref
        if action is not None:
            class_path = self.resources.find_resource_class(action.controller, action.method)
        if class_path is None:
            class_path = self.resources.guess_resource_class(resource, self.resource_namespaces)
        if class_path is None:
            return None

        return self.resources.parse_resource(class_path)

    def _responses(self, method, resource, doc: ParsedDoc, descriptor, collection: bool) -> dict:
        if doc.responses:
            return self._explicit_responses(doc)

        attributes = (descriptor.attributes if descriptor else None) or GENERIC_ATTRIBUTES
        relationships = descriptor.relationships if descriptor else None

        return self.format.operation_response(
            method, resource, attributes, collection, relationships=relationships or None,
        )

    def _explicit_responses(self, doc: ParsedDoc) -> dict:
        result = {}
        for response in doc.responses:
            if isinstance(response.content, (dict, list)):
                schema = {"example": response.content}
            else:
                schema = {"type": "string", "example": response.content}
            result[str(response.status)] = {
                "description": status_text(response.status),
                "content": {JSON: {"schema": schema}},
            }
        return result


def query_name(name: str) -> str:
    """``filter.name`` -> ``filter[name]``, ``a.b.c`` -> ``a[b][c]``."""
    head, *rest = name.split(".")
    return head + "".join(f"[{part}]" for part in rest)
