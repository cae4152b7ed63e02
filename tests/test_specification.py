import logging
from pathlib import Path

import pytest

from api_documentator.builders.specification import SpecificationBuilder
from api_documentator.config import DocumentatorConfig, load_config
from api_documentator.errors import UnknownFormatError
from api_documentator.parser.docblock import parse_docblock
from api_documentator.routing.base import Route
from api_documentator.routing.loader import load_routes

FIXTURES = Path(__file__).parent / "fixtures"
JSON = "application/json"


@pytest.fixture
def config():
    return load_config(FIXTURES / "config.yaml")


@pytest.fixture
def routes():
    return load_routes(FIXTURES / "routes.yaml")


@pytest.fixture
def spec(routes, config):
    return SpecificationBuilder(routes, config).build()


class TestDocumentShape:
    def test_top_level(self, spec):
        assert spec["openapi"] == "3.0.3"
        assert list(spec) == ["openapi", "info", "servers", "paths", "components", "tags", "security"]

    def test_info(self, spec):
        assert spec["info"] == {
            "title": "Sample API",
            "description": "REST API",
            "version": "2.0.0",
            "contact": {"name": "API Team", "email": "api@example.com"},
        }

    def test_servers(self, spec):
        assert spec["servers"][0] == {"url": "https://api.example.com", "description": "Production"}
        assert spec["servers"][1]["variables"] == {"region": {"default": "eu", "enum": ["eu", "us"]}}

    def test_security(self, spec):
        assert spec["security"] == [{"bearerAuth": []}]
        assert spec["components"]["securitySchemes"]["bearerAuth"]["scheme"] == "bearer"

    def test_paths_are_filtered_and_sorted(self, spec):
        assert list(spec["paths"]) == [
            "/api/health",
            "/api/posts",
            "/api/posts/preview",
            "/api/posts/{post}",
            "/api/status",
            "/api/users",
            "/api/users/{user}",
        ]

    def test_head_is_not_documented(self, spec):
        assert list(spec["paths"]["/api/users"]) == ["get", "post"]
        assert list(spec["paths"]["/api/users/{user}"]) == ["get", "put", "patch", "delete"]

    def test_components(self, spec):
        schemas = spec["components"]["schemas"]
        assert list(schemas) == [
            "SuccessResponse",
            "ErrorResponse",
            "UserPostApiUsersRequest",
            "UserPutApiUsersRequest",
            "UserPatchApiUsersRequest",
            "PostPostApiPostsRequest",
        ]
        assert "ValidationError" in spec["components"]["responses"]

    def test_tags(self, spec):
        assert spec["tags"] == [
            {"name": "Blog"},
            {"name": "Health"},
            {"name": "Posts"},
            {"name": "Preview"},
            {"name": "Status"},
            {"name": "Users", "description": "User management"},
        ]


class TestOperations:
    def test_collection_endpoint(self, spec):
        op = spec["paths"]["/api/users"]["get"]
        assert op["operationId"] == "users_index"
        assert op["summary"] == "List users"
        assert op["description"] == "Paginated, newest first."
        assert op["tags"] == ["Users"]
        assert [p["name"] for p in op["parameters"]] == ["filter[name]", "page"]
        example = op["responses"]["200"]["content"][JSON]["example"]
        assert len(example["data"]) == 2
        assert set(example["data"][0]) == {"id", "name", "email", "is_admin", "created_at"}
        assert op["responses"]["500"] == {"description": "Server error"}

    def test_create_endpoint(self, spec):
        op = spec["paths"]["/api/users"]["post"]
        assert op["requestBody"]["content"][JSON]["schema"] == {
            "$ref": "#/components/schemas/UserPostApiUsersRequest",
        }
        assert set(op["responses"]) == {"201", "422", "500"}

        schema = spec["components"]["schemas"]["UserPostApiUsersRequest"]
        assert schema["required"] == ["name", "email"]
        assert schema["properties"]["email"]["format"] == "email"
        assert schema["properties"]["email"]["description"] == "Email (email, must be unique)"
        assert schema["properties"]["age"]["minimum"] == 18
        assert schema["properties"]["avatar"] == {"type": "string", "description": "Profile picture"}

    def test_item_endpoint(self, spec):
        op = spec["paths"]["/api/users/{user}"]["get"]
        assert op["summary"] == "Show a user"
        assert op["parameters"] == [{
            "name": "user",
            "in": "path",
            "required": True,
            "description": "The user ID",
            "schema": {"type": "integer"},
        }]
        assert op["responses"]["404"] == {"$ref": "#/components/responses/NotFound"}

    def test_inline_validation_strips_path_parameter(self, spec):
        schema = spec["components"]["schemas"]["UserPutApiUsersRequest"]
        assert list(schema["properties"]) == ["name", "email"]
        assert "required" not in schema

    def test_delete_endpoint(self, spec):
        op = spec["paths"]["/api/users/{user}"]["delete"]
        assert op["deprecated"] is True
        assert set(op["responses"]) == {"204", "500"}

    def test_explicit_responses_and_security_opt_out(self, spec):
        op = spec["paths"]["/api/posts/{post}"]["get"]
        assert op["security"] == []
        assert op["responses"]["200"]["content"][JSON]["schema"]["example"] == {"data": {"id": 1, "title": "Hello"}}
        assert op["responses"]["404"]["description"] == "Not Found"

    def test_doc_resource_and_controller_resource(self, spec):
        op = spec["paths"]["/api/posts"]["get"]
        assert op["operationId"] == "get_api_posts"
        item = op["responses"]["200"]["content"][JSON]["schema"]["properties"]["data"]["items"]
        assert set(item["properties"]) == {"id", "title", "views_count", "published_at"}

    def test_route_without_validation_has_no_body(self, spec):
        op = spec["paths"]["/api/posts/preview"]["post"]
        assert "requestBody" not in op
        assert op["tags"] == ["Preview"]

    def test_closure_route(self, spec):
        op = spec["paths"]["/api/health"]["get"]
        assert op["operationId"] == "health"
        data = op["responses"]["200"]["content"][JSON]["schema"]["properties"]["data"]
        assert set(data["items"]["properties"]) == {"id", "created_at", "updated_at"}


class TestJsonApi:
    def test_relationships_from_resource(self, routes, config):
        config.format = "json-api"
        spec = SpecificationBuilder(routes, config).build()

        assert spec["info"]["description"] == "API follows the JSON:API specification"
        assert "JsonApiDocument" in spec["components"]["schemas"]

        example = spec["paths"]["/api/posts"]["get"]["responses"]["200"]["content"][JSON]["example"]
        first = example["data"][0]
        assert first["type"] == "posts"
        assert first["relationships"]["author"]["data"] == {"type": "author", "id": "1"}
        assert isinstance(first["relationships"]["comments"]["data"], list)
        assert [r["type"] for r in example["included"]] == ["author", "comments"]
        assert example["meta"]["per_page"] == 15


class TestBuilderBehaviour:
    def test_seed_makes_output_reproducible(self, routes, config):
        first = SpecificationBuilder(routes, config).build()
        second = SpecificationBuilder(routes, config).build()
        assert first == second

    def test_progress_callback(self, routes, config):
        seen = []
        builder = SpecificationBuilder(routes, config)
        builder.set_progress_callback(lambda route, path, methods: seen.append((path, methods)))
        builder.build()
        assert builder.processed_count == 11
        assert seen[0] == ("/api/users", ["get"])
        assert ("/api/users/{user}", ["put", "patch"]) in seen

    def test_unknown_format_fails_fast(self, routes):
        with pytest.raises(UnknownFormatError):
            SpecificationBuilder(routes, DocumentatorConfig(format="xml"))

    def test_no_matching_routes(self, routes, caplog):
        config = DocumentatorConfig(routes={"include": ["nothing/*"]})
        with caplog.at_level(logging.WARNING):
            spec = SpecificationBuilder(routes, config).build()
        assert spec["paths"] == {}
        assert "No routes found" in caplog.text
        assert "tags" not in spec

    def test_security_schemes_omitted_when_empty(self):
        config = DocumentatorConfig(security={"schemes": {}, "default": []})
        spec = SpecificationBuilder([Route(uri="api/a", methods=["GET"])], config).build()
        assert "securitySchemes" not in spec["components"]
        assert "security" not in spec

    def test_tag_definitions_without_auto_generate(self, routes):
        config = DocumentatorConfig(tags={"definitions": {"Users": "People"}, "auto_generate": False})
        spec = SpecificationBuilder(routes, config).build()
        assert spec["tags"] == [{"name": "Users", "description": "People"}]

    def test_doc_tags_follow_group(self, routes, config):
        builder = SpecificationBuilder(routes, config)
        route = Route(uri="api/reports/{report}", methods=["GET"], name="reports.show")
        assert builder.extract_tags(route, parse_docblock("@tags Reports, Admin")) == ["Reports", "Admin"]
        assert builder.extract_tags(route, parse_docblock("@group Billing\n@tags Reports")) == ["Billing"]
        assert builder.extract_tags(route, parse_docblock("Show a report")) == ["Reports"]
