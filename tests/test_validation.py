from unittest.mock import MagicMock

from api_documentator.introspection.provider import PythonMetadataProvider
from api_documentator.introspection.validation import ValidationExtractor
from api_documentator.routing.base import Route

CONTROLLERS = "sample_app.http.controllers"


def _route(action: str) -> Route:
    return Route(uri="api/x", methods=["POST"], action=action)


class TestValidationExtractor:
    def setup_method(self):
        self.extractor = ValidationExtractor(PythonMetadataProvider())

    def test_form_request_rules(self):
        rules = self.extractor.extract(_route(f"{CONTROLLERS}.UserController@store"))
        assert rules["name"] == "required|string|max:255"
        assert rules["role"] == "in:admin,editor,viewer"
        # rule lists are passed through untouched
        assert rules["email"][:2] == ["required", "email"]

    def test_inline_validate_call(self):
        rules = self.extractor.extract(_route(f"{CONTROLLERS}.UserController@update"))
        assert rules == {"name": "string|max:255", "email": "email", "user": "integer"}

    def test_failing_rules_method_yields_nothing(self):
        assert self.extractor.extract(_route(f"{CONTROLLERS}.PostController@preview")) == {}

    def test_closure_route(self):
        assert self.extractor.extract(_route("closure")) == {}

    def test_unknown_action(self):
        assert self.extractor.extract(_route(f"{CONTROLLERS}.UserController@nope")) == {}
        assert self.extractor.extract(_route("missing.module.Controller@index")) == {}

    def test_no_validation(self):
        assert self.extractor.extract(_route(f"{CONTROLLERS}.StatusController@ping")) == {}

    def test_provider_errors_are_contained(self):
        provider = MagicMock()
        provider.load_class.return_value = object
        provider.has_method.return_value = True
        provider.get_method_parameters.side_effect = RuntimeError("boom")
        extractor = ValidationExtractor(provider)
        assert extractor.extract(_route("a.B@c")) == {}
