"""Validation rule extraction from controller actions.

Two sources are tried in order:

1. A "form request": a parameter annotated with a class that has a public
   ``rules()`` method. The class is instantiated without running
   ``__init__`` and ``rules()`` is called.
2. An inline ``<request>.validate({...})`` call in the method body. Only
   literal ``'field': 'rule|rule'`` pairs are recognized; rules built at
   runtime or given as lists are missed.

Any failure yields an empty rule set.
"""

import inspect
import logging
import re

from api_documentator.introspection.provider import CodeMetadataProvider
from api_documentator.routing.base import Route

logger = logging.getLogger(__name__)

_VALIDATE_CALL = re.compile(r"\w+\.validate\(\s*\{(.*?)\}\s*[,)]", re.DOTALL)
_RULE_PAIR = re.compile(r"""['"]([^'"]+)['"]\s*:\s*['"]([^'"]+)['"]""")


class ValidationExtractor:
    """Pulls ``{field: rules}`` out of a route's controller action."""

    def __init__(self, provider: CodeMetadataProvider):
        self.provider = provider

    def extract(self, route: Route) -> dict:
        action = route.action_ref
        if action is None:
            return {}

        cls = self.provider.load_class(action.controller)
        if cls is None or not self.provider.has_method(cls, action.method):
            return {}

        try:
            rules = self.from_form_request(cls, action.method)
            if rules:
                return rules
            return self.from_method_body(cls, action.method)
        except Exception as exc:
            logger.debug("Cannot extract validation for %s: %s", route.uri, exc)
            return {}

    def from_form_request(self, cls: type, method: str) -> dict:
        for _name, annotation in self.provider.get_method_parameters(cls, method):
            if not inspect.isclass(annotation) or annotation.__module__ == "builtins":
                continue

            if not callable(getattr(annotation, "rules", None)):
                continue

            try:
                request = annotation.__new__(annotation)
                rules = request.rules()
            except Exception as exc:
                logger.debug("rules() of %s failed: %s", annotation.__name__, exc)
                continue

            if isinstance(rules, dict):
                return rules

        return {}

    def from_method_body(self, cls: type, method: str) -> dict:
        source = self.provider.get_method_source(cls, method)
        match = _VALIDATE_CALL.search(source)
        if not match:
            return {}
        return dict(_RULE_PAIR.findall(match.group(1)))
