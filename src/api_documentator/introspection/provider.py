"""Code metadata provider: how the documentator looks inside host classes.

Extractors never import or inspect host code directly; they go through a
:class:`CodeMetadataProvider`. :class:`PythonMetadataProvider` is the
implementation for Python applications, built on ``importlib`` and
``inspect``. All lookups are memoized for the lifetime of the provider,
which is one generation run.
"""

import importlib
import importlib.util
import inspect
import logging
import re
import sys
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

_MISSING = object()


class CodeMetadataProvider(ABC):
    """Read-only access to classes, methods and their source text."""

    @abstractmethod
    def load_class(self, path: str) -> type | None:
        """Class for a dotted ``module.Class`` path, or None."""

    @abstractmethod
    def has_method(self, cls: type, method: str) -> bool:
        ...

    @abstractmethod
    def get_declared_fields(self, cls: type, attribute: str = "attributes") -> list[str]:
        """Names listed in a public class attribute (``attributes = [...]``)."""

    @abstractmethod
    def get_method_source(self, cls: type, method: str) -> str:
        """Source text of ``cls.method``, or an empty string."""

    @abstractmethod
    def get_method_doc(self, cls: type, method: str) -> str | None:
        ...

    @abstractmethod
    def get_method_parameters(self, cls: type, method: str) -> list[tuple[str, object]]:
        """``(name, annotation)`` pairs, ``self`` excluded."""

    @abstractmethod
    def get_return_annotation(self, cls: type, method: str):
        ...

    @abstractmethod
    def resolve_short_name(self, name: str, context: type) -> str | None:
        """Dotted path for a short class name as seen from ``context``'s module."""

    def class_path(self, cls: type) -> str:
        return f"{cls.__module__}.{cls.__qualname__}"


class PythonMetadataProvider(CodeMetadataProvider):
    """Metadata provider for Python host applications."""

    def __init__(self):
        self._classes: dict[str, type | None] = {}
        self._sources: dict[tuple[type, str], str] = {}
        self._modules: dict[str, str] = {}

    def load_class(self, path: str) -> type | None:
        cached = self._classes.get(path, _MISSING)
        if cached is not _MISSING:
            return cached

        cls = None
        module_name, _, class_name = path.rpartition(".")
        if module_name and class_name:
            try:
                module = importlib.import_module(module_name)
                candidate = getattr(module, class_name, None)
                if inspect.isclass(candidate):
                    cls = candidate
            except Exception as exc:
                logger.debug("Cannot import %s: %s", path, exc)

        self._classes[path] = cls
        return cls

    def has_method(self, cls: type, method: str) -> bool:
        return callable(getattr(cls, method, None))

    def get_declared_fields(self, cls: type, attribute: str = "attributes") -> list[str]:
        if attribute.startswith("_"):
            return []
        value = getattr(cls, attribute, None)
        if not isinstance(value, (list, tuple)):
            return []
        return [v for v in value if isinstance(v, str)]

    def get_method_source(self, cls: type, method: str) -> str:
        key = (cls, method)
        if key not in self._sources:
            source = ""
            func = getattr(cls, method, None)
            if func is not None:
                try:
                    source = inspect.getsource(func)
                except (OSError, TypeError) as exc:
                    logger.debug("No source for %s.%s: %s", cls.__name__, method, exc)
            self._sources[key] = source
        return self._sources[key]

    def get_method_doc(self, cls: type, method: str) -> str | None:
        func = getattr(cls, method, None)
        if func is None:
            return None
        return inspect.getdoc(func)

    def get_method_parameters(self, cls: type, method: str) -> list[tuple[str, object]]:
        func = getattr(cls, method, None)
        if func is None:
            return []
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return []
        hints = self._hints(func)
        return [
            (name, hints.get(name, param.annotation))
            for name, param in signature.parameters.items()
            if name not in ("self", "cls")
        ]

    def get_return_annotation(self, cls: type, method: str):
        func = getattr(cls, method, None)
        if func is None:
            return None
        hints = self._hints(func)
        if "return" in hints:
            return hints["return"]
        try:
            annotation = inspect.signature(func).return_annotation
        except (TypeError, ValueError):
            return None
        return None if annotation is inspect.Signature.empty else annotation

    def resolve_short_name(self, name: str, context: type) -> str | None:
        # already a dotted path
        if "." in name and self.load_class(name) is not None:
            return name

        module = sys.modules.get(context.__module__)
        source = self._module_source(context)

        # explicit import in the context module
        match = re.search(
            rf"^\s*from\s+([\w.]+)\s+import\s+[^\n]*?\b(\w+)\s+as\s+{re.escape(name)}\b",
            source,
            re.MULTILINE,
        )
        if match:
            return f"{_absolute(match.group(1), context)}.{match.group(2)}"
        match = re.search(
            rf"^\s*from\s+([\w.]+)\s+import\s+(?:\([^)]*?|[^\n(]*?)\b{re.escape(name)}\b",
            source,
            re.MULTILINE,
        )
        if match:
            return f"{_absolute(match.group(1), context)}.{name}"

        # same module as the context class
        if module is not None and inspect.isclass(getattr(module, name, None)):
            cls = getattr(module, name)
            return self.class_path(cls)

        return None

    def _module_source(self, cls: type) -> str:
        module_name = cls.__module__
        if module_name not in self._modules:
            source = ""
            module = sys.modules.get(module_name)
            if module is not None:
                try:
                    source = inspect.getsource(module)
                except (OSError, TypeError) as exc:
                    logger.debug("No source for module %s: %s", module_name, exc)
            self._modules[module_name] = source
        return self._modules[module_name]

    @staticmethod
    def _hints(func) -> dict:
        try:
            return inspect.get_annotations(func, eval_str=True)
        except Exception:
            return {}


def _absolute(module_ref: str, context: type) -> str:
    """Resolve ``.sibling`` style imports against the context class's package."""
    if not module_ref.startswith("."):
        return module_ref
    module = sys.modules.get(context.__module__)
    package = getattr(module, "__package__", None) or context.__module__.rpartition(".")[0]
    return importlib.util.resolve_name(module_ref, package)
