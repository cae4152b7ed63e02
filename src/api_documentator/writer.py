"""Serialization and atomic writing of the generated document."""

import json
import os
import tempfile
from pathlib import Path

import yaml

from api_documentator.errors import OutputError


def sanitize_utf8(data):
    """Replace lone surrogates and other unencodable characters in strings."""
    if isinstance(data, str):
        return data.encode("utf-8", errors="replace").decode("utf-8")
    if isinstance(data, dict):
        return {sanitize_utf8(k): sanitize_utf8(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [sanitize_utf8(v) for v in data]
    return data


def serialize(document: dict, fmt: str = "json", pretty: bool = True, sanitize: bool = True) -> str:
    """Render the document as JSON or YAML text.

    Raises:
        OutputError: when the structure cannot be serialized.
    """
    if sanitize:
        document = sanitize_utf8(document)

    try:
        if fmt == "yaml":
            text = yaml.safe_dump(document, allow_unicode=True, sort_keys=False, default_flow_style=False)
        else:
            text = json.dumps(document, ensure_ascii=False, indent=4 if pretty else None)
        # fail here rather than halfway through the write
        text.encode("utf-8")
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise OutputError(f"Cannot serialize document: {e}") from e

    return text


def write_document(
    document: dict,
    path: Path,
    fmt: str = "json",
    pretty: bool = True,
    sanitize: bool = True,
) -> int:
    """Serialize and write ``document`` to ``path``; returns the size in bytes.

    The file is written to a temporary sibling first and moved into place,
    so a failed write never leaves a partial file behind.
    """
    data = serialize(document, fmt=fmt, pretty=pretty, sanitize=sanitize).encode("utf-8")
    path = Path(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Cannot create directory {path.parent}: {e}") from e

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile("wb", dir=path.parent, prefix=f".{path.name}.", delete=False) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"Failed to write: {path}: {e}") from e

    return len(data)
