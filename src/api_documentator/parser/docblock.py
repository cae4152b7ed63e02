"""Doc-block parser.

Understands free text followed by ``@tag`` lines::

    List users

    Paginated, newest first.
    @group Users
    @tags Accounts, Admin
    @queryParam filter.name string optional Filter by name
    @response 200 {"data": []}

Docstrings and ``/** ... */`` comment blocks are both accepted.
"""

import json
import re

from api_documentator.parser.base import DocParam, DocResponse, ParsedDoc

_SUMMARY = re.compile(r"^@summary\s+(.+)$", re.IGNORECASE)
_DESCRIPTION = re.compile(r"^@description\s*(.*)$", re.IGNORECASE)
_GROUP = re.compile(r"^@group\s+(.+)$", re.IGNORECASE)
_TAGS = re.compile(r"^@tags\s+(.+)$", re.IGNORECASE)
_RESOURCE = re.compile(r"^@resource\s+(\S+)", re.IGNORECASE)
_DEPRECATED = re.compile(r"^@deprecated\b", re.IGNORECASE)
_AUTHENTICATED = re.compile(r"^@authenticated\b", re.IGNORECASE)
_UNAUTHENTICATED = re.compile(r"^@unauthenticated\b", re.IGNORECASE)
_RESPONSE = re.compile(r"^@response(?:\s+(\d{3}))?\s+(.+)$", re.IGNORECASE)
_PARAM = re.compile(r"^@(queryParam|bodyParam|urlParam)\s+(.+)$", re.IGNORECASE)

_PARAM_KEYS = {
    "queryparam": "query_params",
    "bodyparam": "body_params",
    "urlparam": "url_params",
}

_FLAGS = ("required", "optional")


def extract_lines(block: str) -> list[str]:
    """Strip comment delimiters and leading asterisks, drop blank lines."""
    lines = []
    for raw in block.splitlines():
        line = raw.strip()
        if line.startswith("/**"):
            line = line[3:]
        if line.endswith("*/"):
            line = line[:-2]
        line = line.strip().lstrip("*").strip()
        if line:
            lines.append(line)
    return lines


def parse_param(text: str) -> DocParam | None:
    """Parse ``name [type] [required|optional] [description]``."""
    parts = text.split(None, 3)
    if not parts:
        return None

    flag = parts[2].lower() if len(parts) > 2 else None
    if flag in _FLAGS:
        description = parts[3] if len(parts) > 3 else ""
    else:
        # no flag: the third token already belongs to the description
        description = " ".join(parts[2:])

    return DocParam(
        name=parts[0],
        type=parts[1] if len(parts) > 1 else "string",
        required={"required": True, "optional": False}.get(flag),
        description=description.strip(),
    )


def parse_docblock(block: str | None) -> ParsedDoc:
    """Parse a doc block into a :class:`ParsedDoc`. Never raises."""
    if not block:
        return ParsedDoc()

    info: dict = {
        "responses": [],
        "query_params": [],
        "body_params": [],
        "url_params": [],
    }
    summary = None
    description_lines: list[str] = []
    parsing_text = True

    for line in extract_lines(block):
        if line.startswith("@"):
            parsing_text = False

        if parsing_text:
            if summary is None:
                summary = line
            else:
                description_lines.append(line)
            continue

        if m := _SUMMARY.match(line):
            info["summary"] = m.group(1).strip()
        elif m := _DESCRIPTION.match(line):
            if m.group(1).strip():
                description_lines.append(m.group(1).strip())
        elif m := _GROUP.match(line):
            info["group"] = m.group(1).strip()
        elif m := _TAGS.match(line):
            info.setdefault("tags", []).extend(t.strip() for t in m.group(1).split(",") if t.strip())
        elif m := _RESOURCE.match(line):
            info["resource"] = m.group(1).strip()
        elif _DEPRECATED.match(line):
            info["deprecated"] = True
        elif _UNAUTHENTICATED.match(line):
            info["authenticated"] = False
        elif _AUTHENTICATED.match(line):
            info["authenticated"] = True
        elif m := _RESPONSE.match(line):
            info["responses"].append(_parse_response(m.group(1), m.group(2)))
        elif m := _PARAM.match(line):
            param = parse_param(m.group(2))
            if param:
                info[_PARAM_KEYS[m.group(1).lower()]].append(param)
        # unknown tags are ignored

    if "summary" not in info and summary is not None:
        info["summary"] = summary
    if description_lines:
        info["description"] = "\n".join(description_lines).strip()

    return ParsedDoc(**info)


def _parse_response(status: str | None, content: str) -> DocResponse:
    content = content.strip()
    try:
        decoded = json.loads(content)
    except ValueError:
        decoded = content
    return DocResponse(status=int(status or 200), content=decoded)
