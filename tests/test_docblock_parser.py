from api_documentator.parser.base import DocParam, ParsedDoc
from api_documentator.parser.docblock import extract_lines, parse_docblock, parse_param

DOCBLOCK = """
/**
 * List users
 *
 * Returns a paginated list.
 * Newest first.
 *
 * @group User Management
 * @queryParam filter.name string optional Filter by name
 * @queryParam page integer required Page number
 * @urlParam team integer The team
 * @response 200 {"data": [{"id": 1}]}
 * @response 404 Not found
 * @deprecated
 * @unauthenticated
 */
"""


class TestExtractLines:
    def test_strips_comment_syntax(self):
        lines = extract_lines("/**\n * Hello\n *\n * @group X\n */")
        assert lines == ["Hello", "@group X"]

    def test_plain_docstring(self):
        assert extract_lines("Hello\n\n@group X") == ["Hello", "@group X"]


class TestParseParam:
    def test_full_param(self):
        p = parse_param("page integer required Page number")
        assert p == DocParam(name="page", type="integer", required=True, description="Page number")

    def test_optional_flag(self):
        assert parse_param("q string optional Search").required is False

    def test_missing_flag_keeps_description(self):
        p = parse_param("team integer The owning team")
        assert p.required is None
        assert p.description == "The owning team"

    def test_name_only(self):
        p = parse_param("q")
        assert p.type == "string"
        assert p.description == ""


class TestParseDocblock:
    def test_full_block(self):
        doc = parse_docblock(DOCBLOCK)
        assert doc.summary == "List users"
        assert doc.description == "Returns a paginated list.\nNewest first."
        assert doc.group == "User Management"
        assert doc.deprecated is True
        assert doc.authenticated is False
        assert [p.name for p in doc.query_params] == ["filter.name", "page"]
        assert doc.url_param("team").type == "integer"
        assert doc.url_param("missing") is None

    def test_responses(self):
        doc = parse_docblock(DOCBLOCK)
        assert doc.responses[0].status == 200
        assert doc.responses[0].content == {"data": [{"id": 1}]}
        assert doc.responses[1].status == 404
        assert doc.responses[1].content == "Not found"

    def test_response_without_status_defaults_to_200(self):
        doc = parse_docblock("@response {\"ok\": true}")
        assert doc.responses[0].status == 200
        assert doc.responses[0].content == {"ok": True}

    def test_summary_tag_overrides_first_line(self):
        doc = parse_docblock("First line\n@summary Tagged summary\n@description More text")
        assert doc.summary == "Tagged summary"
        assert doc.description == "More text"

    def test_tags_are_case_insensitive(self):
        doc = parse_docblock("@GROUP Billing\n@Authenticated\n@Resource invoice")
        assert doc.group == "Billing"
        assert doc.authenticated is True
        assert doc.resource == "invoice"

    def test_body_params(self):
        doc = parse_docblock("@bodyParam items.sku string required SKU")
        assert doc.body_params[0].name == "items.sku"
        assert doc.body_params[0].required is True

    def test_tags_line(self):
        doc = parse_docblock("List invoices\n@tags Billing, Admin\n@tags Reports")
        assert doc.tags == ["Billing", "Admin", "Reports"]
        assert parse_docblock("@tags  ").tags == []

    def test_unknown_tags_are_ignored(self):
        doc = parse_docblock("Title\n@throws Exception\n@group G")
        assert doc.group == "G"

    def test_empty_input(self):
        assert parse_docblock(None) == ParsedDoc()
        assert parse_docblock("") == ParsedDoc()

    def test_to_dict_drops_empty_values(self):
        doc = parse_docblock("Title\n@group G")
        assert doc.to_dict() == {"summary": "Title", "group": "G"}
