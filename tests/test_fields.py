from docswagger.parser.base import GenericType, NamedType, QualifiedType, Tag
from docswagger.parser.fields import (
    parse_enums,
    parse_example,
    parse_field,
    parse_headers,
    parse_media_types,
    parse_param,
    parse_property,
    parse_return,
    parse_route,
    parse_security,
    parse_tag_group,
    parse_typedef,
)


class TestParseRoute:
    def test_method_lowercased(self):
        route = parse_route("POST /api/users")
        assert route.method == "post"
        assert route.uri == "/api/users"

    def test_defaults(self):
        route = parse_route("")
        assert route.method == "get"
        assert route.uri == ""

    def test_extra_whitespace(self):
        route = parse_route("  PUT    /a/{id}  ")
        assert (route.method, route.uri) == ("put", "/a/{id}")


class TestParseField:
    def test_full_path(self):
        field = parse_field("id.path.required")
        assert (field.name, field.location, field.required) == ("id", "path", True)

    def test_optional(self):
        field = parse_field("limit.query")
        assert field.required is False

    def test_missing_location_defaults_to_get(self):
        assert parse_field("q").location == "get"

    def test_third_segment_must_be_required(self):
        assert parse_field("q.query.optional").required is False


class TestParseEnums:
    def test_typed_values(self):
        assert parse_enums("Colour - eg: string:red,green,blue") == {
            "type": "string",
            "enums": ["red", "green", "blue"],
        }

    def test_untyped_values_default_to_string(self):
        assert parse_enums("- eg: red,green") == {"type": "string", "enums": ["red", "green"]}

    def test_custom_base_type(self):
        assert parse_enums("- eg: integer:1,2")["type"] == "integer"

    def test_no_example(self):
        assert parse_enums("just a description") is None
        assert parse_enums(None) is None


class TestParseHeaders:
    def test_type_after_separator(self):
        tags = [Tag(title="header", description="200.X-Rate-Limit - integer requests remaining")]
        assert parse_headers(tags) == {
            "200": {"X-Rate-Limit": {"type": "integer", "description": "requests remaining"}}
        }

    def test_type_before_code(self):
        tags = [Tag(title="headers", description="{integer} 200.X-Rate-Limit - calls per hour")]
        assert parse_headers(tags) == {
            "200": {"X-Rate-Limit": {"type": "integer", "description": "calls per hour"}}
        }

    def test_grouped_by_code_then_name(self):
        tags = [
            Tag(title="header", description="200.X-A - string a"),
            Tag(title="header", description="200.X-B - string b"),
            Tag(title="header", description="429.Retry-After - integer seconds"),
        ]
        headers = parse_headers(tags)
        assert list(headers) == ["200", "429"]
        assert list(headers["200"]) == ["X-A", "X-B"]

    def test_malformed_lines_skipped(self):
        tags = [
            Tag(title="header", description="X-Rate-Limit - integer no code"),
            Tag(title="header", description="abc.X-Name - integer no digits"),
            Tag(title="header", description="200.X-Empty"),
            Tag(title="header", description="200.X-Ok - string fine"),
        ]
        assert parse_headers(tags) == {"200": {"X-Ok": {"type": "string", "description": "fine"}}}

    def test_ignores_other_titles(self):
        assert parse_headers([Tag(title="summary", description="200.X - string y")]) == {}


class TestParseSecurity:
    def test_bare_scheme(self):
        assert parse_security("apiKey") == [{"apiKey": []}]

    def test_json_literal(self):
        assert parse_security('[{"oauth2":["read"]}]') == [{"oauth2": ["read"]}]


class TestParseMediaTypes:
    def test_split_on_whitespace(self):
        assert parse_media_types("application/json  text/plain\tapplication/xml") == [
            "application/json",
            "text/plain",
            "application/xml",
        ]


class TestParseTagGroup:
    def test_group(self):
        group = parse_tag_group([Tag(title="group", description="users - User operations")])
        assert (group.name, group.description) == ("users", "User operations")

    def test_default(self):
        group = parse_tag_group([Tag(title="route", description="GET /")])
        assert (group.name, group.description) == ("default", "")


class TestParseReturn:
    def test_response_with_schema_and_headers(self):
        tags = [
            Tag(title="returns", description="200 - OK", type=GenericType(container="array", arguments=["Widget"])),
            Tag(title="header", description="200.X-Total - integer total count"),
        ]
        key, response = parse_return(tags[0], parse_headers(tags))
        assert key == "200"
        assert response.description == "OK"
        assert response.schema_ == {"type": "array", "items": {"$ref": "#/definitions/Widget"}}
        assert response.headers == {"X-Total": {"type": "integer", "description": "total count"}}

    def test_bare_code(self):
        key, response = parse_return(Tag(title="return", description="404"), {})
        assert key == "404"
        assert response.description == ""
        assert response.schema_ is None
        assert response.headers is None

    def test_headers_of_other_codes_not_attached(self):
        headers = parse_headers([Tag(title="header", description="429.Retry-After - integer seconds")])
        _, response = parse_return(Tag(title="returns", description="200 - OK"), headers)
        assert response.headers is None

    def test_plain_type_has_no_schema(self):
        tag = Tag(title="returns", description="200 - text", type=NamedType(name="string"))
        assert parse_return(tag, {})[1].schema_ is None


class TestParseParam:
    def test_primitive_param(self):
        param = parse_param(Tag(title="param", name="limit.query", description="page size", type=NamedType(name="integer")))
        assert param.model_dump(by_alias=True, exclude_none=True) == {
            "name": "limit",
            "in": "query",
            "description": "page size",
            "required": False,
            "type": "integer",
        }

    def test_model_param_uses_schema(self):
        param = parse_param(Tag(title="param", name="body.body.required", type=QualifiedType(name="Widget.model")))
        assert param.schema_ == {"$ref": "#/definitions/Widget"}
        assert param.type is None
        assert param.required is True

    def test_enum_param(self):
        param = parse_param(
            Tag(title="param", name="role.query", description="Role - eg: admin,user", type=NamedType(name="enum"))
        )
        assert param.type == "string"
        assert param.enum == ["admin", "user"]

    def test_enum_without_values_defaults_to_string(self):
        param = parse_param(Tag(title="param", name="role.query", type=NamedType(name="enum")))
        assert param.type == "string"
        assert param.enum is None


class TestParseExample:
    def test_boolean(self):
        assert parse_example("boolean", "true") is True
        assert parse_example("boolean", "yes") is False

    def test_integer(self):
        assert parse_example("integer", " 42 ") == 42
        assert parse_example("integer", "1.5") == 1.5
        assert parse_example("integer", "many") is None
        assert parse_example("integer", "nan") is None
        assert parse_example("integer", "inf") is None
        assert parse_example("integer", "-Infinity") is None

    def test_enum_has_no_example(self):
        assert parse_example("enum", "a,b") is None

    def test_other_types_keep_string(self):
        assert parse_example("string", " bob ") == "bob"


class TestParseProperty:
    def test_required_property_with_example(self):
        name, required, prop = parse_property(
            Tag(title="property", name="age.required", description="Age - eg: 30", type=NamedType(name="integer"))
        )
        assert (name, required) == ("age", True)
        assert prop == {"type": "integer", "description": "Age", "example": 30}

    def test_enum_property(self):
        _, _, prop = parse_property(
            Tag(title="property", name="status", description="State - eg: on,off", type=NamedType(name="enum"))
        )
        assert prop == {"type": "string", "description": "State", "enum": ["on", "off"]}

    def test_schema_property(self):
        _, _, prop = parse_property(
            Tag(title="property", name="tags", type=GenericType(container="array", arguments=["string"]))
        )
        assert prop == {"type": "array", "items": {"type": "string"}}


class TestParseTypedef:
    def test_model_with_parent(self):
        tags = [
            Tag(title="typedef", name="Dog", type=QualifiedType(name="Animal.model")),
            Tag(title="property", name="name.required", type=NamedType(name="string")),
            Tag(title="property", name="bark", type=NamedType(name="boolean")),
            Tag(title="summary", description="ignored"),
        ]
        name, definition = parse_typedef(tags)
        assert name == "Dog"
        assert definition.all_of == [{"$ref": "#/definitions/Animal"}]
        assert definition.required == ["name"]
        assert list(definition.properties) == ["name", "bark"]

    def test_no_required_list_until_needed(self):
        tags = [
            Tag(title="typedef", name="Point"),
            Tag(title="property", name="x", type=NamedType(name="integer")),
        ]
        _, definition = parse_typedef(tags)
        assert definition.required is None
        assert definition.all_of is None
