"""Decoders for the individual annotation tags.

Each decoder is best-effort: malformed input produces no value instead
of an error, since annotations are free-form comment text.
"""

import json
import math
import re

from loguru import logger

from .base import (
    FieldDescriptor,
    ModelDefinition,
    ParameterObject,
    QualifiedType,
    ResponseObject,
    RouteDescriptor,
    Tag,
    TagGroup,
)
from .types import ref, resolve_items, resolve_schema, resolve_type

# Default for both a missing HTTP method and a missing parameter location.
DEFAULT_TOKEN = "get"

HEADER_TITLES = ("header", "headers")

_EXAMPLE_RE = re.compile(r"-\s*eg:\s*")
_HEADER_SEPARATOR_RE = re.compile(r"\s+-\s+")


def parse_route(text: str | None) -> RouteDescriptor:
    """Parse `METHOD /uri`."""
    tokens = (text or "").split()
    method = tokens[0].lower() if tokens else ""
    return RouteDescriptor(
        method=method or DEFAULT_TOKEN,
        uri=tokens[1] if len(tokens) > 1 else "",
    )


def parse_field(path: str | None) -> FieldDescriptor:
    """Parse a `name.location[.required]` field path."""
    segments = (path or "").split(".")
    return FieldDescriptor(
        name=segments[0],
        location=segments[1] if len(segments) > 1 and segments[1] else DEFAULT_TOKEN,
        required=len(segments) > 2 and segments[2] == "required",
    )


def parse_enums(description: str | None) -> dict | None:
    """Parse the `- eg: [type:]a,b,c` suffix of a description.

    Returns {"type": base_type, "enums": [...]} or None when the
    description carries no example.
    """
    parts = _EXAMPLE_RE.split(description or "")
    if len(parts) < 2:
        return None
    pieces = parts[1].split(":")
    if len(pieces) == 1:
        base_type, values = "string", pieces[0]
    else:
        base_type, values = pieces[0].strip() or "string", pieces[1]
    return {
        "type": base_type,
        "enums": [value.strip() for value in values.split(",")],
    }


def parse_headers(tags: list[Tag]) -> dict[str, dict[str, dict]]:
    """Group `@header code.Name - type description` lines by code, then name."""
    headers: dict[str, dict[str, dict]] = {}
    for tag in tags:
        if tag.title not in HEADER_TITLES:
            continue
        parsed = _parse_header_line(tag.description or "")
        if parsed is None:
            logger.debug("Skipping malformed header line: {!r}", tag.description)
            continue
        code, field_name, entry = parsed
        headers.setdefault(code, {})[field_name] = entry
    return headers


def _parse_header_line(text: str) -> tuple[str, str, dict] | None:
    parts = _HEADER_SEPARATOR_RE.split(text, maxsplit=1)
    segments = parts[0].split(".", 1)
    if len(segments) < 2 or not segments[1].strip():
        return None

    head, field_name = segments[0], segments[1].strip()
    code = re.search(r"\d+", head)
    if not code:
        return None

    remainder = parts[1].strip() if len(parts) > 1 else ""
    # The type may precede the code (`{integer} 200.X`) or lead the text.
    words = [word for word in re.findall(r"\w+", head) if not word.isdigit()]
    if words:
        type_name, description = words[0], remainder
    else:
        match = re.match(r"(\w+)\s*(.*)", remainder, re.DOTALL)
        if not match:
            return None
        type_name, description = match.group(1), match.group(2).strip()

    return code.group(0), field_name, {"type": type_name, "description": description}


def parse_security(text: str | None):
    """Parse a JSON security requirement, or wrap a bare scheme name."""
    text = text or ""
    try:
        return json.loads(text)
    except ValueError:
        return [{text: []}]


def parse_media_types(text: str | None) -> list[str]:
    """Split a produces/consumes line into media types."""
    return (text or "").split()


def parse_tag_group(tags: list[Tag]) -> TagGroup:
    """Tag group from the first `@group name - description` tag."""
    for tag in tags:
        if tag.title == "group":
            parts = (tag.description or "").split("-")
            return TagGroup(
                name=parts[0].strip(),
                description=parts[1].strip() if len(parts) > 1 else "",
            )
    return TagGroup()


def parse_return(tag: Tag, headers: dict) -> tuple[str, ResponseObject]:
    """Parse `@returns {Type} code - description` into a keyed response."""
    parts = (tag.description or "").split("-")
    key = parts[0].strip()
    response = ResponseObject(
        description=parts[1].strip() if len(parts) > 1 else "",
        headers=headers.get(key),
    )
    if resolve_type(tag.type):
        response.schema_ = resolve_schema(tag.type)
    return key, response


def parse_param(tag: Tag) -> ParameterObject:
    field = parse_field(tag.name)
    param = ParameterObject(
        name=field.name,
        location=field.location,
        description=tag.description,
        required=field.required,
    )
    schema = resolve_schema(tag.type)
    if schema:
        param.schema_ = schema
        return param

    param.type = resolve_type(tag.type)
    if param.type == "enum":
        param.type, param.enum = _enum_type(tag.description)
    return param


def parse_example(type_name: str | None, example: str):
    """Coerce an example value to the property's declared type.

    Returns None when no example should be stored.
    """
    example = example.strip()
    if type_name == "boolean":
        return example == "true"
    if type_name == "integer":
        try:
            return int(example)
        except ValueError:
            pass
        try:
            value = float(example)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            logger.debug("Dropping non-numeric example {!r}", example)
            return None
        return value
    if type_name == "enum":
        return None
    return example


def parse_property(tag: Tag) -> tuple[str, bool, dict]:
    """Parse one `@property` tag into (name, required, property schema)."""
    segments = (tag.name or "").split(".")
    name = segments[0]
    required = len(segments) > 1 and segments[1] == "required"

    schema = resolve_schema(tag.type)
    if schema:
        return name, required, schema

    type_name = resolve_type(tag.type)
    parts = _EXAMPLE_RE.split(tag.description or "", maxsplit=1)
    prop = {} if type_name is None else {"type": type_name}
    prop["description"] = parts[0].strip()
    items = resolve_items(tag.type)
    if items:
        prop["items"] = items

    example = parts[1] if len(parts) > 1 else None
    if type_name == "enum":
        prop["type"], values = _enum_type(f"- eg: {example}" if example else None)
        if values is not None:
            prop["enum"] = values
    if example:
        value = parse_example(type_name, example)
        if value is not None:
            prop["example"] = value
    return name, required, prop


def parse_typedef(tags: list[Tag]) -> tuple[str, ModelDefinition]:
    """Build a model definition from a block whose first tag is @typedef."""
    head = tags[0]
    definition = ModelDefinition()
    if isinstance(head.type, QualifiedType):
        definition.all_of = [ref(head.type.target)]

    for tag in tags[1:]:
        if tag.title != "property":
            continue
        name, required, prop = parse_property(tag)
        if required:
            if definition.required is None:
                definition.required = []
            definition.required.append(name)
        definition.properties[name] = prop
    return head.name or "", definition


def _enum_type(description: str | None) -> tuple[str, list[str] | None]:
    parsed = parse_enums(description)
    if parsed is None:
        return "string", None
    return parsed["type"], parsed["enums"]
