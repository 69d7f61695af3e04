"""Comment-to-tag parser.

Unwraps a `/** ... */` block and splits it into a free-text description
and an ordered list of `@title` tags. Type expressions written in braces
are converted into TypeExpression models here, so nothing downstream
has to look at raw type strings.
"""

import re

from .base import AnyType, Comment, GenericType, NamedType, QualifiedType, Tag

TYPED_TITLES = {"param", "property", "returns", "return", "typedef"}
NAMED_TITLES = {"param", "property", "typedef"}
TITLE_ALIASES = {"arg": "param", "argument": "param", "prop": "property"}

_TAG_RE = re.compile(r"@(\S*)\s*(.*)", re.DOTALL)
_GENERIC_RE = re.compile(r"([\w$]+)\.?<(.*)>", re.DOTALL)
_LEADING_HYPHEN_RE = re.compile(r"^-\s+(?=\S)(?!eg:)")


def unwrap(text: str) -> list[str]:
    """Strip comment markers and leading asterisks from each line."""
    lines = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("/**"):
            line = line[3:]
        if line.endswith("*/"):
            line = line[:-2]
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())
    return lines


def parse_comment(text: str) -> Comment:
    """Parse one comment block into a Comment."""
    description: list[str] = []
    chunks: list[list[str]] = []

    for line in unwrap(text):
        if line.startswith("@"):
            chunks.append([line])
        elif chunks:
            chunks[-1].append(line)
        else:
            description.append(line)

    tags = [_parse_tag("\n".join(chunk).strip()) for chunk in chunks]
    return Comment(description="\n".join(description).strip(), tags=tags)


def parse_type_expression(raw: str):
    """Convert the text between braces into a TypeExpression."""
    text = _strip_modifiers(raw)
    if text in ("", "*", "?"):
        return AnyType()
    if text.endswith("[]"):
        return GenericType(container="array", arguments=[_strip_modifiers(text[:-2])])

    match = _GENERIC_RE.fullmatch(text)
    if match:
        arguments = [_strip_modifiers(arg) for arg in _split_arguments(match.group(2))]
        return GenericType(
            container=match.group(1).lower(),
            arguments=[arg for arg in arguments if arg],
        )

    segments = text.split(".")
    if len(segments) > 1 and segments[1] == "model":
        return QualifiedType(name=text)
    return NamedType(name=text)


def _parse_tag(chunk: str) -> Tag:
    match = _TAG_RE.match(chunk)
    title = TITLE_ALIASES.get(match.group(1), match.group(1))
    rest = match.group(2).strip()

    type_expr = None
    if title in TYPED_TITLES and rest.startswith("{"):
        raw_type, rest = _read_braced(rest)
        type_expr = parse_type_expression(raw_type)

    name = None
    if title in NAMED_TITLES:
        name, rest = _read_name(rest)

    if title in ("param", "property"):
        rest = _LEADING_HYPHEN_RE.sub("", rest, count=1)

    return Tag(title=title, name=name, description=rest or None, type=type_expr)


def _read_braced(text: str) -> tuple[str, str]:
    """Split `{type} rest` on the brace matching the first one."""
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[1:index], text[index + 1 :].strip()
    # Unbalanced: the whole remainder is the type.
    return text[1:], ""


def _read_name(text: str) -> tuple[str | None, str]:
    if not text:
        return None, ""
    if text.startswith("["):
        end = text.find("]")
        if end != -1:
            name = text[1:end].split("=", 1)[0].strip()
            return name or None, text[end + 1 :].strip()
    parts = text.split(None, 1)
    return parts[0], parts[1].strip() if len(parts) > 1 else ""


def _split_arguments(text: str) -> list[str]:
    """Split generic arguments on commas outside nested brackets."""
    arguments, depth, current = [], 0, []
    for char in text:
        if char in "<([{":
            depth += 1
        elif char in ">)]}":
            depth -= 1
        if char == "," and depth == 0:
            arguments.append("".join(current))
            current = []
        else:
            current.append(char)
    arguments.append("".join(current))
    return arguments


def _strip_modifiers(text: str) -> str:
    text = text.strip()
    if text.endswith("="):
        text = text[:-1].rstrip()
    if len(text) > 1 and text[0] in "!?":
        text = text[1:].lstrip()
    return text
