"""Type expression interpreter.

Resolves TypeExpression models into OpenAPI type names and schema dicts.
"""

from .base import GenericType, NamedType, QualifiedType

PRIMITIVE_TYPES = ("object", "string", "integer", "boolean")
DEFINITIONS_PREFIX = "#/definitions/"


def ref(name: str) -> dict:
    return {"$ref": DEFINITIONS_PREFIX + name}


def item_schema(name: str) -> dict:
    """Schema for one element type: a primitive or a definition reference."""
    if name in PRIMITIVE_TYPES:
        return {"type": name}
    return ref(name)


def resolve_type(expr) -> str | None:
    """Return the bare type name of an expression, or None when absent."""
    if expr is None:
        return None
    if isinstance(expr, QualifiedType):
        return expr.target
    if isinstance(expr, NamedType):
        return expr.name
    if isinstance(expr, GenericType):
        return expr.container.lower()
    return "string"


def resolve_schema(expr) -> dict | None:
    """Return a schema for references and containers, None for plain types.

    `Widget.model` becomes a definition reference; `Array.<X>` becomes an
    array whose items are X. With several element types every one of them
    is listed under `items.oneOf`.
    """
    if isinstance(expr, QualifiedType):
        return ref(expr.target)
    if not isinstance(expr, GenericType) or not expr.arguments:
        return None

    container = expr.container.lower()
    if len(expr.arguments) == 1:
        return {"type": container, "items": item_schema(expr.arguments[0])}
    return {
        "type": container,
        "items": {"oneOf": [item_schema(arg) for arg in expr.arguments]},
    }


def resolve_items(expr) -> dict | None:
    """Items shape of a container's first element type."""
    if isinstance(expr, GenericType) and expr.arguments and expr.arguments[0]:
        return item_schema(expr.arguments[0])
    return None
