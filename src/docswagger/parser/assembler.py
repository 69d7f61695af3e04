"""Document fragment assembler.

Folds the tags of one comment into a DocumentFragment: either a single
model definition (block led by @typedef) or the operations declared by
its @route tags.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from .base import Comment, DocumentFragment, OperationFragment, Tag, TagGroup
from .fields import (
    parse_headers,
    parse_media_types,
    parse_param,
    parse_return,
    parse_route,
    parse_security,
    parse_tag_group,
    parse_typedef,
)


@dataclass
class _BlockState:
    """Accumulator threaded through the tag loop of one block."""

    description: str
    group: TagGroup
    headers: dict
    fragment: DocumentFragment = field(default_factory=DocumentFragment)
    operation: OperationFragment | None = None


def _on_route(state: _BlockState, tag: Tag) -> None:
    route = parse_route(tag.description)
    state.operation = OperationFragment(
        description=state.description,
        tags=[state.group.name],
    )
    state.fragment.paths.setdefault(route.uri, {})[route.method] = state.operation
    state.fragment.tags.append(state.group.model_copy())


def _on_param(state: _BlockState, tag: Tag) -> None:
    state.operation.parameters.append(parse_param(tag))


def _on_operation_id(state: _BlockState, tag: Tag) -> None:
    state.operation.operation_id = tag.description


def _on_summary(state: _BlockState, tag: Tag) -> None:
    state.operation.summary = tag.description


def _on_produces(state: _BlockState, tag: Tag) -> None:
    state.operation.produces = parse_media_types(tag.description)


def _on_consumes(state: _BlockState, tag: Tag) -> None:
    state.operation.consumes = parse_media_types(tag.description)


def _on_security(state: _BlockState, tag: Tag) -> None:
    state.operation.security = parse_security(tag.description)


def _on_deprecated(state: _BlockState, tag: Tag) -> None:
    state.operation.deprecated = True


def _on_return(state: _BlockState, tag: Tag) -> None:
    key, response = parse_return(tag, state.headers)
    state.operation.responses[key] = response


# Handlers that need an open operation. Titles not listed here, and these
# titles before the first @route, have no effect.
OPERATION_HANDLERS: dict[str, Callable[[_BlockState, Tag], None]] = {
    "param": _on_param,
    "operationId": _on_operation_id,
    "summary": _on_summary,
    "produces": _on_produces,
    "consumes": _on_consumes,
    "security": _on_security,
    "deprecated": _on_deprecated,
    "returns": _on_return,
    "return": _on_return,
}


def assemble(comment: Comment) -> DocumentFragment:
    """Build the DocumentFragment for one parsed comment block."""
    tags = comment.tags
    if tags and tags[0].title == "typedef":
        type_name, definition = parse_typedef(tags)
        return DocumentFragment(definitions={type_name: definition})

    state = _BlockState(
        description=comment.description,
        group=parse_tag_group(tags),
        headers=parse_headers(tags),
    )
    for tag in tags:
        if tag.title == "route":
            _on_route(state, tag)
            continue
        handler = OPERATION_HANDLERS.get(tag.title)
        if handler and state.operation is not None:
            handler(state, tag)
    return state.fragment
