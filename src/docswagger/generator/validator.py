"""Validates and optionally dereferences the assembled Swagger document."""

import copy

from loguru import logger

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _iter_refs(node, pointer: str = "#"):
    """Yield (pointer, ref) for every `$ref` found under node."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield pointer, ref
        for key, value in node.items():
            yield from _iter_refs(value, f"{pointer}/{_escape(str(key))}")
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _iter_refs(value, f"{pointer}/{index}")


def resolve_pointer(doc: dict, ref: str):
    """Look up a local `#/a/b` reference. Raises KeyError when missing."""
    if not ref.startswith("#/"):
        raise KeyError(ref)
    node = doc
    for token in ref[2:].split("/"):
        token = _unescape(token)
        if isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        elif isinstance(node, dict) and token in node:
            node = node[token]
        else:
            raise KeyError(ref)
    return node


def validate_refs(doc: dict) -> dict[str, str]:
    """Check that every local reference resolves.

    Returns dict of {pointer: error_message} for broken references.
    """
    errors = {}
    for pointer, ref in _iter_refs(doc):
        if not ref.startswith("#"):
            continue
        try:
            resolve_pointer(doc, ref)
        except KeyError:
            errors[pointer] = f"Unresolved reference: {ref}"
    return errors


def validate_responses(doc: dict) -> dict[str, str]:
    """Check that every operation declares at least one response."""
    errors = {}
    for uri, methods in doc.get("paths", {}).items():
        if not isinstance(methods, dict):
            continue
        for method, operation in methods.items():
            if method not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            if not operation.get("responses"):
                pointer = f"#/paths/{_escape(uri)}/{method}"
                errors[pointer] = "Operation declares no responses"
    return errors


def validate_document(doc: dict) -> dict[str, str]:
    """Run all validations on the document.

    Returns dict of {pointer: error_message} for all problems found.
    """
    errors = {}
    errors.update(validate_refs(doc))
    errors.update(validate_responses(doc))
    return errors


def dereference(doc: dict) -> dict:
    """Return a copy of doc with resolvable local references inlined.

    A reference already being expanded higher up the tree is left in
    place, so recursive models terminate.
    """

    def expand(node, active: tuple[str, ...]):
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str) and ref.startswith("#/") and ref not in active:
                try:
                    target = resolve_pointer(doc, ref)
                except KeyError:
                    return copy.deepcopy(node)
                return expand(target, active + (ref,))
            return {key: expand(value, active) for key, value in node.items()}
        if isinstance(node, list):
            return [expand(value, active) for value in node]
        return node

    return expand(doc, ())


def finalize_document(doc: dict, dereference_refs: bool = False) -> dict:
    """Report validation problems and return the final document.

    Problems are logged, never raised; the document is returned as is
    unless dereferencing was requested.
    """
    for pointer, message in validate_document(doc).items():
        logger.warning("{}: {}", pointer, message)
    if dereference_refs:
        return dereference(doc)
    return doc
