"""Merging of per-comment fragments into the aggregate Swagger document."""

import copy

SWAGGER_VERSION = "2.0"

# Top-level maps where a fragment's entries replace same-named ones.
MERGED_MAPS = ("definitions", "securityDefinitions", "responses", "parameters")


def swaggerize(definition: dict) -> dict:
    """Build the base document from the user's swagger definition."""
    doc = copy.deepcopy(definition)
    if "openapi" not in doc:
        doc.setdefault("swagger", SWAGGER_VERSION)
    doc.setdefault("paths", {})
    doc.setdefault("definitions", {})
    doc.setdefault("tags", [])
    return doc


def add_data_to_document(doc: dict, fragments: list[dict]) -> dict:
    """Merge fragments (DocumentFragment dicts) into doc in place.

    Paths merge per uri then per method; named maps merge per key, later
    fragments winning; tags are appended unless a tag of the same name is
    already present.
    """
    for fragment in fragments:
        paths = doc.setdefault("paths", {})
        for uri, methods in fragment.get("paths", {}).items():
            paths.setdefault(uri, {}).update(methods)

        for key in MERGED_MAPS:
            if fragment.get(key):
                doc.setdefault(key, {}).update(fragment[key])

        tags = doc.setdefault("tags", [])
        known = {tag.get("name") for tag in tags}
        for tag in fragment.get("tags", []):
            if tag.get("name") not in known:
                known.add(tag.get("name"))
                tags.append(tag)
    return doc
