"""Swagger document generation pipeline.

Discovers annotated source files, assembles one fragment per comment
block and merges them, in file and block order, into the document.
"""

from pathlib import Path

from loguru import logger

from docswagger.config import GeneratorOptions, build_options
from docswagger.generator.discovery import convert_glob_paths
from docswagger.generator.merge import add_data_to_document, swaggerize
from docswagger.generator.validator import finalize_document
from docswagger.parser.assembler import assemble
from docswagger.parser.scanner import parse_api_file


def parse_file_fragments(file_path: Path) -> list[dict]:
    """Assemble the fragment dicts of every tagged comment in a file."""
    return [assemble(comment).to_dict() for comment in parse_api_file(file_path)]


def generate(options: GeneratorOptions | dict) -> dict:
    """Generate the Swagger document described by options."""
    if not isinstance(options, GeneratorOptions):
        options = build_options(options)

    doc = swaggerize(options.swagger_definition)
    files = convert_glob_paths(options.basedir, options.files)
    logger.info("Found {} source files", len(files))

    for file_path in files:
        fragments = parse_file_fragments(file_path)
        logger.info("Parsed {}: {} annotated blocks", file_path, len(fragments))
        add_data_to_document(doc, fragments)

    return finalize_document(doc, dereference_refs=options.dereference)
