"""Comment block scanner.

Finds `/** ... */` regions in source files and hands each one to the
tag parser.
"""

import enum
import re
from pathlib import Path

from loguru import logger

from .base import Comment, SourceCommentBlock
from .tags import parse_comment

OPEN_MARKER = "/**"
CLOSE_MARKER = "*/"


class _State(enum.Enum):
    SEARCHING = "searching"
    IN_BLOCK = "in_block"


def read_lines(file_path: Path) -> list[str]:
    """Read a file and return its non-empty lines."""
    text = file_path.read_text(encoding="utf-8")
    return [line for line in re.split(r"[\n\r]", text) if line]


def scan_blocks(lines: list[str]) -> list[SourceCommentBlock]:
    """Extract every terminated comment block, in file order.

    Only one region can be open at a time; an open marker inside an open
    region is ordinary content. A region still open at EOF is dropped.
    """
    blocks = []
    state = _State.SEARCHING
    start = 0

    for index, line in enumerate(lines):
        stripped = line.strip()
        if state is _State.SEARCHING:
            if stripped == OPEN_MARKER:
                state = _State.IN_BLOCK
                start = index
        elif stripped == CLOSE_MARKER:
            blocks.append(
                SourceCommentBlock(
                    start_line=start,
                    end_line=index,
                    raw_lines=[raw.strip() for raw in lines[start : index + 1]],
                )
            )
            state = _State.SEARCHING

    if state is _State.IN_BLOCK:
        logger.debug("Unterminated comment block at line {}", start)
    return blocks


def parse_lines(lines: list[str]) -> list[Comment]:
    """Parse every block in `lines`, keeping only comments that carry tags."""
    comments = []
    for block in scan_blocks(lines):
        comment = parse_comment(block.text)
        if comment.tags:
            comments.append(comment)
    return comments


def parse_api_file(file_path: Path) -> list[Comment]:
    """Parse a source file into its tagged comments."""
    return parse_lines(read_lines(file_path))
