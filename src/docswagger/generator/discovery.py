"""Source file discovery from glob patterns."""

import glob
from pathlib import Path


def convert_glob_paths(basedir: Path, patterns: list[str]) -> list[Path]:
    """Expand globs (relative to basedir) into an ordered list of files."""
    files: list[Path] = []
    seen = set()
    for pattern in patterns:
        full_pattern = str(Path(basedir).resolve() / pattern)
        for match in sorted(glob.glob(full_pattern, recursive=True)):
            path = Path(match)
            if path.is_file() and path not in seen:
                seen.add(path)
                files.append(path)
    return files
