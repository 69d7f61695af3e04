"""Generator options and their YAML/JSON config file loader."""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class OptionsError(ValueError):
    """Raised when generator options are missing or malformed."""


class GeneratorOptions(BaseModel):
    """Inputs of one generation run."""

    model_config = ConfigDict(populate_by_name=True)

    swagger_definition: dict = Field(alias="swaggerDefinition")
    files: list[str]
    basedir: Path = Field(default_factory=Path.cwd)
    dereference: bool = False


REQUIRED_KEYS = (("swaggerDefinition", "swagger_definition"), ("files", "files"))


def build_options(data: dict | None) -> GeneratorOptions:
    """Validate a raw options mapping into GeneratorOptions."""
    if not data:
        raise OptionsError("'options' is required.")
    for alias, name in REQUIRED_KEYS:
        if not data.get(alias) and not data.get(name):
            raise OptionsError(f"'{alias}' is required.")
    try:
        return GeneratorOptions(**data)
    except ValidationError as e:
        raise OptionsError(str(e)) from e


def load_document(file_path: Path):
    """Load a YAML or JSON file."""
    text = file_path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        pass

    # Fall back to strict JSON for documents YAML rejects (e.g. tabs).
    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise OptionsError(f"{file_path}: not valid YAML or JSON ({e})") from e


def load_options(file_path: Path) -> GeneratorOptions:
    """Read generator options from a config file.

    A relative `basedir` is resolved against the config file's directory,
    which is also the default basedir.
    """
    data = load_document(file_path)
    if not isinstance(data, dict):
        raise OptionsError(f"{file_path}: expected a mapping of options")

    basedir = Path(data.get("basedir") or ".")
    if not basedir.is_absolute():
        basedir = file_path.parent / basedir
    return build_options({**data, "basedir": basedir})
