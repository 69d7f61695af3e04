"""Unified data models for parsed comment annotations.

The scanner, tag parser and assembler exchange these models; the
assembled DocumentFragment is converted to a plain OpenAPI dict
for downstream merging.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SourceCommentBlock(BaseModel):
    """One /** ... */ region of a source file."""

    start_line: int
    end_line: int
    raw_lines: list[str]

    @property
    def text(self) -> str:
        return "\n".join(self.raw_lines)


class NamedType(BaseModel):
    kind: Literal["named"] = "named"
    name: str


class QualifiedType(BaseModel):
    """A `Name.model` reference to a definition."""

    kind: Literal["qualified"] = "qualified"
    name: str

    @property
    def target(self) -> str:
        return self.name.split(".")[0]


class GenericType(BaseModel):
    """A container applied to element types, e.g. `Array.<Widget>`."""

    kind: Literal["generic"] = "generic"
    container: str
    arguments: list[str]


class AnyType(BaseModel):
    kind: Literal["any"] = "any"


TypeExpression = Annotated[
    Union[NamedType, QualifiedType, GenericType, AnyType],
    Field(discriminator="kind"),
]


class Tag(BaseModel):
    """A single `@title` annotation inside a comment block."""

    title: str
    name: str | None = None
    description: str | None = None
    type: TypeExpression | None = None


class Comment(BaseModel):
    """A parsed comment block: leading description plus ordered tags."""

    description: str = ""
    tags: list[Tag] = []


class RouteDescriptor(BaseModel):
    method: str
    uri: str


class FieldDescriptor(BaseModel):
    name: str
    location: str  # query / path / body / header / formData; "get" when omitted
    required: bool


class ParameterObject(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: str = Field(alias="in")  # query / path / body / header / formData
    description: str | None = None
    required: bool = False
    type: str | None = None
    enum: list[str] | None = None
    schema_: dict | None = Field(default=None, alias="schema")


class ResponseObject(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    headers: dict | None = None  # {header_name: {type, description}}
    schema_: dict | None = Field(default=None, alias="schema")


class OperationFragment(BaseModel):
    """One HTTP method on one path."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    tags: list[str] = []
    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    produces: list[str] | None = None
    consumes: list[str] | None = None
    security: Any = None
    deprecated: bool | None = None
    parameters: list[ParameterObject] = []
    responses: dict[str, ResponseObject] = {}


class ModelDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    all_of: list[dict] | None = Field(default=None, alias="allOf")
    required: list[str] | None = None
    properties: dict[str, dict] = {}


class TagGroup(BaseModel):
    name: str = "default"
    description: str = ""


class DocumentFragment(BaseModel):
    """Everything one comment block contributes to the document."""

    paths: dict[str, dict[str, OperationFragment]] = {}
    tags: list[TagGroup] = []
    definitions: dict[str, ModelDefinition] = {}

    def to_dict(self) -> dict:
        """Dump as an OpenAPI-shaped dict, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
