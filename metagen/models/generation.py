from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Input variants
# ---------------------------------------------------------------------------

class TextInput(BaseModel):
    input_type: Literal["text"] = "text"
    body: str


class UrlInput(BaseModel):
    input_type: Literal["url"] = "url"
    address: str


class ImageInput(BaseModel):
    input_type: Literal["image"] = "image"
    data: bytes = Field(repr=False)
    mime_type: str = "application/octet-stream"


InputVariant = Annotated[
    Union[TextInput, UrlInput, ImageInput],
    Field(discriminator="input_type"),
]


# ---------------------------------------------------------------------------
# Generation tasks
# ---------------------------------------------------------------------------

class GenerationTask(str, Enum):
    TITLE = "title"
    DESCRIPTION = "description"


class TaskSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: GenerationTask
    template: str
    max_new_tokens: int = Field(gt=0)
    char_budget: int = Field(gt=0)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class GenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str


class ErrorResponse(BaseModel):
    error: str
