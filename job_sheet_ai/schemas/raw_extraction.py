"""Raw page extraction schema, before AI structuring."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RawExtraction(BaseModel):
    """Text isolated from one fetched page, plus headings kept as structuring hints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = Field(default="", description="Document <title>")
    primary_heading: str = Field(default="", description="First <h1>")
    sub_headings: List[str] = Field(default_factory=list, max_length=5, description="First five <h2>")
    content: str = Field(default="", description="Whitespace-normalized main text")
    content_length: int = Field(default=0, description="len(content)")
    source_url: str = Field(..., description="URL the markup came from")
