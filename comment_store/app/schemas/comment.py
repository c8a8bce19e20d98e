"""
Pydantic schemas for comment records.

A comment is an annotation attached to a range of a file.  The anchor
keeps the range coordinates together with the text the range held
when the comment was made, so the editor can find the range again
after the file has been edited.

The store itself persists whatever JSON object a client posts; these
models describe the record for clients and documentation.  Anchor
fields use the camelCase names the editor writes, and unknown fields
are kept so a record survives a load/dump cycle unchanged.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Fields that must be present and non‑empty for a comment to be stored.
REQUIRED_FIELDS = ("id", "file", "type", "content", "anchor")


class Anchor(BaseModel):
    """Range coordinates (1‑based, end column exclusive) plus a text snapshot."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    start_line_number: int = Field(..., alias="startLineNumber", ge=1)
    start_column: int = Field(..., alias="startColumn", ge=1)
    end_line_number: int = Field(..., alias="endLineNumber", ge=1)
    end_column: int = Field(..., alias="endColumn", ge=1)
    text: str = Field("", description="Text of the range when the comment was made")


class Comment(BaseModel):
    """A stored annotation tied to a file location."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Caller supplied unique identifier, e.g. c-<epoch ms>")
    file: str = Field(..., description="Path or URI of the annotated document")
    type: str = Field(..., description="Presentation hint such as 'red underline' or 'yellow highlight'; opaque to the store")
    title: Optional[str] = None
    content: str
    suggestion: Optional[str] = Field(None, description="Proposed replacement text")
    is_suggesting: Optional[bool] = None
    anchor: Anchor

    @field_validator("id", "file", "type", "content")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    def to_payload(self) -> dict:
        """Serialise the comment the way it is sent to and stored by the server."""
        return self.model_dump(by_alias=True, exclude_none=True)
