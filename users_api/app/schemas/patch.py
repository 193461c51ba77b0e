"""
Pydantic model for a single JSON Patch operation (RFC 6902).

A ``PATCH`` request body is a JSON array of these objects, for
example::

    [
        {"op": "replace", "path": "/login", "value": "ivan42"},
        {"op": "remove", "path": "/lastName"}
    ]
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class PatchOperation(BaseModel):
    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(..., examples=["/login"])
    value: Any = None
    from_: Optional[str] = Field(None, alias="from")

    model_config = {
        "populate_by_name": True,
    }

    @property
    def has_value(self) -> bool:
        """Whether ``value`` was present in the document, even as null."""
        return "value" in self.model_fields_set
