from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ViewSummary(BaseModel):
    """Listing entry: the view without its payload.

    Stored documents are caller-defined, so name and meta are passed through
    as stored rather than validated.
    """
    id: str
    meta: Optional[Dict[str, Any]] = None
    name: Any = None


class ViewCreateRequest(BaseModel):
    name: str
    view: Dict[str, Any] = Field(default_factory=dict)


class ViewUpdateRequest(BaseModel):
    view: Dict[str, Any] = Field(default_factory=dict)


class ViewResponse(BaseModel):
    message: str
    success: bool
    view: Optional[Dict[str, Any]] = None


class DeleteViewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    success: bool
    next_view: Optional[Dict[str, Any]] = Field(default=None, alias="nextView")
