"""Card Pydantic schemas."""

from typing import Dict, List, Optional, Union

from pydantic import Field

from app.schemas.base import CamelModel

PropertyValue = Union[str, List[str]]


class CardCreate(CamelModel):
    title: str = Field(default="", max_length=255)
    icon: str = ""
    properties: Dict[str, PropertyValue] = {}
    sort_order: int = 0


class CardPatch(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    icon: Optional[str] = None
    sort_order: Optional[int] = None
    updated_properties: Dict[str, PropertyValue] = {}
    deleted_properties: List[str] = []


class AssigneeAdd(CamelModel):
    user_id: str = Field(min_length=1)


class CardOut(CamelModel):
    id: str
    board_id: str
    title: str
    icon: str
    created_by: str
    modified_by: str
    properties: Dict[str, PropertyValue]
    assignees: List[str]
    sort_order: int
    create_at: int
    update_at: int
