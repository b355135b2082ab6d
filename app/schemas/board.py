"""Board, member and view Pydantic schemas."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from app.models.board import BoardType, MemberRole, ViewType
from app.schemas.base import CamelModel


class PropertyOption(CamelModel):
    id: str
    value: str
    color: str = ""


class PropertyTemplate(CamelModel):
    id: str
    name: str
    type: str = "text"
    options: List[PropertyOption] = []


class BoardCreate(CamelModel):
    title: str = Field(default="", max_length=255)
    description: str = ""
    icon: str = ""
    type: BoardType = BoardType.PRIVATE
    card_properties: List[PropertyTemplate] = []


class BoardPatch(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = None
    type: Optional[BoardType] = None
    card_properties: Optional[List[PropertyTemplate]] = None


class BoardOut(CamelModel):
    id: str
    title: str
    description: str
    icon: str
    type: str
    created_by: str
    modified_by: str
    card_properties: List[Dict[str, Any]]
    create_at: int
    update_at: int


class MemberCreate(CamelModel):
    user_id: str
    minimum_role: Optional[MemberRole] = None
    scheme_admin: bool = False
    scheme_editor: bool = False
    scheme_commenter: bool = False
    scheme_viewer: bool = True


class MemberUpdate(CamelModel):
    minimum_role: Optional[MemberRole] = None
    scheme_admin: Optional[bool] = None
    scheme_editor: Optional[bool] = None
    scheme_commenter: Optional[bool] = None
    scheme_viewer: Optional[bool] = None


class MemberOut(CamelModel):
    board_id: str
    user_id: str
    scheme_admin: bool
    scheme_editor: bool
    scheme_commenter: bool
    scheme_viewer: bool
    minimum_role: Optional[str] = ""


class ViewCreate(CamelModel):
    title: str = Field(default="", max_length=255)
    view_type: ViewType = ViewType.BOARD
    fields: Dict[str, Any] = {}


class ViewOut(CamelModel):
    id: str
    board_id: str
    title: str
    view_type: str
    fields: Dict[str, Any]
    create_at: int
    update_at: int
