from datetime import datetime
from typing import List, Optional

from schemas.base import CamelModel


class NoteCreate(CamelModel):
    folder_id: Optional[int] = None
    title: Optional[str] = None
    heading: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None


class NoteUpdate(CamelModel):
    # only fields present in the request body are applied
    folder_id: Optional[int] = None
    title: Optional[str] = None
    heading: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    is_pinned: Optional[bool] = None


class NoteOut(CamelModel):
    id: int
    user_id: int
    folder_id: int
    title: str
    heading: str = ""
    content: str = ""
    tags: List[str] = []
    is_pinned: bool = False
    created_at: datetime
    updated_at: datetime


class NoteResponse(CamelModel):
    success: bool = True
    note: NoteOut


class NoteListResponse(CamelModel):
    success: bool = True
    notes: List[NoteOut]
