from datetime import datetime
from typing import List, Optional

from schemas.base import CamelModel


class NoteFolderCreate(CamelModel):
    name: Optional[str] = None


class NoteFolderUpdate(CamelModel):
    name: Optional[str] = None


class NoteFolderOut(CamelModel):
    id: int
    user_id: int
    name: str
    # derived: number of notes currently referencing this folder
    note_count: int = 0
    created_at: datetime
    updated_at: datetime


class NoteFolderResponse(CamelModel):
    success: bool = True
    folder: NoteFolderOut


class NoteFolderListResponse(CamelModel):
    success: bool = True
    folders: List[NoteFolderOut]
