from datetime import datetime
from typing import List, Optional

from schemas.base import CamelModel


class QuestionFolderCreate(CamelModel):
    name: Optional[str] = None


class QuestionFolderUpdate(CamelModel):
    name: Optional[str] = None


class SubfolderCreate(CamelModel):
    name: Optional[str] = None


class SubfolderOut(CamelModel):
    id: int
    name: str


class QuestionFolderOut(CamelModel):
    id: int
    user_id: int
    name: str
    subfolders: List[SubfolderOut] = []
    created_at: datetime
    updated_at: datetime


class QuestionFolderResponse(CamelModel):
    success: bool = True
    folder: QuestionFolderOut


class QuestionFolderListResponse(CamelModel):
    success: bool = True
    folders: List[QuestionFolderOut]
