from datetime import datetime
from typing import Dict, List, Literal, Optional

from schemas.base import CamelModel

Difficulty = Literal["easy", "medium", "hard"]


class QuestionCreate(CamelModel):
    folder_id: Optional[int] = None
    question_number: Optional[int] = None
    title: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    link: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None


class QuestionUpdate(CamelModel):
    # completion is only changed through the toggle endpoint
    folder_id: Optional[int] = None
    question_number: Optional[int] = None
    title: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    link: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None


class QuestionOut(CamelModel):
    id: int
    user_id: int
    folder_id: int
    question_number: int = 0
    title: str
    difficulty: Difficulty = "medium"
    link: str = ""
    tags: List[str] = []
    notes: str = ""
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class QuestionResponse(CamelModel):
    success: bool = True
    question: QuestionOut


class QuestionListResponse(CamelModel):
    success: bool = True
    questions: List[QuestionOut]


class DifficultyBucket(CamelModel):
    total: int = 0
    completed: int = 0


class QuestionStats(CamelModel):
    total: int
    completed: int
    completion_rate: int
    by_difficulty: Dict[str, DifficultyBucket]


class QuestionStatsResponse(CamelModel):
    success: bool = True
    stats: QuestionStats
