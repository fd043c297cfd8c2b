# routers/questions.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from db import get_db
from schemas.base import MessageResponse
from schemas.question import (
    QuestionCreate, QuestionUpdate, QuestionOut,
    QuestionResponse, QuestionListResponse,
    QuestionStats, QuestionStatsResponse,
)
from services import questions as service
from services.stats import question_stats
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/questions", tags=["Questions"])


@router.get("", response_model=QuestionListResponse)
def list_questions(
    folder_id: Optional[int] = Query(default=None, alias="folderId"),
    difficulty: Optional[str] = Query(default=None, description="easy | medium | hard | all"),
    completed: Optional[bool] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Terms matched against title, notes and tags"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    questions = service.list_questions(
        db, user.id,
        folder_id=folder_id,
        difficulty=difficulty,
        completed=completed,
        search=search,
    )
    return QuestionListResponse(questions=[QuestionOut.model_validate(q) for q in questions])


@router.get("/stats", response_model=QuestionStatsResponse, summary="Completion statistics")
def get_stats(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return QuestionStatsResponse(stats=QuestionStats.model_validate(question_stats(db, user.id)))


@router.get("/{question_id}", response_model=QuestionResponse)
def get_question(question_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return QuestionResponse(question=QuestionOut.model_validate(service.get_question(db, user.id, question_id)))


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(req: QuestionCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return QuestionResponse(question=QuestionOut.model_validate(service.create_question(db, user.id, req)))


@router.patch("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: int,
    req: QuestionUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    question = service.update_question(db, user.id, question_id, req)
    return QuestionResponse(question=QuestionOut.model_validate(question))


@router.patch("/{question_id}/complete", response_model=QuestionResponse, summary="Toggle completion")
def toggle_complete(question_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return QuestionResponse(question=QuestionOut.model_validate(service.toggle_complete(db, user.id, question_id)))


@router.delete("/{question_id}", response_model=MessageResponse)
def delete_question(question_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    service.delete_question(db, user.id, question_id)
    return MessageResponse(message="Question deleted")
