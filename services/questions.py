import logging
from typing import List, Optional

from sqlalchemy import DateTime, case, literal, not_, null, update
from sqlalchemy.orm import Session

from models.base import utcnow
from models.question import Question, DIFFICULTIES
from schemas.question import QuestionCreate, QuestionUpdate
from services.question_folders import resolve_folder_ref
from utils.errors import NotFoundError, ValidationError, require_text
from utils.search import build_search_filter, normalize_tags

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (Question.title, Question.notes, Question.tags)


def _owned(db: Session, owner_id: int):
    return db.query(Question).filter(Question.user_id == owner_id)


def list_questions(
    db: Session,
    owner_id: int,
    folder_id: Optional[int] = None,
    difficulty: Optional[str] = None,
    completed: Optional[bool] = None,
    search: Optional[str] = None,
) -> List[Question]:
    """Ascending question number; ``difficulty="all"`` means no filter."""
    query = _owned(db, owner_id)
    if folder_id is not None:
        query = query.filter(Question.folder_id == folder_id)
    if difficulty and difficulty != "all":
        if difficulty not in DIFFICULTIES:
            raise ValidationError(f"Unknown difficulty: {difficulty}")
        query = query.filter(Question.difficulty == difficulty)
    if completed is not None:
        query = query.filter(Question.is_completed.is_(completed))

    matcher = build_search_filter(search, SEARCH_FIELDS)
    if matcher is not None:
        query = query.filter(matcher)

    return query.order_by(Question.question_number.asc(), Question.id.asc()).all()


def get_question(db: Session, owner_id: int, question_id: int) -> Question:
    question = _owned(db, owner_id).filter(Question.id == question_id).first()
    if not question:
        raise NotFoundError("Question not found")
    return question


def create_question(db: Session, owner_id: int, req: QuestionCreate) -> Question:
    if req.folder_id is None:
        raise ValidationError("Folder ID is required")
    title = require_text(req.title, "Title is required")
    resolve_folder_ref(db, owner_id, req.folder_id)

    question = Question(
        user_id=owner_id,
        folder_id=req.folder_id,
        question_number=req.question_number or 0,
        title=title,
        difficulty=req.difficulty or "medium",
        link=(req.link or "").strip(),
        tags=normalize_tags(req.tags),
        notes=req.notes or "",
        is_completed=False,
        completed_at=None,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Created question %s in folder %s for user %s", question.id, question.folder_id, owner_id)
    return question


def update_question(db: Session, owner_id: int, question_id: int, req: QuestionUpdate) -> Question:
    question = get_question(db, owner_id, question_id)
    fields = req.model_dump(exclude_unset=True)

    changes = {}
    if "title" in fields:
        changes["title"] = require_text(fields["title"], "Title is required")
    if "question_number" in fields:
        changes["question_number"] = fields["question_number"] or 0
    if fields.get("difficulty") is not None:
        changes["difficulty"] = fields["difficulty"]
    if "link" in fields:
        changes["link"] = (fields["link"] or "").strip()
    if "tags" in fields:
        changes["tags"] = normalize_tags(fields["tags"])
    if "notes" in fields:
        changes["notes"] = fields["notes"] or ""
    if "folder_id" in fields:
        if fields["folder_id"] is None:
            raise ValidationError("Folder ID is required")
        resolve_folder_ref(db, owner_id, fields["folder_id"])
        changes["folder_id"] = fields["folder_id"]

    for key, value in changes.items():
        setattr(question, key, value)
    question.updated_at = utcnow()
    db.commit()
    db.refresh(question)
    return question


def toggle_complete_statement(owner_id: int, question_id: int, now):
    """
    UPDATE that flips ``is_completed`` and sets or clears ``completed_at``.

    ``completed_at`` is assigned first: MySQL evaluates SET assignments left
    to right, so the CASE must read the flag before it is flipped.
    """
    return (
        update(Question)
        .where(Question.user_id == owner_id, Question.id == question_id)
        .ordered_values(
            (
                Question.completed_at,
                case(
                    (Question.is_completed.is_(True), null()),
                    else_=literal(now, DateTime),
                ),
            ),
            (Question.is_completed, not_(Question.is_completed)),
            (Question.updated_at, now),
        )
    )


def toggle_complete(db: Session, owner_id: int, question_id: int) -> Question:
    result = db.execute(
        toggle_complete_statement(owner_id, question_id, utcnow()),
        execution_options={"synchronize_session": False},
    )
    matched = result.rowcount
    db.commit()
    if not matched:
        raise NotFoundError("Question not found")
    return get_question(db, owner_id, question_id)


def delete_question(db: Session, owner_id: int, question_id: int) -> None:
    question = get_question(db, owner_id, question_id)
    db.delete(question)
    db.commit()
    logger.info("Deleted question %s for user %s", question_id, owner_id)
