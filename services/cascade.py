"""
Cascading folder deletion and the orphan repair sweep.

Deleting a folder is a forward-only, multi-step procedure:

1. the folder row (and, for question folders, its subfolder rows) is removed
   and committed;
2. each dependent-deletion step runs and commits on its own.

A step that fails is rolled back and logged, the remaining steps still run,
and a :class:`CascadeError` is raised once every step has been attempted.
Applied steps are never rolled back. Dependents left behind by a failed step
no longer resolve to a folder of their owner, so :func:`sweep_orphans`
removes them; it is idempotent and runs at process start.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from sqlalchemy import and_, exists, not_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from models.note import Note
from models.note_folder import NoteFolder
from models.question import Question
from models.question_folder import QuestionFolder, FOLDER, SUBFOLDER
from utils.errors import CascadeError

logger = logging.getLogger(__name__)

# (label, callable returning the number of deleted rows)
CascadeStep = Tuple[str, Callable[[], int]]


def run_cascade(db: Session, steps: Sequence[CascadeStep]) -> int:
    """Run every dependent-deletion step, committing each one separately."""
    removed = 0
    failed: List[str] = []
    for label, step in steps:
        try:
            count = step()
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Cascade step %r failed", label)
            failed.append(label)
            continue
        logger.debug("Cascade step %r removed %d rows", label, count)
        removed += count

    if failed:
        raise CascadeError(
            "Folder deleted but some dependents could not be removed",
            failed_steps=failed,
        )
    return removed


def note_folder_steps(db: Session, owner_id: int, folder_id: int) -> List[CascadeStep]:
    def delete_notes():
        return (
            db.query(Note)
            .filter(Note.user_id == owner_id, Note.folder_id == folder_id)
            .delete(synchronize_session=False)
        )

    return [("notes", delete_notes)]


def question_folder_steps(
    db: Session, owner_id: int, folder_id: int, subfolder_ids: Sequence[int]
) -> List[CascadeStep]:
    subfolder_ids = list(subfolder_ids)

    def delete_folder_questions():
        return (
            db.query(Question)
            .filter(Question.user_id == owner_id, Question.folder_id == folder_id)
            .delete(synchronize_session=False)
        )

    def delete_subfolder_questions():
        if not subfolder_ids:
            return 0
        return (
            db.query(Question)
            .filter(Question.user_id == owner_id, Question.folder_id.in_(subfolder_ids))
            .delete(synchronize_session=False)
        )

    return [
        ("questions", delete_folder_questions),
        ("subfolder questions", delete_subfolder_questions),
    ]


def _ids(query) -> List[int]:
    return [row.id for row in query.all()]


@dataclass
class RepairReport:
    notes: int = 0
    subfolders: int = 0
    questions: int = 0

    @property
    def total(self) -> int:
        return self.notes + self.subfolders + self.questions


def sweep_orphans(db: Session) -> RepairReport:
    """
    Delete dependents whose folder no longer exists for the same owner.

    Order matters: orphaned subfolders go first so questions filed under them
    are caught in the same pass.
    """
    report = RepairReport()

    note_has_folder = exists().where(
        and_(NoteFolder.id == Note.folder_id, NoteFolder.user_id == Note.user_id)
    )
    orphan_note_ids = _ids(db.query(Note.id).filter(not_(note_has_folder)))
    if orphan_note_ids:
        report.notes = (
            db.query(Note)
            .filter(Note.id.in_(orphan_note_ids))
            .delete(synchronize_session=False)
        )
        db.commit()

    parent = aliased(QuestionFolder)
    sub_has_parent = exists().where(
        and_(
            parent.id == QuestionFolder.parent_id,
            parent.user_id == QuestionFolder.user_id,
            parent.kind == FOLDER,
        )
    )
    orphan_sub_ids = _ids(
        db.query(QuestionFolder.id)
        .filter(QuestionFolder.kind == SUBFOLDER, not_(sub_has_parent))
    )
    if orphan_sub_ids:
        report.subfolders = (
            db.query(QuestionFolder)
            .filter(QuestionFolder.id.in_(orphan_sub_ids))
            .delete(synchronize_session=False)
        )
        db.commit()

    question_has_folder = exists().where(
        and_(
            QuestionFolder.id == Question.folder_id,
            QuestionFolder.user_id == Question.user_id,
        )
    )
    orphan_question_ids = _ids(db.query(Question.id).filter(not_(question_has_folder)))
    if orphan_question_ids:
        report.questions = (
            db.query(Question)
            .filter(Question.id.in_(orphan_question_ids))
            .delete(synchronize_session=False)
        )
        db.commit()

    if report.total:
        logger.warning(
            "Repair sweep removed %d notes, %d subfolders, %d questions",
            report.notes, report.subfolders, report.questions,
        )
    else:
        logger.info("Repair sweep found no orphans")
    return report
