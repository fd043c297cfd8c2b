import logging
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.base import utcnow
from models.question_folder import QuestionFolder, FOLDER, SUBFOLDER
from schemas.question_folder import QuestionFolderCreate, QuestionFolderUpdate, SubfolderCreate
from services.cascade import question_folder_steps, run_cascade
from utils.errors import NotFoundError, require_text

logger = logging.getLogger(__name__)


def _subfolders_of(db: Session, owner_id: int, parent_ids: List[int]) -> Dict[int, List[QuestionFolder]]:
    if not parent_ids:
        return {}
    rows = (
        db.query(QuestionFolder)
        .filter(
            QuestionFolder.user_id == owner_id,
            QuestionFolder.kind == SUBFOLDER,
            QuestionFolder.parent_id.in_(parent_ids),
        )
        .order_by(QuestionFolder.position.asc(), QuestionFolder.id.asc())
        .all()
    )
    grouped: Dict[int, List[QuestionFolder]] = {}
    for sub in rows:
        grouped.setdefault(sub.parent_id, []).append(sub)
    return grouped


def _attach_subfolders(db: Session, owner_id: int, folder: QuestionFolder) -> QuestionFolder:
    subs = _subfolders_of(db, owner_id, [folder.id])
    setattr(folder, "subfolders", subs.get(folder.id, []))
    return folder


def find_folder(db: Session, owner_id: int, folder_id: int) -> QuestionFolder:
    """Top-level folders only; a subfolder id is not addressable here."""
    folder = (
        db.query(QuestionFolder)
        .filter(
            QuestionFolder.id == folder_id,
            QuestionFolder.user_id == owner_id,
            QuestionFolder.kind == FOLDER,
        )
        .first()
    )
    if not folder:
        raise NotFoundError("Folder not found")
    return folder


def resolve_folder_ref(db: Session, owner_id: int, folder_id: int) -> QuestionFolder:
    """A question may be filed under a top-level folder or one of its subfolders."""
    folder = (
        db.query(QuestionFolder)
        .filter(QuestionFolder.id == folder_id, QuestionFolder.user_id == owner_id)
        .first()
    )
    if not folder:
        raise NotFoundError("Folder not found")
    return folder


def list_folders(db: Session, owner_id: int) -> List[QuestionFolder]:
    folders = (
        db.query(QuestionFolder)
        .filter(QuestionFolder.user_id == owner_id, QuestionFolder.kind == FOLDER)
        .order_by(QuestionFolder.created_at.desc(), QuestionFolder.id.desc())
        .all()
    )
    subs = _subfolders_of(db, owner_id, [f.id for f in folders])
    for f in folders:
        setattr(f, "subfolders", subs.get(f.id, []))
    return folders


def get_folder(db: Session, owner_id: int, folder_id: int) -> QuestionFolder:
    return _attach_subfolders(db, owner_id, find_folder(db, owner_id, folder_id))


def create_folder(db: Session, owner_id: int, req: QuestionFolderCreate) -> QuestionFolder:
    name = require_text(req.name, "Folder name is required")
    folder = QuestionFolder(user_id=owner_id, name=name, kind=FOLDER)
    db.add(folder)
    db.commit()
    db.refresh(folder)
    logger.info("Created question folder %s for user %s", folder.id, owner_id)

    setattr(folder, "subfolders", [])
    return folder


def add_subfolder(db: Session, owner_id: int, folder_id: int, req: SubfolderCreate) -> QuestionFolder:
    """Append a subfolder and return the parent with all of its subfolders."""
    name = require_text(req.name, "Subfolder name is required")
    parent = find_folder(db, owner_id, folder_id)

    last = (
        db.query(func.max(QuestionFolder.position))
        .filter(QuestionFolder.user_id == owner_id, QuestionFolder.parent_id == parent.id)
        .scalar()
    )
    sub = QuestionFolder(
        user_id=owner_id,
        parent_id=parent.id,
        kind=SUBFOLDER,
        name=name,
        position=0 if last is None else last + 1,
    )
    db.add(sub)
    parent.updated_at = utcnow()
    db.commit()
    logger.info("Added subfolder %s under question folder %s", sub.id, parent.id)

    db.refresh(parent)
    return _attach_subfolders(db, owner_id, parent)


def update_folder(db: Session, owner_id: int, folder_id: int, req: QuestionFolderUpdate) -> QuestionFolder:
    folder = find_folder(db, owner_id, folder_id)
    fields = req.model_dump(exclude_unset=True)

    if "name" in fields:
        folder.name = require_text(fields["name"], "Folder name is required")
        folder.updated_at = utcnow()

    db.commit()
    db.refresh(folder)
    return _attach_subfolders(db, owner_id, folder)


def delete_folder(db: Session, owner_id: int, folder_id: int) -> int:
    """
    Delete the folder with its subfolders, then every question filed under
    the folder or any of those subfolders.

    Subfolder ids are collected before the folder goes away. Returns the
    number of questions removed.
    """
    folder = find_folder(db, owner_id, folder_id)
    subfolder_ids = [s.id for s in _subfolders_of(db, owner_id, [folder.id]).get(folder.id, [])]

    (
        db.query(QuestionFolder)
        .filter(
            QuestionFolder.user_id == owner_id,
            (QuestionFolder.id == folder.id) | (QuestionFolder.parent_id == folder.id),
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(
        "Deleted question folder %s and %d subfolders for user %s",
        folder_id, len(subfolder_ids), owner_id,
    )

    removed = run_cascade(db, question_folder_steps(db, owner_id, folder_id, subfolder_ids))
    logger.info("Removed %d questions of folder %s", removed, folder_id)
    return removed
