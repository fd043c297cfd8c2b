import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.note import Note
from models.note_folder import NoteFolder
from models.base import utcnow
from schemas.note_folder import NoteFolderCreate, NoteFolderUpdate
from services.cascade import note_folder_steps, run_cascade
from utils.errors import NotFoundError, require_text

logger = logging.getLogger(__name__)


def _count_notes(db: Session, owner_id: int, folder_id: int) -> int:
    return (
        db.query(func.count(Note.id))
        .filter(Note.user_id == owner_id, Note.folder_id == folder_id)
        .scalar()
    ) or 0


def find_folder(db: Session, owner_id: int, folder_id: int) -> NoteFolder:
    folder = (
        db.query(NoteFolder)
        .filter(NoteFolder.id == folder_id, NoteFolder.user_id == owner_id)
        .first()
    )
    if not folder:
        raise NotFoundError("Folder not found")
    return folder


def list_folders(db: Session, owner_id: int) -> List[NoteFolder]:
    """Newest first, each with ``note_count`` computed from current notes."""
    folders = (
        db.query(NoteFolder)
        .filter(NoteFolder.user_id == owner_id)
        .order_by(NoteFolder.created_at.desc(), NoteFolder.id.desc())
        .all()
    )
    counts = dict(
        db.query(Note.folder_id, func.count(Note.id))
        .filter(Note.user_id == owner_id)
        .group_by(Note.folder_id)
        .all()
    )
    for f in folders:
        setattr(f, "note_count", counts.get(f.id, 0))
    return folders


def get_folder(db: Session, owner_id: int, folder_id: int) -> NoteFolder:
    folder = find_folder(db, owner_id, folder_id)
    setattr(folder, "note_count", _count_notes(db, owner_id, folder.id))
    return folder


def create_folder(db: Session, owner_id: int, req: NoteFolderCreate) -> NoteFolder:
    name = require_text(req.name, "Folder name is required")
    folder = NoteFolder(user_id=owner_id, name=name)
    db.add(folder)
    db.commit()
    db.refresh(folder)
    logger.info("Created note folder %s for user %s", folder.id, owner_id)

    setattr(folder, "note_count", 0)
    return folder


def update_folder(db: Session, owner_id: int, folder_id: int, req: NoteFolderUpdate) -> NoteFolder:
    folder = find_folder(db, owner_id, folder_id)
    fields = req.model_dump(exclude_unset=True)

    if "name" in fields:
        folder.name = require_text(fields["name"], "Folder name is required")
        folder.updated_at = utcnow()

    db.commit()
    db.refresh(folder)
    setattr(folder, "note_count", _count_notes(db, owner_id, folder.id))
    return folder


def delete_folder(db: Session, owner_id: int, folder_id: int) -> int:
    """
    Delete the folder, then every note filed in it.

    Returns the number of notes removed. Raises CascadeError if the folder is
    gone but its notes could not be removed.
    """
    folder = find_folder(db, owner_id, folder_id)
    db.delete(folder)
    db.commit()
    logger.info("Deleted note folder %s for user %s", folder_id, owner_id)

    removed = run_cascade(db, note_folder_steps(db, owner_id, folder_id))
    logger.info("Removed %d notes of folder %s", removed, folder_id)
    return removed
