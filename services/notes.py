import logging
from typing import List, Optional

from sqlalchemy import not_
from sqlalchemy.orm import Session

from models.base import utcnow
from models.note import Note
from schemas.note import NoteCreate, NoteUpdate
from services.note_folders import find_folder
from utils.errors import NotFoundError, ValidationError, require_text
from utils.search import build_search_filter, normalize_tags

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (Note.title, Note.heading, Note.content, Note.tags)


def _owned(db: Session, owner_id: int):
    return db.query(Note).filter(Note.user_id == owner_id)


def list_notes(
    db: Session,
    owner_id: int,
    folder_id: Optional[int] = None,
    search: Optional[str] = None,
) -> List[Note]:
    """Pinned notes first, then most recently updated."""
    query = _owned(db, owner_id)
    if folder_id is not None:
        query = query.filter(Note.folder_id == folder_id)

    matcher = build_search_filter(search, SEARCH_FIELDS)
    if matcher is not None:
        query = query.filter(matcher)

    return query.order_by(Note.is_pinned.desc(), Note.updated_at.desc(), Note.id.desc()).all()


def get_note(db: Session, owner_id: int, note_id: int) -> Note:
    note = _owned(db, owner_id).filter(Note.id == note_id).first()
    if not note:
        raise NotFoundError("Note not found")
    return note


def create_note(db: Session, owner_id: int, req: NoteCreate) -> Note:
    if req.folder_id is None:
        raise ValidationError("Folder ID is required")
    title = require_text(req.title, "Title is required")
    # the folder must belong to the same owner
    find_folder(db, owner_id, req.folder_id)

    note = Note(
        user_id=owner_id,
        folder_id=req.folder_id,
        title=title,
        heading=(req.heading or "").strip(),
        content=req.content or "",
        tags=normalize_tags(req.tags),
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    logger.info("Created note %s in folder %s for user %s", note.id, note.folder_id, owner_id)
    return note


def update_note(db: Session, owner_id: int, note_id: int, req: NoteUpdate) -> Note:
    note = get_note(db, owner_id, note_id)
    fields = req.model_dump(exclude_unset=True)

    # validate everything before touching the row
    changes = {}
    if "title" in fields:
        changes["title"] = require_text(fields["title"], "Title is required")
    if "heading" in fields:
        changes["heading"] = (fields["heading"] or "").strip()
    if "content" in fields:
        changes["content"] = fields["content"] or ""
    if "tags" in fields:
        changes["tags"] = normalize_tags(fields["tags"])
    if fields.get("is_pinned") is not None:
        changes["is_pinned"] = fields["is_pinned"]
    if "folder_id" in fields:
        if fields["folder_id"] is None:
            raise ValidationError("Folder ID is required")
        find_folder(db, owner_id, fields["folder_id"])
        changes["folder_id"] = fields["folder_id"]

    for key, value in changes.items():
        setattr(note, key, value)
    note.updated_at = utcnow()
    db.commit()
    db.refresh(note)
    return note


def toggle_pin(db: Session, owner_id: int, note_id: int) -> Note:
    # single UPDATE: the flip reads and writes the row in one statement
    matched = (
        _owned(db, owner_id)
        .filter(Note.id == note_id)
        .update(
            {Note.is_pinned: not_(Note.is_pinned), Note.updated_at: utcnow()},
            synchronize_session=False,
        )
    )
    db.commit()
    if not matched:
        raise NotFoundError("Note not found")
    return get_note(db, owner_id, note_id)


def delete_note(db: Session, owner_id: int, note_id: int) -> None:
    note = get_note(db, owner_id, note_id)
    db.delete(note)
    db.commit()
    logger.info("Deleted note %s for user %s", note_id, owner_id)
