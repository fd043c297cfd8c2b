# routers/notes.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from db import get_db
from schemas.base import MessageResponse
from schemas.note import NoteCreate, NoteUpdate, NoteOut, NoteResponse, NoteListResponse
from services import notes as service
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get("", response_model=NoteListResponse)
def list_notes(
    folder_id: Optional[int] = Query(default=None, alias="folderId"),
    search: Optional[str] = Query(default=None, description="Terms matched against title, heading, content and tags"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    notes = service.list_notes(db, user.id, folder_id=folder_id, search=search)
    return NoteListResponse(notes=[NoteOut.model_validate(n) for n in notes])


@router.get("/{note_id}", response_model=NoteResponse)
def get_note(note_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return NoteResponse(note=NoteOut.model_validate(service.get_note(db, user.id, note_id)))


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(req: NoteCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return NoteResponse(note=NoteOut.model_validate(service.create_note(db, user.id, req)))


@router.patch("/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: int,
    req: NoteUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return NoteResponse(note=NoteOut.model_validate(service.update_note(db, user.id, note_id, req)))


@router.patch("/{note_id}/pin", response_model=NoteResponse)
def toggle_pin(note_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return NoteResponse(note=NoteOut.model_validate(service.toggle_pin(db, user.id, note_id)))


@router.delete("/{note_id}", response_model=MessageResponse)
def delete_note(note_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    service.delete_note(db, user.id, note_id)
    return MessageResponse(message="Note deleted")
