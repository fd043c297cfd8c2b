# routers/note_folders.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from db import get_db
from schemas.base import MessageResponse
from schemas.note_folder import (
    NoteFolderCreate, NoteFolderUpdate, NoteFolderOut,
    NoteFolderResponse, NoteFolderListResponse,
)
from services import note_folders as service
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/note-folders", tags=["Note Folders"])


@router.get("", response_model=NoteFolderListResponse, summary="List note folders with note counts")
def list_folders(db: Session = Depends(get_db), user=Depends(get_current_user)):
    folders = service.list_folders(db, user.id)
    return NoteFolderListResponse(folders=[NoteFolderOut.model_validate(f) for f in folders])


@router.post(
    "",
    response_model=NoteFolderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note folder"
)
def create_folder(req: NoteFolderCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    folder = service.create_folder(db, user.id, req)
    return NoteFolderResponse(folder=NoteFolderOut.model_validate(folder))


@router.patch("/{folder_id}", response_model=NoteFolderResponse, summary="Rename a note folder")
def update_folder(
    folder_id: int,
    req: NoteFolderUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    folder = service.update_folder(db, user.id, folder_id, req)
    return NoteFolderResponse(folder=NoteFolderOut.model_validate(folder))


@router.delete(
    "/{folder_id}",
    response_model=MessageResponse,
    summary="Delete a note folder and every note in it"
)
def delete_folder(folder_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    removed = service.delete_folder(db, user.id, folder_id)
    return MessageResponse(message=f"Folder and {removed} notes deleted")
