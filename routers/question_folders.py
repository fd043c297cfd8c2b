# routers/question_folders.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from db import get_db
from schemas.base import MessageResponse
from schemas.question_folder import (
    QuestionFolderCreate, QuestionFolderUpdate, SubfolderCreate,
    QuestionFolderOut, QuestionFolderResponse, QuestionFolderListResponse,
)
from services import question_folders as service
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/question-folders", tags=["Question Folders"])


@router.get("", response_model=QuestionFolderListResponse, summary="List question folders with their subfolders")
def list_folders(db: Session = Depends(get_db), user=Depends(get_current_user)):
    folders = service.list_folders(db, user.id)
    return QuestionFolderListResponse(folders=[QuestionFolderOut.model_validate(f) for f in folders])


@router.post("", response_model=QuestionFolderResponse, status_code=status.HTTP_201_CREATED)
def create_folder(req: QuestionFolderCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    folder = service.create_folder(db, user.id, req)
    return QuestionFolderResponse(folder=QuestionFolderOut.model_validate(folder))


@router.post(
    "/{folder_id}/subfolders",
    response_model=QuestionFolderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append a subfolder; returns the parent folder"
)
def add_subfolder(
    folder_id: int,
    req: SubfolderCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    folder = service.add_subfolder(db, user.id, folder_id, req)
    return QuestionFolderResponse(folder=QuestionFolderOut.model_validate(folder))


@router.patch("/{folder_id}", response_model=QuestionFolderResponse)
def update_folder(
    folder_id: int,
    req: QuestionFolderUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    folder = service.update_folder(db, user.id, folder_id, req)
    return QuestionFolderResponse(folder=QuestionFolderOut.model_validate(folder))


@router.delete(
    "/{folder_id}",
    response_model=MessageResponse,
    summary="Delete a question folder, its subfolders and every question in them"
)
def delete_folder(folder_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    removed = service.delete_folder(db, user.id, folder_id)
    return MessageResponse(message=f"Folder and {removed} questions deleted")
