from .auth import router as auth_router
from .note_folders import router as note_folders_router
from .notes import router as notes_router
from .question_folders import router as question_folders_router
from .questions import router as questions_router

routers = [
    auth_router,
    note_folders_router,
    notes_router,
    question_folders_router,
    questions_router,
]
