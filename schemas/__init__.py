# schemas/__init__.py

from .base import CamelModel, MessageResponse
from .user import (
    DemoLoginRequest, LoginResponse,
    Preferences, PreferencesUpdate,
    UserProfile, UserResponse,
)
from .note_folder import (
    NoteFolderCreate, NoteFolderUpdate, NoteFolderOut,
    NoteFolderResponse, NoteFolderListResponse,
)
from .note import (
    NoteCreate, NoteUpdate, NoteOut,
    NoteResponse, NoteListResponse,
)
from .question_folder import (
    QuestionFolderCreate, QuestionFolderUpdate, SubfolderCreate,
    SubfolderOut, QuestionFolderOut,
    QuestionFolderResponse, QuestionFolderListResponse,
)
from .question import (
    QuestionCreate, QuestionUpdate, QuestionOut,
    QuestionResponse, QuestionListResponse,
    DifficultyBucket, QuestionStats, QuestionStatsResponse,
)
