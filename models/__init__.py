from .base import Base
from .user import User
from .note_folder import NoteFolder
from .note import Note
from .question_folder import QuestionFolder
from .question import Question

__all__ = ["Base", "User", "NoteFolder", "Note", "QuestionFolder", "Question"]
