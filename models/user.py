from sqlalchemy import Column, Integer, String, Enum, DateTime, text
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class User(Base):
    __tablename__ = "user"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    google_id    = Column(String(100), nullable=True, unique=True)
    email        = Column(String(150), nullable=False, unique=True)
    name         = Column(String(100), nullable=False)
    avatar       = Column(String(512), nullable=True)

    theme        = Column(Enum("light", "dark", "auto", name="theme_enum"),
                          nullable=False, server_default=text("'auto'"), default="auto")
    default_view = Column(Enum("dashboard", "notes", "questions", name="default_view_enum"),
                          nullable=False, server_default=text("'dashboard'"), default="dashboard")
    created_at   = Column(DateTime, nullable=False, default=utcnow)
    updated_at   = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # relations
    note_folders     = relationship("NoteFolder", back_populates="user", cascade="all, delete-orphan")
    notes            = relationship("Note", back_populates="user", cascade="all, delete-orphan")
    question_folders = relationship("QuestionFolder", back_populates="user", cascade="all, delete-orphan")
    questions        = relationship("Question", back_populates="user", cascade="all, delete-orphan")
