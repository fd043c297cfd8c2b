from sqlalchemy import Column, Integer, String, Text, Boolean, Enum, JSON, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from .base import Base, utcnow

DIFFICULTIES = ("easy", "medium", "hard")


class Question(Base):
    __tablename__ = "question"

    id              = Column(Integer, primary_key=True, autoincrement=True)
    user_id         = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    # a top-level question folder id or one of its subfolder ids
    folder_id       = Column(Integer, nullable=False, index=True)
    question_number = Column(Integer, nullable=False, default=0)
    title           = Column(String(300), nullable=False)
    difficulty      = Column(Enum(*DIFFICULTIES, name="difficulty_enum"), nullable=False, default="medium")
    link            = Column(String(1024), nullable=False, default="")
    tags            = Column(JSON, nullable=False, default=list)
    notes           = Column(Text, nullable=False, default="")
    is_completed    = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    completed_at    = Column(DateTime, nullable=True)
    created_at      = Column(DateTime, nullable=False, default=utcnow)
    updated_at      = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="questions")

    __table_args__ = (
        Index("ix_question_user_folder", "user_id", "folder_id"),
        Index("ix_question_user_completed", "user_id", "is_completed"),
        Index("ix_question_user_difficulty", "user_id", "difficulty"),
        Index("ix_question_user_number", "user_id", "question_number"),
    )
