from sqlalchemy import Column, Integer, String, Enum, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base, utcnow

FOLDER = "folder"
SUBFOLDER = "subfolder"


class QuestionFolder(Base):
    """
    Top-level question folders and their subfolders share this table.

    A subfolder row has ``kind == "subfolder"`` and ``parent_id`` pointing at
    a top-level row of the same owner. Questions reference either kind by id.
    """
    __tablename__ = "question_folder"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id  = Column(Integer, nullable=True, index=True)
    kind       = Column(Enum(FOLDER, SUBFOLDER, name="question_folder_kind"), nullable=False, default=FOLDER)
    name       = Column(String(100), nullable=False)
    position   = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="question_folders")

    __table_args__ = (
        Index("ix_question_folder_user_kind", "user_id", "kind"),
    )
