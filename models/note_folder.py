from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class NoteFolder(Base):
    __tablename__ = "note_folder"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    name       = Column(String(100), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # note count is computed on read (services.note_folders), never stored
    user = relationship("User", back_populates="note_folders")

    __table_args__ = (
        Index("ix_note_folder_user_name", "user_id", "name"),
    )
