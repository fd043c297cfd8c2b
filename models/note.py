from sqlalchemy import Column, Integer, String, Text, Boolean, JSON, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class Note(Base):
    __tablename__ = "note"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    # no FK on purpose: dependents are removed by the cascade procedure,
    # leftovers are healed by the repair sweep
    folder_id  = Column(Integer, nullable=False, index=True)
    title      = Column(String(200), nullable=False)
    heading    = Column(String(300), nullable=False, default="")
    content    = Column(Text, nullable=False, default="")
    tags       = Column(JSON, nullable=False, default=list)
    is_pinned  = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="notes")

    __table_args__ = (
        Index("ix_note_user_folder", "user_id", "folder_id"),
        Index("ix_note_user_pinned_updated", "user_id", "is_pinned", "updated_at"),
    )
