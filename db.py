import os
import json
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from models import Base  # ensure models are imported so metadata knows all tables

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./algodeck.db")


def make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
        # tags are searched as text, so keep non-ASCII characters unescaped
        json_serializer=lambda obj: json.dumps(obj, ensure_ascii=False),
    )


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    bind = bind if bind is not None else engine
    logger.info("Creating tables on %s", bind.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=bind)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
