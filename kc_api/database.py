import sqlalchemy as sa
from sqlalchemy import func
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from kc_api.config import get_settings

DATABASE_URL = get_settings().database_url

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

db = sa.create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=db, autocommit=False, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    database = SessionLocal()
    try:
        yield database
    finally:
        database.close()


def next_sequential_id(database: Session, model) -> str:
    """
    Returns ``count + 1`` for the table behind ``model``.

    The count and the later insert are not atomic. After a row is deleted the
    next id can equal an existing one; the insert then fails with the store's
    primary key violation and that failure is left to reach the caller.
    """
    count = database.query(func.count()).select_from(model).scalar()
    return str(count + 1)
