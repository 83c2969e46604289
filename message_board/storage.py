import logging
from typing import Iterable, List

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .errors import ConnectionFailure, PersistenceFailure
from .forms import NewMessage, TimeRange
from .models import Base, Message


logger = logging.getLogger("message_board.storage")


def _engine_connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_engine_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)


def get_db() -> Iterable[Session]:
    """
    Request-scoped session. The connection is checked out up front so that
    an unreachable database fails here, before the request body is touched.
    """
    db = SessionLocal()
    try:
        try:
            db.connection()
        except SQLAlchemyError as e:
            logger.error("Error connecting to database: %s", e)
            raise ConnectionFailure(str(e)) from e
        yield db
    finally:
        db.close()


def insert_message(db: Session, new_message: NewMessage) -> int:
    """Store the message and return the timestamp the database assigned to it."""
    msg = Message(username=new_message.username, message=new_message.message)
    db.add(msg)
    try:
        db.commit()
        db.refresh(msg)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error writing to database: %s", e)
        raise PersistenceFailure(str(e)) from e
    return msg.timestamp


def list_messages(db: Session, time_range: TimeRange) -> List[Message]:
    query = db.query(Message)

    if time_range.before is not None:
        query = query.filter(Message.timestamp < time_range.before)

    if time_range.after is not None:
        query = query.filter(Message.timestamp > time_range.after)

    try:
        return query.order_by(Message.id.asc()).all()
    except SQLAlchemyError as e:
        logger.error("Error querying DB: %s", e)
        raise PersistenceFailure(str(e)) from e
