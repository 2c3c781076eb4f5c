from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from fastapi import Request

from learn_note.utils.errors import Conflict, ReferenceInvalid

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str):
    """Build an engine for `url`.

    SQLite needs foreign keys switched on per connection, otherwise the
    cascade and set-null rules on topics/resources are silently ignored.
    """
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, pool_pre_ping=True)


def create_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine):
    # models must be imported so their tables are registered on Base.metadata
    from learn_note import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_db(engine):
    from learn_note import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.sessionlocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, conflict_message: str = "Record with this title already exists"):
    """Commit, turning constraint violations that slipped past the pre-checks
    into the same errors the pre-checks would have raised."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        message = str(e.orig).lower()
        if "unique" in message or "duplicate" in message:
            raise Conflict(conflict_message) from e
        if "foreign key" in message:
            raise ReferenceInvalid("Parent id is invalid") from e
        raise
