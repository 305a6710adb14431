from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from jobboard.utils.config import Config

DATABASE_URL = Config.DATABASE_URL


def enable_sqlite_foreign_keys(engine):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
