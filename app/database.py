from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from app.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")


def configure_sqlite(engine: Engine) -> Engine:
    """
    Give a SQLite engine the guarantees the services rely on.

    - Foreign keys are enforced (SQLite leaves them off per connection)
    - Every transaction starts with BEGIN IMMEDIATE, taking the write lock
      up front. pysqlite otherwise defers BEGIN until the first write, so a
      count followed by an insert would not be serialized. This is the
      SQLite counterpart of SELECT ... FOR UPDATE on the tenant row.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Hand transaction control to SQLAlchemy instead of pysqlite
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection):
        connection.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


# Pool sizing only applies to server databases; SQLite uses its own pools
_engine_kwargs = (
    {"connect_args": {"check_same_thread": False}}
    if _is_sqlite
    else {"pool_size": settings.DB_POOL_SIZE, "max_overflow": settings.DB_MAX_OVERFLOW}
)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    **_engine_kwargs,
)
if _is_sqlite:
    configure_sqlite(engine)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """
    FastAPI dependency for database sessions.

    Yields a database session and ensures it's closed after use.
    Each request gets its own session, so concurrent requests never
    share transactional state.

    Usage:
        @app.get("/notes")
        def list_notes(db: Session = Depends(get_db)):
            return db.query(Note).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
