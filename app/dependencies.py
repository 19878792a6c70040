from .database import SessionLocal


def get_db():
    """Yield one session per request; always closed, which rolls back anything left uncommitted."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
