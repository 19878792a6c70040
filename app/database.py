import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings

logger = logging.getLogger(__name__)

# Support sqlite fallback when DB_URL is not set (useful for local/dev runs).
db_url = settings.DB_URL

# If using sqlite, we need to pass connect_args to allow multi-threaded access
# from FastAPI/uvicorn worker threads.
engine_kwargs: dict = {"future": True}
if db_url.startswith("sqlite"):
	engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
	engine_kwargs["pool_pre_ping"] = True

engine = create_engine(db_url, **engine_kwargs)
SessionLocal = sessionmaker(bind=engine, autoflush=False)
Base = declarative_base()

# The daily counter upsert needs INSERT ... ON CONFLICT DO UPDATE
SUPPORTED_DIALECTS = ("postgresql", "sqlite")


def check_dialect(bind):
	name = bind.dialect.name
	if name not in SUPPORTED_DIALECTS:
		raise RuntimeError(f"Unsupported database dialect '{name}', expected one of {SUPPORTED_DIALECTS}")


check_dialect(engine)


def init_db(bind=None):
	"""Create missing tables. Only used for sqlite dev runs and tests, postgres goes through alembic."""
	# Import models so they register on Base.metadata
	from .models import daily_measurement, geo_measurement  # noqa: F401

	bind = bind or engine
	Base.metadata.create_all(bind=bind)
	logger.info(f"Database tables ready ({bind.url.get_backend_name()})")
