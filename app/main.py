from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging
from .config import settings
from .database import db_url, init_db
from .routers import geo, subnets
from .middleware import logging_middleware


# Setup basic logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(logging_middleware)

# geo-filecoin has its own measurement route, it must be registered before /{subnet}/measurement
app.include_router(geo.router, prefix="/geo-filecoin", tags=["Geo Filecoin"])
app.include_router(subnets.router, tags=["Subnets"])


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # Details stay in the server log, callers only get a generic message
    logger.exception(f"❌ Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "error": "Database error"})


@app.get("/")
def root():
    return {"message": f"{settings.PROJECT_NAME} running"}


@app.on_event("startup")
def create_dev_tables():
    # Postgres schema is owned by alembic; sqlite dev databases are created on the fly
    if db_url.startswith("sqlite"):
        init_db()
