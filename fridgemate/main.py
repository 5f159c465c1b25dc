import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from fridgemate import __version__
from fridgemate.api import ingredients, recipes, stats
from fridgemate.config import settings
from fridgemate.database import init_db
from fridgemate.services.ai_service import ClaudeService
from fridgemate.services.file_service import FileService
from fridgemate.services.image_service import ImageSynthesisService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

UPLOADS_URL = "/uploads/recipes"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables and the external-service clients once per process
    init_db()
    app.state.recipe_ai = ClaudeService()
    app.state.image_service = ImageSynthesisService()
    app.state.file_service = FileService(
        upload_dir=settings.upload_dir, url_prefix=UPLOADS_URL
    )
    if not app.state.recipe_ai.is_configured:
        logger.warning("ANTHROPIC_API_KEY is not set; recipe suggestions are disabled")
    yield


app = FastAPI(title="fridgemate", version=__version__, lifespan=lifespan)

# Generated recipe images
app.mount(
    UPLOADS_URL,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing input fields are a client error (400)."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request data",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# Include routers
app.include_router(ingredients.router)
app.include_router(recipes.router)
app.include_router(stats.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
