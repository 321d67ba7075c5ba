"""Q&A Forum FastAPI Application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from api.config import get_settings
from api.routers import questions, tags
from api.services.database import StoreFailure, get_db, close_db
from config.logging_config import setup_logging, get_logger
from src.database import initialize_database

settings = get_settings()
logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the schema exists before serving."""
    setup_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.version}")
    initialize_database(get_db().connect())
    yield
    close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="API for the anonymous student Q&A forum",
    lifespan=lifespan,
)


class CacheHeaderMiddleware(BaseHTTPMiddleware):
    """Middleware to add Cache-Control headers to responses."""

    # Endpoints that can be cached; question results change as students post
    CACHEABLE_PATHS = {
        "/api/tags": 300,  # 5 minutes
    }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # Only cache GET requests
        if request.method != "GET":
            return response

        path = request.url.path
        for cacheable_path, max_age in self.CACHEABLE_PATHS.items():
            if path.startswith(cacheable_path):
                response.headers["Cache-Control"] = f"public, max-age={max_age}"
                break
        else:
            response.headers["Cache-Control"] = "no-cache"

        return response


app.add_middleware(CacheHeaderMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    """Report store failures as an opaque server error."""
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


app.include_router(questions.router, prefix="/api/questions", tags=["Questions"])
app.include_router(tags.router, prefix="/api/tags", tags=["Tags"])


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "endpoints": {
            "questions": "/api/questions",
            "tags": "/api/tags",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        count = get_db().fetch_one("SELECT COUNT(*) FROM questions")[0]
        return {
            "status": "healthy",
            "database": "connected",
            "total_questions": count,
        }
    except StoreFailure as e:
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
        }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
