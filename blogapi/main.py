import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogapi import config
from blogapi.blog.routes import router as blog_router
from blogapi.database.connection import ensure_indexes, get_db
from blogapi.utils.errors import BlogError
from blogapi.utils.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_FORMAT)
    try:
        ensure_indexes(get_db())
    except PyMongoError as exc:
        # Search needs the text index; everything else still works without it
        logger.warning("Could not ensure blog indexes: %s", exc)
    logger.info("Blogs API started")
    yield
    logger.info("Blogs API shutting down")


app = FastAPI(title="Blogs API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    if exc.http_status >= 500:
        logger.error("%s on %s: %s", exc.message, request.url.path, exc.error,
                     extra={"path": request.url.path})
    else:
        logger.info("%s on %s", exc.message, request.url.path,
                    extra={"path": request.url.path})
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid request data", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


app.include_router(blog_router, prefix="/api/blogs", tags=["blogs"])


@app.get("/")
def root():
    return {"success": True, "message": "Blogs API running"}
