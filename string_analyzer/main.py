from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import sys

from string_analyzer.config import get_log_level, get_palindrome_mode, get_port, get_database_url
from string_analyzer.database import init_db
from string_analyzer.exceptions import ConfigurationError
from string_analyzer.api.routes import router

# Configure logging
logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="String Analyzer Service",
    description="Analyze, store and query string properties",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# A missing or unreachable record store aborts startup
@app.on_event("startup")
def on_startup():
    logger.info("Initializing record store...")
    try:
        mode = get_palindrome_mode()
        init_db()
    except ConfigurationError as e:
        logger.critical(f"❌ Startup aborted: {e}")
        raise
    except Exception:
        logger.critical("❌ Could not connect to the record store", exc_info=True)
        raise
    logger.info(f"Record store initialized, palindrome mode: {mode}")


app.include_router(router, tags=["strings"])


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "String Analyzer Service",
        "version": "1.0.0",
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# Body errors: a wrong type is 422, anything else (missing, empty, malformed) is 400
VALIDATION_KINDS = {
    "missing": "missing",
    "string_type": "wrong_type",
    "value_error": "empty",
}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    kinds = []
    for error in exc.errors():
        field = str(error['loc'][-1])
        errors[field] = error['msg']
        kinds.append(VALIDATION_KINDS.get(error['type'], "invalid"))

    status_code = status.HTTP_400_BAD_REQUEST
    if "wrong_type" in kinds:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    return JSONResponse(
        status_code=status_code,
        content={
            "error": "Validation failed",
            "kind": kinds[0] if kinds else "invalid",
            "details": errors
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn

    try:
        get_database_url()
    except ConfigurationError as e:
        logger.critical(f"❌ {e}")
        sys.exit(1)

    uvicorn.run("string_analyzer.main:app", host="0.0.0.0", port=get_port())
