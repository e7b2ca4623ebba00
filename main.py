# main.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.api.routes import events, host
from app.core.logging_middleware import log_requests
from app.core.logger import logger
from app.models import profile, event, memory  # noqa: F401  (register mappers)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug
)

# ===== request logging (first) =====
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)
# ===================================

# request size limit
MAX_REQUEST_SIZE = settings.max_request_size_mb * 1024 * 1024

@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    """Reject oversized request bodies"""
    if request.method in ["POST", "PUT", "PATCH"]:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request too large. Max: {settings.max_request_size_mb}MB"}
            )
    return await call_next(request)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a 400"""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())}
    )

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# routers
app.include_router(events.router)
app.include_router(host.router)

@app.on_event("startup")
async def startup_event():
    logger.info("Elite Memoriz API started")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Elite Memoriz API stopped")

@app.get("/health")
def health_check():
    """Liveness probe"""
    return {
        "status": "ok",
        "service": settings.app_name
    }
