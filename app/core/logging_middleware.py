# app/core/logging_middleware.py
from fastapi import Request
from fastapi.responses import JSONResponse
from app.core.logger import logger
import time

def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000

async def log_requests(request: Request, call_next):
    """
    Log every request with its status and timing.
    Unhandled errors become a generic 500 inside the middleware stack;
    the traceback is logged only.
    """
    start_time = time.time()
    route = f"{request.method} {request.url.path}"

    logger.info(f"--> {route}")

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"xx  {route} - Unhandled error - Time: {_elapsed_ms(start_time):.2f}ms")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    logger.info(f"<-- {route} - Status: {response.status_code} - Time: {_elapsed_ms(start_time):.2f}ms")
    return response
