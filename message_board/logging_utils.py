import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response

from .config import settings


logger = logging.getLogger("message_board")
logger.setLevel(settings.LOG_LEVEL)
handler = logging.StreamHandler()
handler.setLevel(settings.LOG_LEVEL)
logger.addHandler(handler)


def iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _access_record(request: Request, status: int, start: float, level: str) -> dict:
    return {
        "ts": iso_now(),
        "level": level,
        "request_id": request.state.request_id,
        "method": request.method,
        "path": request.url.path,
        "status": status,
        "latency_ms": round((time.perf_counter() - start) * 1000.0, 2),
    }


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """One JSON access line per request, extended with handler `log_extra`."""
    start = time.perf_counter()
    request.state.request_id = str(uuid.uuid4())
    request.state.log_extra = {}

    logger.debug("%s %s query=%r", request.method, request.url.path, request.url.query)

    try:
        response = await call_next(request)
    except Exception:
        logger.error(json.dumps(_access_record(request, 500, start, "error")))
        raise

    record = _access_record(request, response.status_code, start, "info")
    if isinstance(getattr(request.state, "log_extra", None), dict):
        record.update(request.state.log_extra)

    logger.info(json.dumps(record))
    return response
