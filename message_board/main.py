from fastapi import (
    FastAPI,
    Depends,
    Request,
    Response,
    status,
)
from fastapi.exception_handlers import http_exception_handler
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from sqlalchemy.orm import Session

from .errors import ClientInputError, ConnectionFailure, PersistenceFailure
from .forms import TimeRange, decode_form, parse_time_range
from .storage import init_db, get_db, insert_message, list_messages
from .logging_utils import logging_middleware
from .responses import error_response, get_response, post_response


# only GET / and POST / are served; no docs or schema routes
app = FastAPI(
    title="Message Board",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# Attach logging middleware
app.middleware("http")(logging_middleware)


# ---------- Startup ----------


@app.on_event("startup")
def on_startup() -> None:
    # initialize DB schema
    init_db()


# ---------- Exception handlers ----------


def _mark(request: Request, **fields) -> None:
    request.state.log_extra = getattr(request.state, "log_extra", {})
    request.state.log_extra.update(fields)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # anything other than GET / and POST / is a plain 404
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return await http_exception_handler(request, exc)


@app.exception_handler(ConnectionFailure)
async def connection_failure_handler(request: Request, exc: ConnectionFailure):
    _mark(request, result="connection_failure")
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(ClientInputError)
async def client_input_handler(request: Request, exc: ClientInputError):
    # kept at 500 rather than 400 for compatibility with existing clients
    _mark(request, result="invalid_input")
    return error_response(str(exc))


# ---------- Endpoints ----------


@app.post("/")
async def submit_message(
    request: Request,
    db: Session = Depends(get_db),
):
    raw_body = await request.body()
    new_message = decode_form(raw_body)

    try:
        timestamp = await run_in_threadpool(insert_message, db, new_message)
    except PersistenceFailure as e:
        _mark(request, result="persistence_failure")
        return error_response(e.public_message)

    _mark(request, result="created", timestamp=timestamp)
    return post_response(timestamp)


@app.get("/")
def list_page(
    request: Request,
    db: Session = Depends(get_db),
):
    query = request.url.query
    time_range = parse_time_range(query) if query else TimeRange()

    try:
        messages = list_messages(db, time_range)
    except PersistenceFailure:
        _mark(request, result="persistence_failure")
        return get_response(None)

    _mark(request, result="listed", count=len(messages))
    return get_response(messages)
