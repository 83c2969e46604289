import logging
from typing import List, Optional

from fastapi import Response, status
from fastapi.responses import HTMLResponse, JSONResponse

from .models import Message
from .render import render_page


logger = logging.getLogger("message_board.responses")


def _debug(response: Response) -> Response:
    logger.debug(
        "response status=%s content-type=%s length=%s",
        response.status_code,
        response.headers.get("content-type"),
        response.headers.get("content-length"),
    )
    return response


def error_response(error_message: str) -> JSONResponse:
    return _debug(
        JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": error_message},
        )
    )


def post_response(timestamp: int) -> JSONResponse:
    return _debug(JSONResponse(content={"timestamp": timestamp}))


def get_response(messages: Optional[List[Message]]) -> Response:
    """
    Rendered HTML page for a list of messages (empty list included).
    `None` means the read failed and yields a bare 500.
    """
    if messages is None:
        return _debug(Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR))
    return _debug(HTMLResponse(content=render_page(messages)))
