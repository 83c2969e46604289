import uvicorn

from .config import settings
from .logging_utils import logger


def main() -> None:
    logger.info("Running microservice at %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(
        "message_board.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
