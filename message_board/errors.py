class MessageBoardError(Exception):
    """Base class for every failure the request pipeline maps to a response."""


class ClientInputError(MessageBoardError):
    """Bad request payload. The text is returned to the caller as-is."""


class MissingField(ClientInputError):
    def __init__(self, field: str) -> None:
        self.field = field
        # the dangling quote is part of the wire contract
        super().__init__(f"Missing field '{field}")


class InvalidNumber(ClientInputError):
    def __init__(self, field: str, raw: str, reason: str) -> None:
        self.field = field
        self.raw = raw
        self.reason = reason
        super().__init__(f"Error parsing '{field}': {reason}")


class ConnectionFailure(MessageBoardError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class PersistenceFailure(MessageBoardError):
    """Store-level failure. `detail` is for logs only."""

    public_message = "service error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)
