"""Domain exceptions raised by the service layer.

The API layer turns these into HTTP status codes (see ``core.errors``);
services never build HTTP responses themselves.
"""


class NotFoundError(LookupError):
    """Raised when a referenced id or name has no matching row."""

    def __init__(self, entity: str, key, message: str = None):
        self.entity = entity
        self.key = key
        self.message = message or f"{entity} not found with id: {key}"
        super().__init__(self.message)


class ConflictError(ValueError):
    """Raised when a write would break a uniqueness rule."""

    def __init__(self, entity: str, message: str):
        self.entity = entity
        self.message = message
        super().__init__(self.message)
