"""
DomainError - Common base carrying a stable error ``kind``.
"""


class DomainError(Exception):
    """Base class for every error reported to callers as a structured failure."""

    kind: str = "DomainError"
    default_message: str = "Operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}
