"""Custom Error Base Class"""


class DomainError(Exception):
    """Domain error base class

    Base class for all grading errors that cross a port boundary.
    Recoverable data problems never raise; they degrade coverage instead.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__

    def to_dict(self) -> dict[str, str]:
        """Serializable form used by driving adapters"""
        return {"code": self.code, "message": self.message}
