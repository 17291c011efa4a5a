"""Invalid Bundle File Error"""

from pathlib import Path

from libs.shared.src.errors.domain_error import DomainError


class InvalidBundleFileError(DomainError):
    """Raised when an asset bundle file is missing or malformed"""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(
            f"Invalid bundle file {path}: {reason}", code="INVALID_BUNDLE_FILE"
        )
        self.path = path
        self.reason = reason
