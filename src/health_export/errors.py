"""Export failure reasons and the exception carrying them."""

from enum import Enum


class ExportFailureReason(str, Enum):
    """Why exporting a day failed."""

    NO_VAULT_SELECTED = "no_vault_selected"
    ACCESS_DENIED = "access_denied"
    NO_HEALTH_DATA = "no_health_data"
    HEALTH_STORE_ERROR = "health_store_error"
    FILE_WRITE_ERROR = "file_write_error"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _REASON_LABELS[self]


_REASON_LABELS = {
    ExportFailureReason.NO_VAULT_SELECTED: "No vault selected",
    ExportFailureReason.ACCESS_DENIED: "Access denied to vault folder",
    ExportFailureReason.NO_HEALTH_DATA: "No health data available",
    ExportFailureReason.HEALTH_STORE_ERROR: "Health store error",
    ExportFailureReason.FILE_WRITE_ERROR: "Failed to write file",
    ExportFailureReason.UNKNOWN: "Unknown error",
}


class ExportError(Exception):
    """Raised by export collaborators with a reportable failure reason."""

    def __init__(self, reason: ExportFailureReason, detail: str | None = None) -> None:
        message = reason.label if detail is None else f"{reason.label}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail
