"""Spool data models."""

from briefbutler_connector.models.spool import (
    ApiResponse,
    LetterStatus,
    LetterStatusDetails,
    LetterStatusEvent,
    SpoolSubmissionData,
)

__all__ = [
    "ApiResponse",
    "SpoolSubmissionData",
    "LetterStatus",
    "LetterStatusDetails",
    "LetterStatusEvent",
]
