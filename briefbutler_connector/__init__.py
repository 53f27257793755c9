"""BriefButler connector - submits documents to the BriefButler spool service API."""

from briefbutler_connector.models.spool import (
    ApiResponse,
    LetterStatus,
    LetterStatusDetails,
    LetterStatusEvent,
    SpoolSubmissionData,
)
from briefbutler_connector.services.briefbutler_service import (
    BriefButlerAPIError,
    BriefButlerService,
    get_briefbutler_service,
)
from briefbutler_connector.utils.logger import logger

__version__ = "1.0.0"

__all__ = [
    "ApiResponse",
    "BriefButlerAPIError",
    "BriefButlerService",
    "LetterStatus",
    "LetterStatusDetails",
    "LetterStatusEvent",
    "SpoolSubmissionData",
    "get_briefbutler_service",
    "logger",
]
