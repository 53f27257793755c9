"""Spool submission, response envelope and delivery status models."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SpoolSubmissionData(BaseModel):
    """Data for a dual-delivery (print and deliver) spool submission."""

    pdf_path: str = Field(..., description="Path to the PDF file to be sent")

    recipient_name: str
    recipient_address: str = Field(..., description="Street address of the recipient")
    recipient_city: str
    recipient_zip: str
    recipient_country: str
    recipient_state: Optional[str] = None
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None

    sender_name: str
    sender_address: str = Field(..., description="Street address of the sender")
    sender_city: str
    sender_zip: str
    sender_country: str
    sender_state: Optional[str] = None

    reference: Optional[str] = Field(default=None, description="Reference / cost centre")
    is_color_print: bool = False
    is_duplex_print: bool = True
    priority: Optional[str] = Field(default=None, description="'normal', 'priority', ...")
    delivery_profile: Optional[str] = None


class ApiResponse(BaseModel):
    """Uniform result envelope returned by every connector operation."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: str

    @model_validator(mode="after")
    def check_error_on_failure(self) -> "ApiResponse":
        """A failed result must say what went wrong."""
        if not self.success and not self.error:
            raise ValueError("Failed responses must carry an error")
        return self

    @classmethod
    def ok(cls, data: Any, message: str) -> "ApiResponse":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str, message: str) -> "ApiResponse":
        return cls(success=False, error=error, message=message)

    def to_dict(self) -> dict:
        """Convert to a plain dict without absent keys."""
        return self.model_dump(exclude_none=True)


class LetterStatusEvent(BaseModel):
    """A single tracking event of a letter."""

    date: str
    description: str
    location: Optional[str] = None


class LetterStatusDetails(BaseModel):
    """Optional delivery detail attached to a status record."""

    model_config = ConfigDict(populate_by_name=True)

    delivery_date: Optional[str] = Field(default=None, alias="deliveryDate")
    estimated_arrival: Optional[str] = Field(default=None, alias="estimatedArrival")
    current_location: Optional[str] = Field(default=None, alias="currentLocation")
    events: List[LetterStatusEvent] = Field(default_factory=list)


class LetterStatus(BaseModel):
    """Letter status as reported by the BriefButler API."""

    model_config = ConfigDict(populate_by_name=True)

    tracking_id: str = Field(..., alias="trackingId")
    status: str
    timestamp: str
    details: Optional[LetterStatusDetails] = None
