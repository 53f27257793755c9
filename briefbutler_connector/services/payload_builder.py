"""Builds the JSON payload for the BriefButler dual-delivery spool endpoint."""

import time
from typing import Any

from briefbutler_connector.models.spool import SpoolSubmissionData

DEFAULT_COUNTRY_CODE = "AT"
DEFAULT_COST_CENTER = "default-costcenter"
DEFAULT_SUBJECT = "Document Delivery"
PDF_MIME_TYPE = "application/pdf"


def split_name(full_name: str) -> tuple[str, str]:
    """Split a full name into (given_name, family_name).

    First space-separated token is the given name, last token the family
    name. Middle names are dropped and a single word fills both.
    """
    tokens = full_name.split(" ")
    family_name = tokens[-1] or full_name
    given_name = tokens[0] or ""
    return given_name, family_name


def _physical_person(full_name: str) -> dict[str, str]:
    given_name, family_name = split_name(full_name)
    return {"familyName": family_name, "givenName": given_name}


def _postal_address(street: str, postal_code: str, city: str) -> dict[str, str]:
    return {
        "street": street,
        "postalCode": postal_code,
        "city": city,
        "countryCode": DEFAULT_COUNTRY_CODE,
    }


def build_dual_delivery_payload(
    data: SpoolSubmissionData,
    content_b64: str,
    filename: str,
    delivery_profile: str,
) -> dict[str, Any]:
    """Build the dual-delivery request body for one base64-encoded PDF."""
    stamp = int(time.time() * 1000)

    return {
        "metadata": {
            "deliveryId": f"Delivery_{stamp}",
            "caseId": f"Case_{stamp}",
        },
        "configuration": {
            "deliveryProfile": delivery_profile,
            "allowEmail": True,
            "costcenter": data.reference or DEFAULT_COST_CENTER,
        },
        "receiver": {
            "email": data.recipient_email or "",
            "recipient": {"physicalPerson": _physical_person(data.recipient_name)},
            "postalAddress": _postal_address(
                data.recipient_address, data.recipient_zip, data.recipient_city
            ),
        },
        "sender": {
            "person": {"physicalPerson": _physical_person(data.sender_name)},
            "postalAddress": _postal_address(
                data.sender_address, data.sender_zip, data.sender_city
            ),
        },
        "subject": data.reference or DEFAULT_SUBJECT,
        "documents": [
            {
                "content": content_b64,
                "mimeType": PDF_MIME_TYPE,
                "name": filename,
                "documentId": f"doc_{stamp}",
                "type": "Standard",
            }
        ],
    }
