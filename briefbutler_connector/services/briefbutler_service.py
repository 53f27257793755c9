"""BriefButler spool service - submits documents for dual delivery and checks their status."""

import base64
import ssl
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from briefbutler_connector.config import Settings, settings
from briefbutler_connector.core.security import (
    CertificateError,
    build_mtls_context,
    create_ssl_context,
)
from briefbutler_connector.models.spool import ApiResponse, SpoolSubmissionData
from briefbutler_connector.services.payload_builder import build_dual_delivery_payload
from briefbutler_connector.utils.logger import logger

SUBMIT_ENDPOINT = "/endpoint-spool/dualDelivery"
STATUS_ENDPOINT = "/endpoint-spool/status/{spool_id}"

MOCK_SPOOL_ID = "mock-spool-123"
MOCK_STATUS = "processing"

SUBMIT_FAILED = "Failed to submit document to BriefButler spool service"
STATUS_FAILED = "Failed to get spool status from BriefButler"


class BriefButlerAPIError(Exception):
    """Raised when a BriefButler API request fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_text(error: Exception) -> str:
    return str(error) or error.__class__.__name__


def _response_body(response: httpx.Response) -> Any:
    """Parsed JSON body, or the raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _server_message(body: Any) -> str | None:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class BriefButlerService:
    """Client for the BriefButler spool API authenticated with a client certificate.

    In mock mode no certificate is loaded and no request leaves the process;
    every operation returns a canned success response instead.
    """

    def __init__(
        self,
        api_url: str | None = None,
        test_mode: bool | None = None,
        cert_path: str | Path | None = None,
        key_path: str | Path | None = None,
        key_password: str | None = None,
        timeout: float | None = None,
        verify_ssl: bool | None = None,
        delivery_profile: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        config: Settings | None = None,
    ):
        config = config or settings
        self.api_url = (api_url or config.briefbutler_api_url).rstrip("/")
        self.in_mock_mode = test_mode if test_mode is not None else config.briefbutler_test_mode
        self.cert_path = Path(cert_path) if cert_path else config.get_certificate_path()
        self.key_path = Path(key_path) if key_path else config.get_key_path()
        self.key_password = key_password or config.briefbutler_key_password
        self.timeout = timeout or config.briefbutler_timeout
        self.verify_ssl = (
            verify_ssl if verify_ssl is not None else not config.briefbutler_insecure_skip_verify
        )
        self.delivery_profile = delivery_profile or config.briefbutler_delivery_profile
        self.headers = {"Accept": "application/json"}
        self.client_cert_loaded = False
        self._transport = transport

        logger.info("BriefButlerService: Initializing with certificate authentication")
        logger.info(f"BriefButlerService: Using certificate: {self.cert_path}")
        logger.info(f"BriefButlerService: Using key: {self.key_path}")

        if not self.verify_ssl:
            logger.warning(
                "BriefButlerService: Server certificate verification is DISABLED. "
                "Use only against test endpoints."
            )

        if self.in_mock_mode:
            self.ssl_context = create_ssl_context(verify=self.verify_ssl)
            logger.warning(
                "BriefButlerService initialized in MOCK MODE. No real API calls will be made."
            )
        else:
            self.ssl_context = self._load_ssl_context()
            logger.info(f"BriefButlerService initialized with API URL: {self.api_url}")

    def _load_ssl_context(self) -> ssl.SSLContext:
        """Create the mutual TLS context, falling back to one without a client certificate."""
        try:
            context = build_mtls_context(
                self.cert_path,
                self.key_path,
                key_password=self.key_password,
                verify=self.verify_ssl,
            )
            self.client_cert_loaded = True
            logger.info("BriefButlerService: Certificate and key loaded successfully")
            return context
        except CertificateError as e:
            logger.error(f"BriefButlerService: Error loading certificate: {e}")
            logger.warning("BriefButlerService: Initializing without certificate - API calls may fail")
            return create_ssl_context(verify=self.verify_ssl)

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            headers=self.headers,
            timeout=self.timeout,
            verify=self.ssl_context,
            transport=self._transport,
        )

    def enable_mock_mode(self) -> None:
        """Return canned responses instead of calling the API from now on."""
        self.in_mock_mode = True
        logger.info("BriefButlerService: Mock mode enabled")

    def disable_mock_mode(self) -> None:
        """Call the real API from now on."""
        self.in_mock_mode = False
        logger.info("BriefButlerService: Mock mode disabled")
        if not self.client_cert_loaded:
            logger.warning("BriefButlerService: No client certificate loaded - API calls may fail")

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Issue one request and return the response body; raise BriefButlerAPIError on failure."""
        logger.debug(f"BriefButlerService: Making request to endpoint: {endpoint}")

        async with self._build_client() as client:
            try:
                response = await client.request(method, endpoint, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                body = _response_body(e.response)
                logger.error(f"BriefButlerService: Error with endpoint {endpoint}: {e}")
                logger.error(f"Response status: {e.response.status_code}")
                logger.error("Response data:", body)
                raise BriefButlerAPIError(
                    _server_message(body) or _error_text(e),
                    status_code=e.response.status_code,
                    response_data=body,
                ) from e
            except httpx.HTTPError as e:
                logger.error(f"BriefButlerService: Error with endpoint {endpoint}: {e}")
                raise BriefButlerAPIError(_error_text(e)) from e

        logger.debug("BriefButlerService: Response successfully received")
        return _response_body(response)

    async def submit_spool(self, data: SpoolSubmissionData) -> ApiResponse:
        """Submit a PDF document to the BriefButler spool service."""
        if self.in_mock_mode:
            logger.debug("BriefButlerService: Returning mock response for submitSpool")
            return ApiResponse.ok(
                {"spool_id": MOCK_SPOOL_ID, "status": MOCK_STATUS, "timestamp": _now_iso()},
                "Document submitted to spool successfully (MOCK)",
            )

        try:
            pdf_path = Path(data.pdf_path)
            logger.debug(f"BriefButlerService: Reading PDF file from {pdf_path}")

            if not pdf_path.exists():
                logger.error(f"BriefButlerService: PDF file not found at {data.pdf_path}")
                return ApiResponse.fail(f"PDF file not found at {data.pdf_path}", SUBMIT_FAILED)

            content_b64 = base64.b64encode(pdf_path.read_bytes()).decode("ascii")
            payload = build_dual_delivery_payload(
                data,
                content_b64,
                pdf_path.name,
                data.delivery_profile or self.delivery_profile,
            )

            response_data = await self._request(
                "POST",
                SUBMIT_ENDPOINT,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            return ApiResponse.ok(response_data, "Document submitted to spool service successfully")

        except BriefButlerAPIError as e:
            return ApiResponse.fail(_error_text(e), SUBMIT_FAILED)
        except Exception as e:
            logger.error(f"BriefButlerService: Error submitting document: {e}")
            return ApiResponse.fail(_error_text(e), SUBMIT_FAILED)

    async def get_spool_status(self, spool_id: str) -> ApiResponse:
        """Get the status of a spool submission."""
        if self.in_mock_mode:
            logger.debug("BriefButlerService: Returning mock response for getSpoolStatus")
            return ApiResponse.ok(
                {"spool_id": spool_id, "status": MOCK_STATUS, "timestamp": _now_iso()},
                "Spool status retrieved successfully (MOCK)",
            )

        try:
            logger.debug(f"BriefButlerService: Getting status for spool ID: {spool_id}")
            response_data = await self._request(
                "GET", STATUS_ENDPOINT.format(spool_id=spool_id)
            )
            return ApiResponse.ok(response_data, "Spool status retrieved successfully")

        except BriefButlerAPIError as e:
            return ApiResponse.fail(_error_text(e), STATUS_FAILED)
        except Exception as e:
            logger.error(f"BriefButlerService: Error getting spool status: {e}")
            return ApiResponse.fail(_error_text(e), STATUS_FAILED)


_service: BriefButlerService | None = None


def get_briefbutler_service() -> BriefButlerService:
    """Return the shared service instance, created from settings on first use."""
    global _service
    if _service is None:
        _service = BriefButlerService()
    return _service
