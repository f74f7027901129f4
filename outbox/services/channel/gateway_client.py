"""HTTP client for a WhatsApp gateway sidecar.

The gateway owns the WhatsApp Web session (QR pairing, reconnects) and
exposes two JSON endpoints:

* ``GET  {base}/status``   -> ``{"ready": bool, "state": str}``
* ``POST {base}/messages`` with ``{"chatId": str, "message": str}``
"""

import re
from typing import Any

from django.conf import settings

import requests
import structlog

from outbox.constants import WHATSAPP_CONTACT_SUFFIX
from outbox.exceptions import (
    ChannelError,
    ChannelNotReadyError,
    ChannelSendError,
    ChannelUnavailableError,
)
from outbox.services.channel.base import ChannelClient

logger = structlog.get_logger(__name__)

_NON_DIGITS = re.compile(r"\D")


def to_chat_id(recipient: str) -> str:
    """Normalise a phone number to a WhatsApp contact chat ID.

    Addresses that already carry a ``@`` suffix are passed through.

    Examples:
        >>> to_chat_id("+970 599-123-456")
        '970599123456@c.us'
        >>> to_chat_id("970599123456@c.us")
        '970599123456@c.us'
    """
    recipient = recipient.strip()
    if "@" in recipient:
        return recipient
    return f"{_NON_DIGITS.sub('', recipient)}{WHATSAPP_CONTACT_SUFFIX}"


class GatewayChannelClient(ChannelClient):
    """Channel client that sends WhatsApp messages through the gateway."""

    service_name = "whatsapp-gateway"

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize gateway client.

        Args:
            base_url: Gateway base URL (defaults to WHATSAPP_GATEWAY_URL)
            token: Bearer token for the gateway (defaults to WHATSAPP_GATEWAY_TOKEN)
            timeout: Request timeout in seconds (defaults to WHATSAPP_GATEWAY_TIMEOUT)
        """
        super().__init__()
        self.base_url = (base_url or settings.WHATSAPP_GATEWAY_URL).rstrip("/")
        self.token = token if token is not None else settings.WHATSAPP_GATEWAY_TOKEN
        self.timeout = timeout if timeout is not None else settings.WHATSAPP_GATEWAY_TIMEOUT
        self._session: requests.Session | None = None

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @property
    def session(self) -> requests.Session:
        """Return the HTTP session, creating it on first use."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self._get_headers())
        return self._session

    def _make_request(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Make HTTP request to the gateway with error mapping.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path relative to the gateway base URL
            json_data: JSON body data

        Returns:
            Response object

        Raises:
            ChannelSendError: For client errors (4xx)
            ChannelUnavailableError: For server errors, timeouts and connection errors
        """
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(
                "gateway_request_timed_out",
                service=self.service_name,
                method=method,
                url=url,
                timeout=self.timeout,
            )
            raise ChannelUnavailableError(
                f"{self.service_name} timed out after {self.timeout}s"
            ) from e
        except requests.ConnectionError as e:
            logger.error(
                "gateway_connection_failed",
                service=self.service_name,
                method=method,
                url=url,
                error=str(e),
            )
            raise ChannelUnavailableError(
                f"Failed to connect to {self.service_name}: {e}"
            ) from e

        logger.debug(
            "gateway_response_received",
            service=self.service_name,
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "gateway_server_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise ChannelUnavailableError(
                f"{self.service_name} is unavailable (status: {response.status_code})",
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            logger.warning(
                "gateway_client_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise ChannelSendError(
                f"{self.service_name} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        return response

    def poll_readiness(self) -> bool:
        """Refresh readiness from the gateway and report any transition.

        An unreachable gateway counts as not ready.

        Returns:
            Current readiness
        """
        try:
            payload = self._make_request("GET", "status").json()
            ready = bool(payload.get("ready"))
            reason = None if ready else payload.get("state", "not ready")
        except (ChannelError, ValueError) as e:
            ready = False
            reason = str(e)

        self._set_ready(ready, reason=reason)
        return ready

    def connect(self) -> None:
        """Open the HTTP session and read the initial readiness."""
        logger.info("gateway_connecting", service=self.service_name, url=self.base_url)
        self.poll_readiness()

    def disconnect(self) -> None:
        """Close the HTTP session and report the channel as gone."""
        if self._session is not None:
            self._session.close()
            self._session = None
        self._set_ready(False, reason="client disconnected")
        logger.info("gateway_disconnected", service=self.service_name)

    def send(self, recipient: str, body: str) -> None:
        """Send one text message through the gateway.

        Raises:
            ChannelNotReadyError: If the channel is not ready
            ChannelSendError: If the gateway rejected the message
            ChannelUnavailableError: If the gateway could not be reached
        """
        if not self.is_ready():
            raise ChannelNotReadyError()

        chat_id = to_chat_id(recipient)
        try:
            self._make_request(
                "POST",
                "messages",
                json_data={"chatId": chat_id, "message": body},
            )
        except ChannelUnavailableError:
            # The session may have dropped; the next poll re-reports readiness
            self.poll_readiness()
            raise

        logger.info("gateway_message_sent", chat_id=chat_id)
