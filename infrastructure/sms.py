# ============================================================================
# SMS CLIENT
# ============================================================================
# STATUS: Infrastructure - HTTP client for the SMS provider
# PURPOSE: Send submission confirmation messages
# EXPORTS: SmsClient
# DEPENDENCIES: httpx, config.sms_config
# ============================================================================
"""
SMS Client.

Talks to a Twilio-compatible Messages API:

    POST {api_base_url}/Accounts/{account_sid}/Messages.json
    form fields: To, From, Body
    basic auth:  account_sid / auth_token

Authentication is encapsulated here; callers only pass a number and a body.

Usage:
    from infrastructure.sms import SmsClient

    client = SmsClient(get_config().sms)
    message_id = client.send("+251911000000", "Household 42 registered")
"""

from typing import Optional

import httpx

from config import SmsConfig
from exceptions import NotificationError
from util_logger import ComponentType, LoggerFactory

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "SmsClient")


class SmsClient:
    """
    Client for the outbound SMS provider.

    Args:
        config: SmsConfig with credentials and base URL
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(self, config: SmsConfig, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        self._transport = transport

    @property
    def messages_url(self) -> str:
        return f"{self._config.api_base_url.rstrip('/')}/Accounts/{self._config.account_sid}/Messages.json"

    def send(self, to: str, body: str) -> str:
        """
        Send one SMS.

        Returns:
            Provider message id (the "sid" field)

        Raises:
            NotificationError: Provider not configured, unreachable, non-2xx
                response, or a response without a message id.
        """
        if not self._config.is_ready:
            raise NotificationError("SMS provider is not configured")

        logger.info(f"Sending SMS to {to[:4]}***")

        try:
            with httpx.Client(
                timeout=self._config.timeout_seconds,
                auth=(self._config.account_sid, self._config.auth_token),
                transport=self._transport,
            ) as client:
                response = client.post(
                    self.messages_url,
                    data={"To": to, "From": self._config.from_number, "Body": body},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"SMS provider returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise NotificationError(f"SMS provider unreachable: {e}") from e
        except ValueError as e:
            raise NotificationError("SMS provider returned invalid JSON") from e

        message_id = data.get("sid") if isinstance(data, dict) else None
        if not message_id:
            raise NotificationError("SMS provider response carried no message id")

        logger.info(f"SMS accepted by provider: {message_id}")
        return message_id


__all__ = ['SmsClient']
