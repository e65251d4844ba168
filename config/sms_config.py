"""
Outbound SMS Configuration.

Settings for the submission confirmation SMS. Notifications are disabled
unless SMS_ENABLED=true and the provider credentials are present.

Exports:
    SmsConfig: SMS provider configuration
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

from .defaults import SmsDefaults


class SmsConfig(BaseModel):
    """SMS provider configuration (Twilio-compatible Messages API)."""

    enabled: bool = Field(
        default=SmsDefaults.ENABLED,
        description="Send a confirmation SMS after each committed submission"
    )

    api_base_url: str = Field(
        default=SmsDefaults.API_BASE_URL,
        description="Provider API root, without trailing slash"
    )

    account_sid: Optional[str] = Field(
        default=None,
        description="Provider account identifier (SMS_ACCOUNT_SID)"
    )

    auth_token: Optional[str] = Field(
        default=None,
        repr=False,
        description="Provider auth token (SMS_AUTH_TOKEN)"
    )

    from_number: Optional[str] = Field(
        default=None,
        description="Sender number in E.164 format (SMS_FROM_NUMBER)"
    )

    timeout_seconds: float = Field(
        default=SmsDefaults.TIMEOUT_SECONDS,
        gt=0,
        description="HTTP timeout for one send"
    )

    @property
    def is_ready(self) -> bool:
        """Enabled and every credential present."""
        return self.enabled and bool(self.account_sid and self.auth_token and self.from_number)

    def debug_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "api_base_url": self.api_base_url,
            "account_sid": self.account_sid[:6] + "..." if self.account_sid else None,
            "auth_token": "***MASKED***" if self.auth_token else None,
            "from_number": self.from_number,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            enabled=os.environ.get("SMS_ENABLED", str(SmsDefaults.ENABLED)).lower() == "true",
            api_base_url=os.environ.get("SMS_API_BASE_URL", SmsDefaults.API_BASE_URL).rstrip("/"),
            account_sid=os.environ.get("SMS_ACCOUNT_SID") or None,
            auth_token=os.environ.get("SMS_AUTH_TOKEN") or None,
            from_number=os.environ.get("SMS_FROM_NUMBER") or None,
            timeout_seconds=float(os.environ.get("SMS_TIMEOUT_SECONDS", str(SmsDefaults.TIMEOUT_SECONDS))),
        )
