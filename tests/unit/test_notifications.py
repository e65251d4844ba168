"""
SMS client and notification service tests.

The SMS client runs against httpx.MockTransport; the notification service
runs its sends inline so results can be asserted synchronously.
"""

import logging
from urllib.parse import parse_qs

import httpx
import pytest

from config import SmsConfig
from core.logic import build_submission
from core.models import SubmissionResult
from exceptions import NotificationError
from infrastructure.sms import SmsClient
from services.notification_service import (
    NotificationService,
    build_confirmation_message,
    first_phone_number,
)
from tests.factories.model_factories import make_location, make_raw_member


def _sms_config(**overrides):
    values = {
        "enabled": True,
        "api_base_url": "https://sms.example.test/2010-04-01",
        "account_sid": "AC123",
        "auth_token": "secret",
        "from_number": "+15550001111",
    }
    values.update(overrides)
    return SmsConfig(**values)


class TestSmsClient:

    def test_send_posts_form_and_returns_sid(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(201, json={"sid": "SM1"})

        client = SmsClient(_sms_config(), transport=httpx.MockTransport(handler))

        assert client.send("+251911000000", "hello") == "SM1"
        assert seen["url"] == "https://sms.example.test/2010-04-01/Accounts/AC123/Messages.json"
        assert seen["auth"].startswith("Basic ")
        assert seen["form"] == {"To": ["+251911000000"], "From": ["+15550001111"], "Body": ["hello"]}

    def test_provider_error_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(400, json={"message": "bad"}))
        client = SmsClient(_sms_config(), transport=transport)

        with pytest.raises(NotificationError, match="400"):
            client.send("+251911000000", "hello")

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = SmsClient(_sms_config(), transport=httpx.MockTransport(handler))

        with pytest.raises(NotificationError, match="unreachable"):
            client.send("+251911000000", "hello")

    def test_response_without_sid(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"status": "queued"}))
        client = SmsClient(_sms_config(), transport=transport)

        with pytest.raises(NotificationError, match="no message id"):
            client.send("+251911000000", "hello")

    def test_not_configured(self):
        client = SmsClient(_sms_config(auth_token=None))
        with pytest.raises(NotificationError, match="not configured"):
            client.send("+251911000000", "hello")


class RecordingClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send(self, to, body):
        if self.fail:
            raise NotificationError("SMS provider returned 503")
        self.sent.append((to, body))
        return "SM42"


def _aggregate(*members):
    return build_submission(make_location(), list(members))


class TestConfirmationMessage:

    def test_singular(self):
        message = build_confirmation_message(SubmissionResult(household_id=12, member_count=1))
        assert message == "Thank you for registering. Household #12 was recorded with 1 family member."

    def test_plural(self):
        message = build_confirmation_message(SubmissionResult(household_id=12, member_count=3))
        assert message.endswith("3 family members.")

    def test_first_phone_in_submission_order(self):
        aggregate = _aggregate(
            make_raw_member(phone=None),
            make_raw_member(phone=" "),
            make_raw_member(phone="+251911000002"),
            make_raw_member(phone="+251911000003"),
        )
        assert first_phone_number(aggregate) == "+251911000002"


class TestNotificationService:

    def test_sends_to_first_phone(self, inline_executor):
        client = RecordingClient()
        service = NotificationService(_sms_config(), client=client, executor=inline_executor)
        aggregate = _aggregate(make_raw_member(phone="+251911000001"))

        future = service.notify_submission(aggregate, SubmissionResult(household_id=5, member_count=1))

        assert future.result() == "SM42"
        assert client.sent[0][0] == "+251911000001"
        assert "Household #5" in client.sent[0][1]

    def test_disabled_sends_nothing(self, inline_executor):
        client = RecordingClient()
        service = NotificationService(_sms_config(enabled=False), client=client, executor=inline_executor)

        result = service.notify_submission(
            _aggregate(make_raw_member()), SubmissionResult(household_id=1, member_count=1)
        )

        assert result is None
        assert inline_executor.submitted == 0

    def test_no_phone_sends_nothing(self, inline_executor):
        client = RecordingClient()
        service = NotificationService(_sms_config(), client=client, executor=inline_executor)

        result = service.notify_submission(
            _aggregate(make_raw_member(phone=None)), SubmissionResult(household_id=1, member_count=1)
        )

        assert result is None
        assert client.sent == []

    def test_failure_logged_not_raised(self, inline_executor, caplog):
        service = NotificationService(_sms_config(), client=RecordingClient(fail=True), executor=inline_executor)

        with caplog.at_level(logging.WARNING):
            future = service.notify_submission(
                _aggregate(make_raw_member()), SubmissionResult(household_id=9, member_count=1)
            )

        assert future.result() is None
        record = next(r for r in caplog.records if "confirmation SMS failed" in r.getMessage())
        assert record.custom_dimensions["component_name"] == "NotificationService"

    def test_shut_down_executor_is_tolerated(self):
        class ClosedExecutor:
            def submit(self, *args, **kwargs):
                raise RuntimeError("cannot schedule new futures after shutdown")

        service = NotificationService(_sms_config(), client=RecordingClient(), executor=ClosedExecutor())

        assert service.notify_submission(
            _aggregate(make_raw_member()), SubmissionResult(household_id=1, member_count=1)
        ) is None
