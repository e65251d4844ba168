# ============================================================================
# NOTIFICATION SERVICE
# ============================================================================
# STATUS: Business logic - Best-effort submission confirmation
# PURPOSE: Send one SMS after a household commit without delaying the response
# EXPORTS: NotificationService, get_notification_service, build_confirmation_message
# DEPENDENCIES: infrastructure.sms, concurrent.futures
# ============================================================================
"""
Notification Service.

After a household is committed, the first member with a phone number
receives a confirmation SMS. Delivery runs on a small background executor
and is best-effort: failures are logged and never reach the HTTP caller,
and the submission is never undone because a message could not be sent.
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from config import SmsConfig, get_config
from config.defaults import SmsDefaults
from core.models import SubmissionAggregate, SubmissionResult
from exceptions import NotificationError
from infrastructure.sms import SmsClient
from util_logger import ComponentType, LoggerFactory

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "NotificationService")


_service_instance: Optional["NotificationService"] = None


def get_notification_service() -> "NotificationService":
    """Get singleton NotificationService instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = NotificationService()
    return _service_instance


def build_confirmation_message(result: SubmissionResult) -> str:
    members = "member" if result.member_count == 1 else "members"
    return (
        f"Thank you for registering. Household #{result.household_id} "
        f"was recorded with {result.member_count} family {members}."
    )


def first_phone_number(aggregate: SubmissionAggregate) -> Optional[str]:
    """Phone of the first member that gave one, in submission order."""
    for member in aggregate.members:
        phone = str(member.phone).strip() if member.phone is not None else ""
        if phone:
            return phone
    return None


class NotificationService:
    """Best-effort confirmation SMS dispatch."""

    def __init__(
        self,
        config: Optional[SmsConfig] = None,
        client: Optional[SmsClient] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Args:
            config: SMS configuration (from environment if omitted)
            client: SmsClient (built from config if omitted)
            executor: Where sends run (a small thread pool if omitted)
        """
        self.config = config or get_config().sms
        self.client = client or SmsClient(self.config)
        self._executor = executor

    @property
    def executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=SmsDefaults.MAX_WORKERS,
                thread_name_prefix="sms",
            )
        return self._executor

    def notify_submission(
        self,
        aggregate: SubmissionAggregate,
        result: SubmissionResult,
    ) -> Optional[Future]:
        """
        Queue the confirmation SMS for a committed household.

        Returns:
            The Future of the background send, or None when nothing was queued
            (SMS disabled, no phone number, executor unavailable).
        """
        if not self.config.is_ready:
            logger.debug("SMS disabled or not configured, skipping confirmation")
            return None

        phone = first_phone_number(aggregate)
        if phone is None:
            logger.info(f"Household {result.household_id}: no member phone number, no SMS sent")
            return None

        body = build_confirmation_message(result)
        try:
            return self.executor.submit(self._send_quietly, phone, body, result.household_id)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning(f"Household {result.household_id}: SMS not queued: {e}")
            return None

    def _send_quietly(self, phone: str, body: str, household_id: int) -> Optional[str]:
        try:
            message_id = self.client.send(phone, body)
        except NotificationError as e:
            logger.warning(
                f"Household {household_id}: confirmation SMS failed: {e.message}",
                extra={'custom_dimensions': {
                    'household_id': household_id,
                    'error_code': e.error_code.value,
                }}
            )
            return None

        logger.info(f"Household {household_id}: confirmation SMS sent ({message_id})")
        return message_id

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
