"""
One-time code issuance for email verification.

Generates the code, records it in the pending-verification ledger and
sends it through the notification channel. When no channel is configured
the code is written to the log instead, outside production only.
"""

import logging
import secrets
from typing import Optional

from .interfaces import INotificationChannel
from .ledger import PendingVerificationLedger
from .models import DraftProfile, PendingVerification

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999

OTP_EMAIL_SUBJECT = "Notes App - Verify your email"


def generate_otp() -> str:
    """Return a uniformly random 6-digit code in 100000..999999."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def render_otp_email(otp: str, ttl_minutes: int) -> str:
    return (
        "<h2>Email Verification</h2>"
        f"<p>Your OTP code is: <strong>{otp}</strong></p>"
        f"<p>This code will expire in {ttl_minutes} minutes.</p>"
    )


class OtpIssuer:
    """Writes a fresh code to the ledger and dispatches it."""

    def __init__(
        self,
        ledger: PendingVerificationLedger,
        channel: Optional[INotificationChannel] = None,
        diagnostics: bool = True,
    ):
        self._ledger = ledger
        self._channel = channel
        self._diagnostics = diagnostics

    async def issue(self, email: str, profile: DraftProfile) -> PendingVerification:
        """
        Create the pending entry and send the code.

        The entry is written before dispatch. If sending fails the entry
        stays behind and simply expires; the error propagates.

        Raises:
            NotificationDeliveryError: If the configured channel failed
        """
        self._ledger.purge_expired()
        entry = self._ledger.put(email, generate_otp(), profile)

        if self._channel is not None and self._channel.is_configured:
            ttl_minutes = int(self._ledger.ttl.total_seconds() // 60)
            await self._channel.send(
                entry.email,
                OTP_EMAIL_SUBJECT,
                render_otp_email(entry.otp, ttl_minutes),
            )
            logger.info(f"Sent verification code to {entry.email}")
        elif self._diagnostics:
            logger.warning(f"Development OTP for {entry.email}: {entry.otp}")

        return entry
