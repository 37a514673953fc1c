"""
Pending-verification ledger.

Holds signups that are waiting for their one-time code. Entries live in
process memory only: a restart drops every in-flight signup and users
must sign up again. That is an accepted limitation, not a bug.

The ledger is owned by the service container (one per process) and
injected into AuthService; there is no module-level instance.
"""

import hmac
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .exceptions import InvalidOtpError
from .models import DraftProfile, PendingVerification

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """Lowercase and strip an email so it can be used as a key."""
    return email.strip().lower()


class PendingVerificationLedger:
    """
    Time-bounded map from normalized email to a PendingVerification.

    All operations take a lock so that consume() is an atomic
    check-and-delete: of two concurrent verifications for the same email,
    exactly one gets the entry.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, PendingVerification] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def put(
        self,
        email: str,
        otp: str,
        profile: Optional[DraftProfile] = None,
    ) -> PendingVerification:
        """Store a code for the email, replacing any previous entry."""
        key = normalize_email(email)
        entry = PendingVerification(
            email=key,
            otp=otp,
            expires_at=self._clock() + self._ttl,
            profile=profile,
        )
        with self._lock:
            self._entries[key] = entry
        return entry

    def consume(self, email: str, otp: str) -> PendingVerification:
        """
        Remove and return the entry if the code matches and has not expired.

        Missing entry, wrong code and expired code all raise the same
        InvalidOtpError so callers cannot tell them apart.
        """
        key = normalize_email(email)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise InvalidOtpError()
            if now > entry.expires_at:
                # Expired entries can never succeed again
                del self._entries[key]
                raise InvalidOtpError()
            if not hmac.compare_digest(entry.otp.encode(), (otp or "").encode()):
                raise InvalidOtpError()
            del self._entries[key]
            return entry

    def restore(self, entry: PendingVerification) -> bool:
        """
        Put back a consumed entry after a failed account creation.

        A newer signup for the same email wins: the entry is only restored
        when the slot is still empty.
        """
        with self._lock:
            if entry.email in self._entries:
                return False
            self._entries[entry.email] = entry
            return True

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, v in self._entries.items() if now > v.expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired pending verifications")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, email: str) -> bool:
        with self._lock:
            return normalize_email(email) in self._entries
