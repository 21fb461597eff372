"""
Timing & Credential Store

Per-user record of the active passcode, cooldown deadlines and the
WebAuthn credential IDs registered on this device.

All records live in one blob (base64-encoded JSON) under a single storage
key. Every mutation reads the whole blob, changes one user record and
writes the whole blob back. Deadlines are stored as absolute unix
timestamps so a record reads the same no matter when it is read.

Storage problems never fail a flow: an unreadable blob reads as an empty
collection and a failed write is dropped.
"""

import base64
import math
import time
from collections.abc import Callable

import orjson
from pydantic import BaseModel, Field

from core.logger import get_logger
from models import Credential

from .storage import KeyValueStorage, StorageError

logger = get_logger(__name__)


class PasscodeState(BaseModel):
    id: str | None = None
    ttl: int = 0  # absolute expiry
    resend_after: int = 0  # absolute


class PasswordState(BaseModel):
    retry_after: int = 0  # absolute


class UserState(BaseModel):
    """Local facts about one user. A missing record equals the default."""
    webauthn_credentials: list[str] = Field(default_factory=list)
    passcode: PasscodeState = Field(default_factory=PasscodeState)
    password: PasswordState = Field(default_factory=PasswordState)


class StoreData(BaseModel):
    users: dict[str, UserState] = Field(default_factory=dict)


class TimingStore:
    """
    State container over a KeyValueStorage.

    Not safe against concurrent writers: two processes (or two clients
    sharing one storage) mutating at once means the last write wins.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = "hanko",
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            storage: Persistence port holding the blob
            key: Storage key of the blob
            clock: Returns the current unix time in seconds
        """
        self._storage = storage
        self._key = key
        self._clock = clock

    # ------------------------------------------------------------------
    # Blob I/O
    # ------------------------------------------------------------------

    def _now(self) -> int:
        return math.floor(self._clock())

    def _read(self) -> StoreData:
        try:
            blob = self._storage.get(self._key)
        except StorageError as e:
            logger.warning(f"Timing state unavailable, using defaults: {e}")
            return StoreData()

        if not blob:
            return StoreData()

        try:
            decoded = base64.b64decode(blob, validate=True)
            return StoreData.model_validate(orjson.loads(decoded))
        except ValueError as e:
            # Covers base64, JSON and validation failures
            logger.warning(f"Discarding unreadable timing state: {e}")
            return StoreData()

    def _write(self, data: StoreData) -> None:
        blob = base64.b64encode(orjson.dumps(data.model_dump())).decode("ascii")
        try:
            self._storage.set(self._key, blob)
        except StorageError as e:
            logger.warning(f"Timing state not saved: {e}")

    def get_user_state(self, user_id: str) -> UserState:
        """Return the user's record, or a fresh default when there is none."""
        return self._read().users.get(user_id) or UserState()

    def _update(self, user_id: str, mutate: Callable[[UserState], None]) -> None:
        data = self._read()
        state = data.users.get(user_id) or UserState()
        mutate(state)
        data.users[user_id] = state
        self._write(data)

    def _remaining(self, deadline: int) -> int:
        # 0 means the deadline was never set or has been cleared
        if not deadline:
            return 0
        return deadline - self._now()

    def _deadline(self, seconds: int) -> int:
        return self._now() + seconds

    # ------------------------------------------------------------------
    # WebAuthn credentials
    # ------------------------------------------------------------------

    def get_credential_ids(self, user_id: str) -> set[str]:
        return set(self.get_user_state(user_id).webauthn_credentials)

    def append_credential_id(self, user_id: str, credential_id: str) -> None:
        def mutate(state: UserState) -> None:
            if credential_id not in state.webauthn_credentials:
                state.webauthn_credentials.append(credential_id)

        self._update(user_id, mutate)

    def match_credentials(self, user_id: str, candidates: list[Credential]) -> list[Credential]:
        """
        Return the candidates that were registered on this device.

        Args:
            user_id: Local user ID
            candidates: Credentials known to the server

        Returns:
            Subset of candidates whose ID is stored locally
        """
        known = self.get_credential_ids(user_id)
        return [c for c in candidates if c.id in known]

    # ------------------------------------------------------------------
    # Passcode
    # ------------------------------------------------------------------

    def get_active_passcode_id(self, user_id: str) -> str | None:
        # Older records use "" for "no passcode"
        return self.get_user_state(user_id).passcode.id or None

    def set_active_passcode_id(self, user_id: str, passcode_id: str) -> None:
        def mutate(state: UserState) -> None:
            state.passcode.id = passcode_id

        self._update(user_id, mutate)

    def clear_active_passcode(self, user_id: str) -> None:
        """Forget the active passcode ID and its expiry together."""
        def mutate(state: UserState) -> None:
            state.passcode.id = None
            state.passcode.ttl = 0

        self._update(user_id, mutate)

    def get_passcode_remaining_seconds(self, user_id: str) -> int:
        """Seconds until the active passcode expires. Negative once expired."""
        return self._remaining(self.get_user_state(user_id).passcode.ttl)

    def set_passcode_ttl(self, user_id: str, seconds: int) -> None:
        deadline = self._deadline(seconds)

        def mutate(state: UserState) -> None:
            state.passcode.ttl = deadline

        self._update(user_id, mutate)

    def get_passcode_resend_remaining_seconds(self, user_id: str) -> int:
        return self._remaining(self.get_user_state(user_id).passcode.resend_after)

    def set_passcode_resend_after(self, user_id: str, seconds: int) -> None:
        deadline = self._deadline(seconds)

        def mutate(state: UserState) -> None:
            state.passcode.resend_after = deadline

        self._update(user_id, mutate)

    # ------------------------------------------------------------------
    # Password
    # ------------------------------------------------------------------

    def get_password_retry_remaining_seconds(self, user_id: str) -> int:
        return self._remaining(self.get_user_state(user_id).password.retry_after)

    def set_password_retry_after(self, user_id: str, seconds: int) -> None:
        deadline = self._deadline(seconds)

        def mutate(state: UserState) -> None:
            state.password.retry_after = deadline

        self._update(user_id, mutate)
