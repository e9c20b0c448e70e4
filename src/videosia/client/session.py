"""Client session lifecycle: login, registration, restore and logout."""

import json
import logging

from videosia.client.api import DashboardApi
from videosia.client.errors import (
    AuthError,
    NetworkError,
    ServerError,
    ValidationError,
)
from videosia.client.models import RegistrationData, Session
from videosia.client.signals import Signal
from videosia.client.storage import TOKEN_KEY, USER_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the authenticated session and its durable copy."""

    def __init__(
        self,
        api: DashboardApi,
        storage: KeyValueStorage,
        unauthorized: Signal,
        trust_offline: bool = True,
    ) -> None:
        self.api = api
        self.storage = storage
        self.trust_offline = trust_offline
        self.session: Session | None = None
        self.changed = Signal("session_changed")
        self._unsubscribe = unauthorized.subscribe(self._on_unauthorized)

    @property
    def token(self) -> str | None:
        return self.session.token if self.session else None

    async def login(self, email: str, password: str) -> Session:
        """Authenticate with credentials and persist the session."""
        if not email or not password:
            raise ValidationError("Email e senha são obrigatórios")
        try:
            payload = await self.api.login(email, password)
        except (NetworkError, ServerError) as exc:
            logger.warning("Login failed", extra={"email": email})
            raise AuthError(str(exc)) from exc
        session = self._session_from(payload)
        self._persist(session)
        logger.info("Logged in", extra={"user_id": session.user_id})
        return session

    async def register(self, data: RegistrationData) -> None:
        """Create an account and persist the returned session."""
        if not (data.name and data.email and data.password and data.role):
            raise ValidationError("Todos os campos obrigatórios devem ser preenchidos")
        try:
            payload = await self.api.register(data.to_payload())
        except (NetworkError, ServerError) as exc:
            logger.warning("Registration failed", extra={"email": data.email})
            raise AuthError(str(exc)) from exc
        session = self._session_from(payload)
        self._persist(session)
        logger.info("Registered", extra={"user_id": session.user_id})

    async def restore(self) -> Session | None:
        """Load the stored session and confirm its token with the backend."""
        stored = self._load()
        if stored is None:
            return None
        try:
            await self.api.me(stored.token)
        except NetworkError:
            if not self.trust_offline:
                logger.warning("Backend unreachable, stored session not restored")
                return None
            logger.warning(
                "Backend unreachable, trusting stored session",
                extra={"user_id": stored.user_id},
            )
        except (AuthError, ServerError):
            logger.info("Stored session rejected", extra={"user_id": stored.user_id})
            self._clear_storage()
            return None
        self._set(stored)
        return stored

    def logout(self) -> None:
        """Forget the session in memory and on disk."""
        self._clear_storage()
        self._set(None)

    def close(self) -> None:
        """Stop listening for unauthorized broadcasts."""
        self._unsubscribe()

    def _on_unauthorized(self) -> None:
        logger.info("Logging out after unauthorized response")
        self.logout()

    def _session_from(self, payload: dict[str, object]) -> Session:
        try:
            return Session.from_login(payload)
        except (KeyError, ValueError) as exc:
            raise AuthError("Resposta de autenticação inválida") from exc

    def _persist(self, session: Session) -> None:
        self.storage.set(TOKEN_KEY, session.token)
        self.storage.set(USER_KEY, json.dumps(session.to_profile(), ensure_ascii=False))
        self._set(session)

    def _load(self) -> Session | None:
        token = self.storage.get(TOKEN_KEY)
        raw_user = self.storage.get(USER_KEY)
        if not token or not raw_user:
            return None
        try:
            profile = json.loads(raw_user)
            return Session.from_profile(profile, token)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed stored session")
            self._clear_storage()
            return None

    def _clear_storage(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)

    def _set(self, session: Session | None) -> None:
        if session == self.session:
            return
        self.session = session
        self.changed.emit()
