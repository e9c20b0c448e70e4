"""Account login, registration and bearer token handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from jose import JWTError, jwt

from videosia.domain.users import UserRecord
from videosia.services.errors import ServiceError

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


class UserRepository(Protocol):
    """Persistence interface for dashboard users."""

    def find_by_credentials(self, email: str, password: str) -> UserRecord | None:
        """Return the user matching email and password, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a user row and return it."""


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified."""


@dataclass(frozen=True)
class AuthResult:
    """Token and public profile returned after login or registration."""

    token: str
    user: dict[str, object]

    def to_payload(self) -> dict[str, object]:
        """Serialize for API responses."""
        return {"token": self.token, "user": self.user}


@dataclass
class AuthService:
    """Issues and verifies bearer tokens for dashboard users."""

    repository: UserRepository
    secret: str
    expires_hours: int = 24

    def login(self, email: str | None, password: str | None) -> AuthResult:
        """Authenticate a user by email and password."""
        if not email or not password:
            raise ServiceError(400, "Email e senha são obrigatórios")
        user = self.repository.find_by_credentials(email, password)
        if user is None:
            raise ServiceError(401, "Credenciais inválidas")
        return AuthResult(token=self.issue_token(user), user=user.to_claims())

    def register(  # noqa: PLR0913
        self,
        usuario: str | None,
        email: str | None,
        password: str | None,
        role: str | None,
        artistic_name: str | None = None,
        musical_genre: str | None = None,
        company_name: str | None = None,
        managed_artists_count: int | str | None = None,
    ) -> AuthResult:
        """Create an account and return a token for it."""
        if not usuario or not email or not password or not role:
            raise ServiceError(
                400, "Campos obrigatórios faltando (usuario, email, senha, função)"
            )
        if self.repository.get_by_email(email) is not None:
            raise ServiceError(400, "Este email já está cadastrado")
        try:
            user = self.repository.create_user(
                {
                    "usuario": usuario,
                    "email": email,
                    "password": password,
                    "role": role,
                    "artistic_name": artistic_name or None,
                    "musical_genre": musical_genre or None,
                    "company_name": company_name or None,
                    "managed_artists_count": _parse_count(managed_artists_count),
                }
            )
        except Exception as exc:
            logger.exception("Failed to create user", extra={"email": email})
            raise ServiceError(500, "Erro ao criar conta") from exc
        profile = {
            "id": user.id,
            "email": user.email,
            "usuario": user.usuario,
            "role": user.role,
            "artistic_name": user.artistic_name,
            "company_name": user.company_name,
        }
        return AuthResult(token=self.issue_token(user), user=profile)

    def issue_token(self, user: UserRecord) -> str:
        """Sign a token carrying the user's claims."""
        claims = user.to_claims()
        claims["exp"] = datetime.now(tz=UTC) + timedelta(hours=self.expires_hours)
        return jwt.encode(claims, self.secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> dict[str, object]:
        """Return the claims of a valid token."""
        try:
            return jwt.decode(token, self.secret, algorithms=[_ALGORITHM])
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc


def _parse_count(value: int | str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
