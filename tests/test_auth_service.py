"""Tests for account login, registration and tokens."""

import pytest

from videosia.services.auth import AuthService, InvalidTokenError
from videosia.services.errors import ServiceError
from tests.conftest import InMemoryUserRepository


def _service(repository: InMemoryUserRepository) -> AuthService:
    return AuthService(repository, secret="secret")


def test_register_then_login_issues_verifiable_token() -> None:
    service = _service(InMemoryUserRepository())

    registered = service.register(
        usuario="Ana",
        email="ana@example.com",
        password="pw",
        role="artist",
        artistic_name="Ana Beat",
        managed_artists_count="3",
    )
    logged_in = service.login("ana@example.com", "pw")
    claims = service.verify(logged_in.token)

    assert registered.user["artistic_name"] == "Ana Beat"
    assert claims["email"] == "ana@example.com"
    assert claims["role"] == "artist"
    assert claims["id"] == registered.user["id"]
    assert "exp" in claims


def test_register_coerces_artist_count() -> None:
    repository = InMemoryUserRepository()
    service = _service(repository)

    service.register(
        usuario="Leo",
        email="leo@example.com",
        password="pw",
        role="manager",
        company_name="Label",
        managed_artists_count="not-a-number",
    )
    service.register(
        usuario="Bia",
        email="bia@example.com",
        password="pw",
        role="manager",
        managed_artists_count="12",
    )

    assert repository.users["leo@example.com"]["managed_artists_count"] is None
    assert repository.users["bia@example.com"]["managed_artists_count"] == 12


def test_login_defaults_role_to_producer() -> None:
    repository = InMemoryUserRepository()
    repository.users["old@example.com"] = {
        "id": "7",
        "usuario": "Old",
        "email": "old@example.com",
        "password": "pw",
        "role": None,
    }

    result = _service(repository).login("old@example.com", "pw")

    assert result.user["role"] == "producer"


def test_login_requires_fields_and_valid_credentials() -> None:
    service = _service(InMemoryUserRepository())

    with pytest.raises(ServiceError) as missing:
        service.login("", "pw")
    with pytest.raises(ServiceError) as invalid:
        service.login("nobody@example.com", "pw")

    assert missing.value.status_code == 400
    assert invalid.value.status_code == 401
    assert invalid.value.error == "Credenciais inválidas"


def test_register_rejects_missing_fields_and_taken_email() -> None:
    service = _service(InMemoryUserRepository())
    service.register(usuario="Ana", email="ana@example.com", password="pw", role="artist")

    with pytest.raises(ServiceError) as missing:
        service.register(usuario="Ana", email="x@example.com", password="", role="artist")
    with pytest.raises(ServiceError) as taken:
        service.register(
            usuario="Ana", email="ana@example.com", password="pw", role="artist"
        )

    assert missing.value.status_code == 400
    assert taken.value.error == "Este email já está cadastrado"


def test_register_reports_storage_failure() -> None:
    service = _service(InMemoryUserRepository(fail_create=True))

    with pytest.raises(ServiceError) as exc:
        service.register(usuario="Ana", email="ana@example.com", password="pw", role="x")

    assert exc.value.status_code == 500
    assert exc.value.error == "Erro ao criar conta"


def test_verify_rejects_foreign_signature() -> None:
    repository = InMemoryUserRepository()
    issuer = AuthService(repository, secret="other-secret")
    result = issuer.register(usuario="Ana", email="a@example.com", password="pw", role="x")

    with pytest.raises(InvalidTokenError):
        _service(repository).verify(result.token)
