import pytest

from src.schemas.common import ProviderKeySlot
from src.utils.exceptions import (
    AuthenticationError,
    CallerResolutionError,
    MissingCredentialError,
    StoreError,
    Unauthorized,
)


def test_authentication_error_keeps_reason():
    exc = AuthenticationError("no profile")

    assert exc.status_code == 401
    assert exc.reason == "no profile"
    assert isinstance(exc, CallerResolutionError)


def test_unauthorized_defaults():
    exc = Unauthorized()

    assert exc.status_code == 401
    assert exc.message == "Unauthorized"


def test_missing_credential_message_uses_label():
    exc = MissingCredentialError(ProviderKeySlot.GOOGLE_GEMINI)

    assert exc.status_code == 400
    assert exc.message == "Google Gemini API Key not found"


@pytest.mark.parametrize(
    "status_code, expected",
    [(None, 500), (503, 503), (404, 404), (200, 500), (302, 500), (600, 500)],
)
def test_store_error_status(status_code, expected):
    assert StoreError("down", status_code=status_code).status_code == expected


def test_store_error_default_message():
    assert StoreError().message == "An unexpected error occurred"
