from __future__ import annotations

from authz_service.services.credential_validator import (
    AcceptAllValidator,
    CredentialValidator,
    StaticTokenValidator,
    build_validator,
    get_credential_validator,
)


def test_accept_all_admits_anything() -> None:
    validator = AcceptAllValidator()
    assert validator.validate("x") is True
    assert validator.validate("") is True


def test_static_validator_admits_only_trusted() -> None:
    validator = StaticTokenValidator({"tok-1", "tok-2"})
    assert validator.validate("tok-1") is True
    assert validator.validate("tok-2") is True
    assert validator.validate("tok-3") is False
    assert validator.validate("tok-") is False


def test_static_validator_with_empty_store_rejects_everything() -> None:
    assert StaticTokenValidator(()).validate("anything") is False


def test_build_validator_without_trust_store_accepts_all() -> None:
    assert isinstance(build_validator(()), AcceptAllValidator)


def test_build_validator_with_trust_store_is_static() -> None:
    validator = build_validator(["tok-1"])
    assert isinstance(validator, StaticTokenValidator)
    assert validator.validate("tok-1") is True


def test_validators_satisfy_protocol() -> None:
    assert isinstance(AcceptAllValidator(), CredentialValidator)
    assert isinstance(StaticTokenValidator(["t"]), CredentialValidator)


def test_default_validator_accepts_all_in_tests() -> None:
    # TRUSTED_BEARER_TOKENS is unset in the test environment
    assert isinstance(get_credential_validator(), AcceptAllValidator)
