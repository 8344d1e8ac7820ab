import pytest
from jose import JWTError

from forum.core.security import (
    decode_session_cookie,
    encode_session_cookie,
    hash_password,
    verify_password,
)


def test_hash_password_has_digest_and_salt_in_hex() -> None:
    hashed = hash_password("secret1")
    digest, salt = hashed.split(".")

    assert len(digest) == 128
    assert len(salt) == 32
    int(digest, 16)
    int(salt, 16)


def test_verify_password_accepts_the_original_password() -> None:
    assert verify_password("secret1", hash_password("secret1"))


def test_verify_password_rejects_a_different_password() -> None:
    assert not verify_password("secret2", hash_password("secret1"))


def test_hash_password_salts_every_hash() -> None:
    assert hash_password("secret1") != hash_password("secret1")


def test_verify_password_handles_non_ascii_passwords() -> None:
    hashed = hash_password("пароль-🔑")

    assert verify_password("пароль-🔑", hashed)
    assert not verify_password("пароль", hashed)


@pytest.mark.parametrize(
    "stored",
    ["", "no-delimiter", "zz.abcd", "abcd.abcd", ".abcd", "a" * 128 + "."],
)
def test_verify_password_fails_closed_on_malformed_values(stored: str) -> None:
    assert verify_password("secret1", stored) is False


def test_session_cookie_round_trip() -> None:
    token = encode_session_cookie("sid-123", "k", 60)

    assert decode_session_cookie(token, "k") == "sid-123"


def test_session_cookie_rejects_wrong_secret() -> None:
    token = encode_session_cookie("sid-123", "k", 60)

    with pytest.raises(JWTError):
        decode_session_cookie(token, "other")


def test_session_cookie_rejects_expired_token() -> None:
    token = encode_session_cookie("sid-123", "k", -10)

    with pytest.raises(JWTError):
        decode_session_cookie(token, "k")
