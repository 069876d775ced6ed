from datetime import timedelta

from hirenet.config import Settings
from hirenet.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_round_trip() -> None:
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_token_carries_user_id() -> None:
    settings = Settings(secret_key="unit-secret")
    token = create_access_token("user-123", settings)
    assert decode_access_token(token, settings) == "user-123"


def test_expired_or_foreign_tokens_are_rejected() -> None:
    settings = Settings(secret_key="unit-secret")
    expired = create_access_token("user-123", settings, expires_delta=timedelta(minutes=-1))
    assert decode_access_token(expired, settings) is None

    foreign = create_access_token("user-123", Settings(secret_key="other-secret"))
    assert decode_access_token(foreign, settings) is None
    assert decode_access_token("not-a-token", settings) is None
