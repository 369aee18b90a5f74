from taskboard_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_token_round_trip():
    token = create_access_token({"sub": "alice"})

    payload = decode_access_token(token)

    assert payload["sub"] == "alice"
    assert "exp" in payload


def test_tampered_token_is_rejected():
    header, payload, signature = create_access_token({"sub": "alice"}).split(".")
    forged = create_access_token({"sub": "mallory"}).split(".")[1]

    assert decode_access_token(f"{header}.{forged}.{signature}") is None
    assert decode_access_token("not-a-token") is None


def test_expired_token_is_rejected():
    assert decode_access_token(create_access_token({"sub": "alice"}, expires_delta=-10)) is None


def test_password_hashing():
    hashed = hash_password("secret123")

    assert hashed != hash_password("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", None)
    assert not verify_password("secret123", "garbage")
