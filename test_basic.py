"""Basic tests for options, settings and request signing."""

import base64
import hashlib
import hmac
import os
import pytest
from unittest.mock import patch

from botocore.auth import HmacV1Auth

from s3item import env
from s3item.env import Settings
from s3item.models import Options, Ok, Err
from s3item.security import RequestSigner


FIXED_DATE = "Thu, 17 Nov 2005 18:49:58 GMT"


def _expected_signature(secret: str, string_to_sign: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("utf-8")


def test_options_defaults():
    """Test default option values."""
    options = Options()
    assert options.timeout == 10
    assert options.server == "s3.amazonaws.com"
    assert options.protocol == "https"
    assert options.retry_count == 4
    assert options.permissions == "private"
    assert options.on_success is None
    assert options.on_error is None
    assert options.aws_access_key_id is None
    assert not options.needs_to_sign


def test_options_reject_unknown_and_invalid_fields():
    """Test that Options validates its input."""
    with pytest.raises(ValueError):
        Options(bogus=1)
    with pytest.raises(ValueError):
        Options(protocol="ftp")
    with pytest.raises(ValueError):
        Options(retry_count=-1)
    with pytest.raises(ValueError):
        Options(server="")


def test_options_are_frozen():
    """Test that options cannot be changed after construction."""
    options = Options(retry_count=2)
    with pytest.raises(ValueError):
        options.retry_count = 1
    assert options.retry_count == 2


def test_settings():
    """Test environment settings."""
    with patch.dict(os.environ, {
        'S3ITEM_SERVER': 'minio.local',
        'S3ITEM_PROTOCOL': 'http',
        'S3ITEM_RETRY_COUNT': '1'
    }):
        settings = Settings()
        assert settings.server == 'minio.local'
        assert settings.protocol == 'http'
        assert settings.retry_count == 1
        assert settings.aws_access_key_id is None


def test_options_defaults_follow_settings():
    """Test that option defaults come from the active settings."""
    with patch.object(env, "settings", Settings(server="storage.example.com", retry_count=0)):
        options = Options()
        assert options.server == "storage.example.com"
        assert options.retry_count == 0


def test_result_types():
    """Test Ok/Err result helpers."""
    ok = Ok("value")
    assert ok.is_ok() and not ok.is_err()
    assert ok.unwrap() == "value"

    err = Err(ValueError("boom"))
    assert err.is_err() and not err.is_ok()
    with pytest.raises(RuntimeError):
        err.unwrap()


def test_signer_get():
    """Test signature for a plain GET."""
    signer = RequestSigner("AKID", "secret")
    with patch.object(HmacV1Auth, "_get_date", return_value=FIXED_DATE):
        headers = signer.sign("GET", "/bucket/photo.jpg")

    expected = _expected_signature("secret", f"GET\n\n\n{FIXED_DATE}\n/bucket/photo.jpg")
    assert headers["Date"] == FIXED_DATE
    assert headers["Authorization"] == f"AWS AKID:{expected}"


def test_signer_includes_amz_headers():
    """Test that x-amz-* headers are sent and signed."""
    signer = RequestSigner("AKID", "secret")
    with patch.object(HmacV1Auth, "_get_date", return_value=FIXED_DATE):
        headers = signer.sign("PUT", "/bucket/photo.jpg", {"x-amz-acl": "public-read"})

    expected = _expected_signature(
        "secret", f"PUT\n\n\n{FIXED_DATE}\nx-amz-acl:public-read\n/bucket/photo.jpg"
    )
    assert headers["x-amz-acl"] == "public-read"
    assert headers["Authorization"] == f"AWS AKID:{expected}"


def test_signer_requires_key_pair():
    """Test that signing without a secret is refused."""
    with pytest.raises(Exception):
        RequestSigner("AKID", None)


if __name__ == "__main__":
    pytest.main([__file__])
