"""Bucket addressing and URL construction for S3 requests."""

import re
from dataclasses import dataclass
from urllib.parse import quote

from ..constants import PROTOCOL_PORTS
from .constants import (
    S3_DNS_BUCKET_MIN_LENGTH,
    S3_DNS_BUCKET_MAX_LENGTH,
    S3_DNS_BUCKET_LABEL_PATTERN,
)

_LABEL_RE = re.compile(S3_DNS_BUCKET_LABEL_PATTERN)


@dataclass(frozen=True)
class Endpoint:
    """Where a single request goes."""
    host: str
    port: int
    path: str
    protocol: str

    @property
    def url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}{self.path}"


def is_dns_bucket(bucket: str) -> bool:
    """
    Check if a bucket can be addressed as a subdomain of the server.

    See http://docs.amazonwebservices.com/AmazonS3/2006-03-01/index.html?BucketRestrictions.html
    """
    if not S3_DNS_BUCKET_MIN_LENGTH <= len(bucket) <= S3_DNS_BUCKET_MAX_LENGTH:
        return False
    return all(_LABEL_RE.match(label) for label in bucket.split("."))


def encode_key(key: str) -> str:
    """Percent-encode an object key as a single path segment."""
    encoded = quote(key, safe="")
    # "." and ".." would be removed as dot segments on the wire
    if not key.strip("."):
        encoded = encoded.replace(".", "%2E")
    return encoded


def object_path(bucket: str, key: str, with_bucket: bool = True) -> str:
    """Build the request path, optionally prefixed with the bucket."""
    if with_bucket:
        return f"/{bucket}/{encode_key(key)}"
    return f"/{encode_key(key)}"


def port_for(protocol: str) -> int:
    return PROTOCOL_PORTS["https"] if protocol == "https" else PROTOCOL_PORTS["http"]


def resolve(bucket: str, key: str, server: str, protocol: str) -> Endpoint:
    """
    Resolve host, port and path for an object.

    Args:
        bucket: Bucket name
        key: Object key (unencoded)
        server: S3 host without the bucket
        protocol: "http" or "https"

    Returns:
        Endpoint for virtual-hosted-style addressing when the bucket allows it,
        path-style otherwise
    """
    if is_dns_bucket(bucket):
        host = f"{bucket}.{server}"
        path = object_path(bucket, key, with_bucket=False)
    else:
        host = server
        path = object_path(bucket, key)
    return Endpoint(host=host, port=port_for(protocol), path=path, protocol=protocol)
