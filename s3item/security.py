"""HMAC request signing for S3 using botocore's signature v2 signer."""

import logging
from typing import Dict, Optional

from botocore.auth import HmacV1Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.exceptions import NoCredentialsError

from .constants import DEFAULT_SERVER

logger = logging.getLogger(__name__)


class RequestSigner:
    """Compute S3 authentication headers for a request."""

    def __init__(self, access_key_id: str, secret_access_key: Optional[str]):
        """
        Initialize signer with credentials.

        Args:
            access_key_id: AWS access key ID
            secret_access_key: AWS secret access key
        """
        if not access_key_id or not secret_access_key:
            logger.error("Signing requested without a complete key pair")
            raise NoCredentialsError()
        self._auth = HmacV1Auth(Credentials(access_key_id, secret_access_key))

    def sign(self, method: str, path: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Sign a request.

        Args:
            method: HTTP method
            path: Bucket-qualified, encoded object path (e.g. /bucket/key)
            headers: Extra headers to send and sign, such as x-amz-acl

        Returns:
            Headers to send, including Date and Authorization
        """
        request = AWSRequest(method=method, url=f"https://{DEFAULT_SERVER}{path}", headers=dict(headers or {}))
        # The canonical resource is always /bucket/key, even for virtual-hosted requests
        request.auth_path = path
        self._auth.add_auth(request)
        return dict(request.headers.items())
