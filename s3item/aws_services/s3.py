"""Asynchronous S3 object requests with retry and redirect handling."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from ..constants import MAX_REDIRECTS
from ..exceptions import (
    ConfigurationError,
    RedirectError,
    RequestFailed,
    RetriesExhausted,
    TransportFailed,
)
from ..models import AttemptState, Err, Ok, Options, Result
from ..security import RequestSigner
from .classifier import Category, classify
from .constants import S3_ACL_HEADER, S3_PRIVATE_ACL, S3_SUPPORTED_METHODS
from .endpoint import Endpoint, is_dns_bucket, object_path, resolve

OptionsInput = Union[Options, Mapping[str, Any], None]


class Item:
    """
    One object in one bucket, plus the options used to reach it.

    An Item is read-only once built. Retries and redirects never touch it;
    they build a fresh Item with the changed option and dispatch that one.
    """

    def __init__(
        self,
        bucket: str,
        key: str,
        options: OptionsInput = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        signer: Optional[RequestSigner] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize and validate an item.

        Args:
            bucket: Bucket name
            key: Object key (unencoded)
            options: Option overrides, or a prebuilt Options
            client: Shared httpx client; a short-lived one is opened per attempt if omitted
            signer: Signer to use instead of one built from the credentials
            logger: Logger for this operation and every attempt it spawns

        Raises:
            ConfigurationError: If bucket, key or options are invalid
        """
        self.bucket = "" if bucket is None else str(bucket)
        self.key = "" if key is None else str(key)
        self.logger = logger or logging.getLogger(__name__)
        self._client = client
        self._signer = signer

        if not self.bucket:
            raise ConfigurationError("need a bucket name")
        if not self.key:
            raise ConfigurationError("need an object key")

        self.options = self._build_options(options)

        if self.options.needs_to_sign and self._signer is None and not self.options.aws_secret_access_key:
            raise ConfigurationError("need aws_secret_access_key to sign requests")

    @staticmethod
    def _build_options(options: OptionsInput) -> Options:
        if isinstance(options, Options):
            return options
        try:
            return Options.model_validate(dict(options or {}))
        except ValidationError as e:
            raise ConfigurationError(f"invalid options: {e}", errors=e.errors()) from e

    def __repr__(self) -> str:
        return f"Item(bucket={self.bucket!r}, key={self.key!r}, server={self.options.server!r})"

    # Addressing

    @property
    def endpoint(self) -> Endpoint:
        return resolve(self.bucket, self.key, self.options.server, self.options.protocol)

    @property
    def url(self) -> str:
        return self.endpoint.url

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int:
        return self.endpoint.port

    @property
    def path(self) -> str:
        """Request path as sent on the wire."""
        return self.endpoint.path

    @property
    def auth_path(self) -> str:
        """Bucket-qualified path used as the signing resource."""
        return object_path(self.bucket, self.key)

    @property
    def is_dns_bucket(self) -> bool:
        return is_dns_bucket(self.bucket)

    @property
    def signer(self) -> RequestSigner:
        """Get request signer with lazy initialization."""
        if self._signer is None:
            self._signer = RequestSigner(self.options.aws_access_key_id, self.options.aws_secret_access_key)
        return self._signer

    # Public operations

    def get(self) -> "asyncio.Task[Result]":
        """Schedule a GET and return immediately."""
        return self._schedule("GET")

    def put(self, data: Union[bytes, str]) -> "asyncio.Task[Result]":
        """Schedule a PUT of ``data`` and return immediately."""
        return self._schedule("PUT", data)

    def delete(self) -> "asyncio.Task[Result]":
        """Schedule a DELETE and return immediately."""
        return self._schedule("DELETE")

    def _schedule(self, method: str, data: Optional[Union[bytes, str]] = None) -> "asyncio.Task[Result]":
        loop = asyncio.get_running_loop()
        return loop.create_task(self.request(method, data))

    async def request(self, method: str, data: Optional[Union[bytes, str]] = None) -> Result:
        """
        Run one logical operation to completion.

        Transient errors are retried while the retry budget lasts, redirects
        are followed, and exactly one of ``on_success`` / ``on_error`` is
        called at the end.

        Args:
            method: GET, PUT or DELETE
            data: Body for PUT

        Returns:
            Ok(response) on success, Err(RequestFailed) otherwise

        Raises:
            RedirectError: If a redirect target cannot be understood, or too many redirects
            ConfigurationError: If a rewritten attempt fails validation
        """
        method = method.upper()
        if method not in S3_SUPPORTED_METHODS:
            raise ValueError(f"unknown http method {method}")

        item = self
        state = AttemptState(method=method, data=data)
        while True:
            attempt = await item._dispatch(state.method, state.data)
            category = classify(attempt.value.status_code) if attempt.is_ok() else Category.TERMINAL

            if category is Category.TERMINAL:
                error = TransportFailed(
                    f"{state.method} {item.url} failed: {attempt.error!r}",
                    method=state.method,
                    url=item.url,
                )
                error.__cause__ = attempt.error
                return item._fail(error)

            response = attempt.value

            if category is Category.RETRYABLE:
                if not item.should_retry:
                    error = RetriesExhausted(
                        f"{state.method} {item.url} returned {response.status_code} with no retries left",
                        method=state.method,
                        url=item.url,
                        response=response,
                    )
                    item.logger.error(f"Re-tried too often - giving up: {error.to_dict()}")
                    return item._fail(error)
                item.logger.debug(f"retrying after: status {response.status_code}")
                item = item._retry()

            elif category is Category.REDIRECT:
                location = response.headers.get("location")
                item.logger.info(f"being redirected to: {location}")
                if state.redirects >= MAX_REDIRECTS:
                    raise RedirectError(f"too many redirects ({MAX_REDIRECTS}) for {state.method} {self.url}", location)
                item = item._redirect(location)
                state = AttemptState(method=state.method, data=state.data, redirects=state.redirects + 1)

            else:
                return item._succeed(response)

    # Dispatch

    def _headers(self, method: str) -> Dict[str, str]:
        if not self.options.needs_to_sign:
            return {}
        extra = {}
        if method == "PUT" and self.options.permissions != S3_PRIVATE_ACL:
            extra[S3_ACL_HEADER] = self.options.permissions
        return self.signer.sign(method, self.auth_path, extra)

    async def _dispatch(self, method: str, data: Optional[Union[bytes, str]] = None) -> Result:
        """
        Issue exactly one HTTP request.

        Returns:
            Ok(httpx.Response) for any delivered response, Err(httpx.TransportError) otherwise
        """
        url = self.url
        headers = self._headers(method)
        self.logger.debug(f"{method} {url}")

        try:
            if self._client is not None:
                response = await self._send(self._client, method, url, headers, data)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._send(client, method, url, headers, data)
        except httpx.TransportError as e:
            self.logger.warning(f"{method} {url} failed: {e!r}")
            return Err(e)

        self.logger.debug(f"Response {response.status_code}")
        return Ok(response)

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[Union[bytes, str]],
    ) -> httpx.Response:
        return await client.request(
            method,
            url,
            headers=headers,
            content=data if method == "PUT" else None,
            timeout=self.options.timeout,
            follow_redirects=False,
        )

    # Retry / redirect bookkeeping

    @property
    def should_retry(self) -> bool:
        return self.options.retry_count > 0

    def _spawn(self, **overrides: Any) -> "Item":
        """Build the next attempt's item with some options replaced."""
        options = {name: getattr(self.options, name) for name in Options.model_fields}
        options.update(overrides)
        return self.__class__(
            self.bucket,
            self.key,
            options,
            client=self._client,
            signer=self._signer,
            logger=self.logger,
        )

    def _retry(self) -> "Item":
        return self._spawn(retry_count=self.options.retry_count - 1)

    def _redirect(self, location: Optional[str]) -> "Item":
        new_server, _ = self.extract_location(location)
        return self._spawn(server=new_server)

    def extract_location(self, location: Optional[str]) -> Tuple[str, str]:
        """
        Split a redirect target into a new server and object path.

        Args:
            location: Location header of a 3xx response

        Returns:
            (server, path) with the leading slash removed from path

        Raises:
            RedirectError: If the target does not address this bucket
        """
        if not location:
            raise RedirectError("being redirected without a Location header", location)

        # hostname is lowercased and drops any port; the next attempt uses the protocol's port
        parts = urlsplit(location)
        host = parts.hostname or ""
        prefix = f"{self.bucket}."

        if host.startswith(prefix) and len(host) > len(prefix):
            server = host[len(prefix):]
            path = parts.path
        elif parts.path.startswith(f"/{self.bucket}/"):
            server = host
            path = parts.path[len(self.bucket) + 2:]
        else:
            raise RedirectError(f"being redirected to a place not understood: {location}", location)

        return server, path[1:] if path.startswith("/") else path

    # Completion

    def _succeed(self, response: httpx.Response) -> Result:
        if self.options.on_success is not None:
            self.options.on_success(response)
        return Ok(response)

    def _fail(self, error: RequestFailed) -> Result:
        if self.options.on_error is not None:
            self.options.on_error(error)
        return Err(error)
