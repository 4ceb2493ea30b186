"""Pydantic models and result types for request options and outcomes."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Literal, Optional, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field

from . import env

T = TypeVar("T")
E = TypeVar("E")


class Options(BaseModel):
    """Per-request options. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(default_factory=lambda: env.settings.timeout, gt=0, description="Per-attempt timeout in seconds")
    on_error: Optional[Callable[[Any], Any]] = Field(None, description="Called once with a RequestFailed")
    on_success: Optional[Callable[[Any], Any]] = Field(None, description="Called once with the httpx.Response")
    server: str = Field(default_factory=lambda: env.settings.server, min_length=1, description="S3 host (without bucket)")
    protocol: Literal["http", "https"] = Field(default_factory=lambda: env.settings.protocol, description="URL scheme")
    aws_access_key_id: Optional[str] = Field(default_factory=lambda: env.settings.aws_access_key_id, description="Access key ID")
    aws_secret_access_key: Optional[str] = Field(default_factory=lambda: env.settings.aws_secret_access_key, description="Secret access key")
    retry_count: int = Field(default_factory=lambda: env.settings.retry_count, ge=0, description="Retries left for this operation")
    permissions: str = Field(default_factory=lambda: env.settings.permissions, description="Canned ACL sent on PUT")

    @property
    def needs_to_sign(self) -> bool:
        """Check if requests should carry an Authorization header."""
        return bool(self.aws_access_key_id)


@dataclass(frozen=True)
class AttemptState:
    """What an attempt re-sends when it is retried or redirected."""
    method: str
    data: Optional[bytes] = None
    redirects: int = 0


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying the error."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise RuntimeError(f"Called unwrap() on Err: {self.error}")


Result = Union[Ok[T], Err[E]]
