"""Classification of delivered S3 responses."""

from enum import Enum

from .constants import S3_RETRYABLE_STATUS_CODES, S3_REDIRECT_STATUS_CODES


class Category(str, Enum):
    """What the controller should do with a finished attempt."""
    SUCCESS = "success"
    RETRYABLE = "retryable"
    REDIRECT = "redirect"
    TERMINAL = "terminal"


def classify(status_code: int) -> Category:
    """
    Map a delivered status code to a category.

    Anything outside the retryable and redirect tables counts as success,
    including unlisted 4xx codes. Transport failures never get here; they
    are TERMINAL.
    """
    if status_code in S3_RETRYABLE_STATUS_CODES:
        return Category.RETRYABLE
    if status_code in S3_REDIRECT_STATUS_CODES:
        return Category.REDIRECT
    return Category.SUCCESS
