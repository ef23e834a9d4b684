from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


HTTP_TO_KLIQ_CODE = {
    400: "KLIQ-400",
    401: "KLIQ-401",
    403: "KLIQ-403",
    404: "KLIQ-404",
    422: "KLIQ-422",
    500: "KLIQ-500",
}


@dataclass(frozen=True)
class KliqError:
    error_id: str
    error_code: str
    message: str
    retryable: bool

    def to_response(self) -> dict:
        return {
            "id": self.error_id,
            "code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
        }


def build_error(status_code: int, message: str, *, retryable: bool = False) -> KliqError:
    return KliqError(
        error_id=f"err_{uuid4().hex[:12]}",
        error_code=HTTP_TO_KLIQ_CODE.get(status_code, "KLIQ-500"),
        message=message,
        retryable=retryable,
    )


class CacheError(Exception):
    """Base for errors raised by the cache layer itself."""

    status_code = 500
    retryable = False

    def to_error(self) -> KliqError:
        return build_error(self.status_code, str(self), retryable=self.retryable)


class InvalidArgument(CacheError, ValueError):
    """Malformed input handed to the cache layer (empty key, bad option).

    A caller bug: surfaced as 400 and never worth retrying.
    """

    status_code = 400
