# This file implements the static API key check that gates every request.
# It exists so the accept/reject decision is a plain function that can be tested without HTTP plumbing.
# The middleware in app.py runs this stage before routing and renders rejections as JSON.

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import JSONResponse

LOGGER = logging.getLogger("price_api.auth")

MISSING_KEY_MESSAGE = "Missing API key"
INVALID_KEY_MESSAGE = "Invalid API key"


@dataclass(frozen=True)
class Continue:
    """The request passed authentication and should be routed unchanged."""

    request: Request


@dataclass(frozen=True)
class Reject:
    """The request must be answered immediately with an error response."""

    status_code: int
    message: str

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content={"error": self.message})


AuthDecision = Continue | Reject


def authenticate(request: Request, *, header_name: str, expected_key: str) -> AuthDecision:
    """Compare the request's API key header against the configured secret.

    A missing or empty header is rejected with 401, any other mismatch with 403.
    """

    supplied = request.headers.get(header_name)
    if not supplied:
        LOGGER.info("rejected request without api key path=%s", request.url.path)
        return Reject(status_code=401, message=MISSING_KEY_MESSAGE)
    if not hmac.compare_digest(supplied.encode("utf-8"), expected_key.encode("utf-8")):
        LOGGER.info("rejected request with invalid api key path=%s", request.url.path)
        return Reject(status_code=403, message=INVALID_KEY_MESSAGE)
    return Continue(request=request)
