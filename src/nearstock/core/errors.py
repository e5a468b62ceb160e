"""
Error taxonomy for the stock-check pipeline.

Each pipeline stage raises one of these types so the cause can be logged precisely,
while `status_code` + `body()` collapse it to the coarse response clients see.
"""

from __future__ import annotations

from typing import Any

SERVER_ERROR_BODY = {"error": "Server error"}


class StockCheckError(Exception):
    """Base class; defaults to the generic 500 response."""

    status_code = 500

    def body(self) -> dict[str, Any]:
        return dict(SERVER_ERROR_BODY)


class InputError(StockCheckError):
    """A required request parameter is missing or empty."""

    status_code = 400

    def __init__(self, message: str = "Missing pincode or productId"):
        super().__init__(message)
        self.message = message

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


class GeocodeNotFoundError(StockCheckError):
    """The geocoding provider returned no candidates for the pincode.

    Answers with the generic 500 unless the deployment opts into 404
    (`errors.geocode_miss_as_not_found`); see `as_not_found`.
    """

    message = "No coordinates found for the given pincode."

    def __init__(self, pincode: str):
        super().__init__(f"{self.message} (pincode={pincode!r})")
        self.pincode = pincode

    def as_not_found(self) -> "NotFoundError":
        return NotFoundError(self.message)


class UpstreamTransportError(StockCheckError):
    """Network, status or decoding failure while calling an upstream service."""

    def __init__(self, service: str, detail: str):
        super().__init__(f"{service}: {detail}")
        self.service = service
        self.detail = detail


class UpstreamTimeoutError(UpstreamTransportError):
    """The upstream call exceeded `app.http_timeout_seconds`."""


class UpstreamLogicError(StockCheckError):
    """The commerce platform answered, but with an error payload."""

    def __init__(self, payload: Any, *, status: int | None = None):
        super().__init__(f"commerce query failed (status={status}): {payload!r}")
        self.payload = payload
        self.status = status

    def body(self) -> dict[str, Any]:
        return {"error": self.payload}


class CommerceConfigError(StockCheckError):
    """The commerce credential is not configured."""


class NotFoundError(StockCheckError):
    status_code = 404

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__("Product not found")
        self.product_id = product_id


class NoWarehouseError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No warehouse found near the provided pincode.")
