"""
Commerce inventory client (Shopify Admin GraphQL).

This module is responsible only for:
- sending the product inventory query with the access token,
- classifying upstream failures into the pipeline's error types,
- returning the raw `product` payload.

Flattening the payload into records lives in `nearstock.inventory.flatten`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nearstock.config.settings import Settings
from nearstock.core.errors import (
    CommerceConfigError,
    ProductNotFoundError,
    UpstreamLogicError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from nearstock.core.http import post_json
from nearstock.inventory.flatten import AVAILABLE_BUCKET

logger = logging.getLogger(__name__)

SERVICE = "commerce"
DEFAULT_ERROR_PAYLOAD = "Error fetching product data"

PRODUCT_INVENTORY_QUERY = """
query getProductById($productId: ID!) {
  product(id: $productId) {
    id
    title
    variants(first: %(variants_first)d) {
      edges {
        node {
          id
          title
          inventoryItem {
            inventoryLevels(first: %(levels_first)d) {
              edges {
                node {
                  location {
                    id
                    name
                  }
                  quantities(names: [%(bucket)s]) {
                    name
                    quantity
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""


def build_query(settings: Settings) -> str:
    commerce = settings.commerce
    return PRODUCT_INVENTORY_QUERY % {
        "variants_first": commerce.variants_first,
        "levels_first": commerce.inventory_levels_first,
        "bucket": f'"{AVAILABLE_BUCKET}"',
    }


def _error_payload(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_PAYLOAD
    if isinstance(body, dict) and body.get("errors"):
        return body["errors"]
    return DEFAULT_ERROR_PAYLOAD


class CommerceClient:
    """Fetches per-location inventory for one product."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._query = build_query(settings)

    def _require_token(self) -> str:
        token = self._settings.commerce.access_token
        if not token:
            raise CommerceConfigError("Commerce access token is not configured. Set SHOPIFY_API_KEY.")
        return token

    def fetch_product(self, product_id: str) -> dict[str, Any]:
        """Return the `product` object for `product_id`.

        Raises:
            ProductNotFoundError: The catalog has no such product.
            UpstreamLogicError: Non-2xx status or a GraphQL `errors` payload.
            UpstreamTransportError: Network failure or undecodable response.
        """
        token = self._require_token()
        try:
            result = post_json(
                self._settings.commerce.api_url,
                payload={"query": self._query, "variables": {"productId": product_id}},
                headers={"X-Shopify-Access-Token": token},
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("Commerce query returned status=%s for product %s", status, product_id)
            raise UpstreamLogicError(_error_payload(exc.response), status=status) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(SERVICE, f"timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(SERVICE, str(exc)) from exc
        except ValueError as exc:
            raise UpstreamTransportError(SERVICE, f"invalid JSON: {exc}") from exc

        if not isinstance(result, dict):
            raise UpstreamTransportError(SERVICE, f"expected an object, got {type(result).__name__}")

        data = result.get("data")
        if not isinstance(data, dict):
            if result.get("errors"):
                raise UpstreamLogicError(result["errors"], status=200)
            raise UpstreamTransportError(SERVICE, "response has no data object")
        if result.get("errors"):
            logger.warning("Commerce query returned partial errors for %s: %r", product_id, result["errors"])

        product = data.get("product")
        if not product:
            raise ProductNotFoundError(product_id)
        return product
