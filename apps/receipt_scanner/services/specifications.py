from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from apps.receipt_scanner.exceptions import PursResponseError, PursTransportError
from apps.receipt_scanner.schemas import Receipt, ReceiptItem
from apps.receipt_scanner.services.cookies import SessionCookies
from apps.receipt_scanner.services.extraction import ExtractedData
from libs.common.config import ScannerSettings
from libs.common.constants import BROWSER_HINT_HEADERS, SPECIFICATIONS_HEADERS
from libs.common.logging import log_extra

LOGGER = logging.getLogger(__name__)


def _mask(token: str) -> str:
    return f"{token[:8]}..." if len(token) > 8 else "***"


def specifications_headers(referer_url: str, cookies: SessionCookies, settings: ScannerSettings) -> dict[str, str]:
    return {
        **SPECIFICATIONS_HEADERS,
        **BROWSER_HINT_HEADERS,
        "Cookie": cookies.header_value(),
        "Origin": settings.portal_base_url,
        "Referer": referer_url,
        "User-Agent": settings.user_agent,
    }


def build_receipt(payload: dict[str, Any], invoice_number: str) -> Receipt:
    """
    Normalize a specifications payload.

    The upstream totalAmount/itemCount keys are ignored: for a successful
    payload with items, the total is the sum of the item totals.

    Raises:
        PursResponseError: If an item does not have the expected shape
    """
    success = bool(payload.get("success"))
    if not success:
        return Receipt(success=False)

    raw_items = payload.get("items") or []
    if not isinstance(raw_items, list):
        raise PursResponseError(f"Specifications items must be a list, got {type(raw_items).__name__}")

    try:
        items = [ReceiptItem.model_validate(item) for item in raw_items]
    except ValidationError as e:
        raise PursResponseError(f"Malformed receipt item in specifications response: {e}") from e

    if not items:
        return Receipt(success=True, items=items)

    return Receipt(
        success=True,
        items=items,
        invoice_number=invoice_number,
        total_amount=sum(item.total for item in items),
        item_count=len(items),
    )


async def fetch_specifications(
    client: httpx.AsyncClient,
    referer_url: str,
    extracted: ExtractedData,
    cookies: SessionCookies,
    settings: ScannerSettings,
) -> Receipt | None:
    """
    Request the line items of a receipt from the specifications endpoint.

    Args:
        client: HTTP client shared by the scanner
        referer_url: Receipt URL the tokens were scraped from
        extracted: Invoice number and token from the viewer page
        cookies: Cookie tracker filled by the viewer page request
        settings: Scanner settings (endpoint, user agent)

    Returns:
        Normalized Receipt, or None if the endpoint did not answer with 200

    Raises:
        PursTransportError: If the request fails or the portal answers with status >= 400
        PursResponseError: If the response body is not a JSON object
    """
    specs_url = settings.specifications_url
    form_data = {"invoiceNumber": extracted.invoice_number, "token": extracted.token}

    LOGGER.info(
        "Requesting receipt specifications:\n"
        "  Request URL: %s\n"
        "  Method: POST\n"
        "  Payload: invoiceNumber=%s, token=%s",
        specs_url,
        extracted.invoice_number,
        _mask(extracted.token),
        extra=log_extra(),
    )

    start_time = time.time()
    try:
        response = await client.post(
            specs_url,
            data=form_data,
            headers=specifications_headers(referer_url, cookies, settings),
        )
        elapsed_time = time.time() - start_time

        LOGGER.info(
            "Specifications response received:\n"
            "  Request URL: %s\n"
            "  Status Code: %d\n"
            "  Response Time: %.3f seconds\n"
            "  Response Size: %d bytes",
            specs_url,
            response.status_code,
            elapsed_time,
            len(response.content),
            extra=log_extra(),
        )

        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        error_msg = f"Failed to fetch receipt specifications: portal returned status {e.response.status_code}"
        LOGGER.error(
            "Specifications error:\n"
            "  Request URL: %s\n"
            "  Status Code: %d\n"
            "  Response Body: %s",
            specs_url,
            e.response.status_code,
            e.response.text[:500] if e.response.text else "No response body",
            extra=log_extra(),
        )
        raise PursTransportError(error_msg, status_code=e.response.status_code) from e
    except httpx.HTTPError as e:
        elapsed_time = time.time() - start_time
        LOGGER.error(
            "Specifications request error:\n"
            "  Request URL: %s\n"
            "  Response Time: %.3f seconds\n"
            "  Error: %s",
            specs_url,
            elapsed_time,
            e,
            extra=log_extra(),
        )
        raise PursTransportError(f"Failed to fetch receipt specifications: {e}") from e

    if response.status_code != 200:
        LOGGER.warning("Specifications answered with status %d", response.status_code, extra=log_extra())
        return None

    try:
        payload = response.json()
    except ValueError as e:
        raise PursResponseError(f"Failed to fetch receipt specifications: response is not valid JSON ({e})") from e

    if not isinstance(payload, dict):
        raise PursResponseError(
            f"Failed to fetch receipt specifications: expected a JSON object, got {type(payload).__name__}"
        )

    receipt = build_receipt(payload, extracted.invoice_number)
    LOGGER.info(
        "Specifications parsed: success=%s, items=%s, total=%s",
        receipt.success,
        receipt.item_count,
        receipt.total_amount,
        extra=log_extra(),
    )
    return receipt
