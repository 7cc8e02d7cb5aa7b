from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from apps.receipt_scanner.exceptions import PursTransportError
from apps.receipt_scanner.schemas import ReceiptMetadata
from apps.receipt_scanner.services.cookies import SessionCookies
from apps.receipt_scanner.services.extraction import ExtractedData, parse_metadata, parse_tokens
from libs.common.config import ScannerSettings
from libs.common.constants import BROWSER_HINT_HEADERS, VIEWER_PAGE_HEADERS
from libs.common.logging import log_extra

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerPage:
    extracted: ExtractedData
    metadata: ReceiptMetadata | None


def viewer_page_headers(settings: ScannerSettings) -> dict[str, str]:
    return {**VIEWER_PAGE_HEADERS, **BROWSER_HINT_HEADERS, "User-Agent": settings.user_agent}


async def fetch_viewer_page(
    client: httpx.AsyncClient,
    receipt_url: str,
    cookies: SessionCookies,
    settings: ScannerSettings,
) -> ViewerPage | None:
    """
    Load the receipt viewer page and scrape what the specifications request needs.

    Args:
        client: HTTP client shared by the scanner
        receipt_url: Receipt URL from the fiscal QR code
        cookies: Cookie tracker of the current scan; filled from the response
        settings: Scanner settings (user agent)

    Returns:
        ViewerPage with tokens and metadata, or None if the page did not
        answer with 200 or the view model tokens are missing

    Raises:
        PursTransportError: If the request fails or the portal answers with status >= 400
    """
    LOGGER.info("Requesting receipt viewer page: url=%s", receipt_url, extra=log_extra())

    start_time = time.time()
    try:
        response = await client.get(receipt_url, headers=viewer_page_headers(settings))
        elapsed_time = time.time() - start_time

        LOGGER.info(
            "Viewer page response received:\n"
            "  Request URL: %s\n"
            "  Status Code: %d\n"
            "  Response Time: %.3f seconds\n"
            "  Response Size: %d bytes",
            receipt_url,
            response.status_code,
            elapsed_time,
            len(response.content),
            extra=log_extra(),
        )

        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        LOGGER.error(
            "Viewer page returned error status %d: url=%s",
            e.response.status_code,
            receipt_url,
            extra=log_extra(),
        )
        raise PursTransportError(
            f"Failed to extract invoice data: portal returned status {e.response.status_code}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        elapsed_time = time.time() - start_time
        LOGGER.error(
            "Viewer page request error:\n"
            "  Request URL: %s\n"
            "  Response Time: %.3f seconds\n"
            "  Error: %s",
            receipt_url,
            elapsed_time,
            e,
            extra=log_extra(),
        )
        raise PursTransportError(f"Failed to extract invoice data: {e}") from e

    if response.status_code != 200:
        LOGGER.warning("Viewer page answered with status %d, nothing to extract", response.status_code, extra=log_extra())
        return None

    cookies.update_from_response(response)

    html_content = response.text
    extracted = parse_tokens(html_content)
    if extracted is None:
        LOGGER.warning("Invoice number or token not found in viewer page: url=%s", receipt_url, extra=log_extra())
        return None

    metadata = parse_metadata(html_content)
    LOGGER.info(
        "Viewer page parsed: invoice_number=%s, metadata=%s",
        extracted.invoice_number,
        "found" if metadata else "missing",
        extra=log_extra(),
    )
    return ViewerPage(extracted=extracted, metadata=metadata)
