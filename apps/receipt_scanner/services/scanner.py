from __future__ import annotations

import logging
from http.cookiejar import CookieJar, DefaultCookiePolicy
from uuid import uuid4

import httpx

from apps.receipt_scanner.schemas import ScanResult
from apps.receipt_scanner.services.cookies import SessionCookies
from apps.receipt_scanner.services.specifications import fetch_specifications
from apps.receipt_scanner.services.viewer_page import fetch_viewer_page
from libs.common.config import ScannerSettings, get_settings
from libs.common.constants import ScanErrorCode
from libs.common.logging import log_extra, set_correlation_id

LOGGER = logging.getLogger(__name__)


def create_http_client(settings: ScannerSettings) -> httpx.AsyncClient:
    """Client shared by all scans of a scanner.

    Its cookie jar accepts nothing: each scan replays its own SessionCookies,
    so one scan's session never reaches another.
    """
    detached_jar = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    return httpx.AsyncClient(
        timeout=settings.request_timeout,
        follow_redirects=True,
        cookies=detached_jar,
    )


class ReceiptScanner:
    """Scans fiscal receipts published on suf.purs.gov.rs.

    Each scan logs under its own correlation id; call
    libs.common.configure_logging() to get it printed with every record.
    """

    def __init__(
        self,
        settings: ScannerSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or create_http_client(self.settings)

    async def scan(self, receipt_url: str) -> ScanResult:
        """
        Fetch a receipt and return it in a ScanResult envelope.

        Never raises: every failure is reported through ScanResult.error.
        """
        if not receipt_url or self.settings.portal_host not in receipt_url:
            LOGGER.warning("Rejected receipt URL: %r", receipt_url)
            return ScanResult.failure(
                ScanErrorCode.INVALID_URL,
                f"Invalid receipt URL. Must be from {self.settings.portal_host}",
            )

        set_correlation_id(uuid4().hex[:12])
        try:
            return await self._scan(receipt_url)
        except Exception as e:
            LOGGER.error("Error processing receipt: url=%s, error=%s", receipt_url, e, exc_info=True, extra=log_extra())
            return ScanResult.failure(ScanErrorCode.PROCESSING_ERROR, f"Error processing receipt: {e}")
        finally:
            set_correlation_id(None)

    async def _scan(self, receipt_url: str) -> ScanResult:
        cookies = SessionCookies(default_locale=self.settings.default_locale)

        viewer_page = await fetch_viewer_page(self._client, receipt_url, cookies, self.settings)
        if viewer_page is None:
            return ScanResult.failure(
                ScanErrorCode.EXTRACTION_FAILED,
                "Could not extract invoice data from receipt URL",
            )

        receipt = await fetch_specifications(
            self._client,
            receipt_url,
            viewer_page.extracted,
            cookies,
            self.settings,
        )
        if receipt is None or not receipt.success:
            return ScanResult.failure(ScanErrorCode.FETCH_FAILED, "Failed to fetch receipt specifications")

        receipt = receipt.model_copy(update={"metadata": viewer_page.metadata})
        LOGGER.info(
            "Receipt scanned: invoice_number=%s, items=%s, total=%s",
            receipt.invoice_number,
            receipt.item_count,
            receipt.total_amount,
            extra=log_extra(),
        )
        return ScanResult.ok(receipt)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ReceiptScanner":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


async def scan_receipt(receipt_url: str, settings: ScannerSettings | None = None) -> ScanResult:
    """One-off scan with a scanner that is closed afterwards."""
    async with ReceiptScanner(settings=settings) as scanner:
        return await scanner.scan(receipt_url)
