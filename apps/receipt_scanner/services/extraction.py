"""
Scraping of the suf.purs.gov.rs viewer page.

The page carries everything needed for the follow-up request inside an
inline script (knockout view model calls) and the issuer details inside
labelled spans. Both are located with regular expressions; callers only
see parse_tokens() and parse_metadata(), so the patterns can be replaced
without touching the fetch logic.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from apps.receipt_scanner.schemas import ReceiptMetadata
from libs.common.html_utils import decode_html_entities

LOGGER = logging.getLogger(__name__)

_INVOICE_NUMBER_PATTERN = re.compile(r"viewModel\.InvoiceNumber\(['\"]([^'\"]+)['\"]\)")
_TOKEN_PATTERN = re.compile(r"viewModel\.Token\(['\"]([^'\"]+)['\"]\)")

_NON_DIGITS = re.compile(r"\D")

# ReceiptMetadata field -> element id on the viewer page
_TEXT_FIELDS: dict[str, str] = {
    "pib": "tinLabel",
    "shop_full_name": "shopFullNameLabel",
    "address": "addressLabel",
    "city": "cityLabel",
    "municipality": "administrativeUnitLabel",
    "requested_by": "requestedByLabel",
    "invoice_type": "invoiceTypeId",
    "transaction_type": "transactionTypeId",
    "total_amount": "totalAmountLabel",
    "invoice_counter_extension": "invoiceCounterExtensionLabel",
    "invoice_number": "invoiceNumberLabel",
    "signed_by": "signedByLabel",
    "sdc_date_time": "sdcDateTimeLabel",
}

_COUNTER_FIELDS: dict[str, str] = {
    "transaction_type_counter": "transactionTypeCounterLabel",
    "total_counter": "totalCounterLabel",
}

_BUYER_ID_ELEMENT = "buyerIdLabel"


@dataclass(frozen=True)
class ExtractedData:
    invoice_number: str
    token: str


def parse_tokens(html_content: str) -> ExtractedData | None:
    """Find the invoice number and request token assigned to the page's view model.

    Returns None unless both are present.
    """
    invoice_match = _INVOICE_NUMBER_PATTERN.search(html_content)
    token_match = _TOKEN_PATTERN.search(html_content)

    if not invoice_match or not token_match:
        LOGGER.debug(
            "View model tokens not found: invoice_number=%s, token=%s",
            bool(invoice_match),
            bool(token_match),
        )
        return None

    return ExtractedData(invoice_number=invoice_match.group(1), token=token_match.group(1))


def _element_text_pattern(element_id: str) -> re.Pattern[str]:
    return re.compile(
        rf"<[a-z][a-z0-9]*\s[^>]*?(?<![\w-])id=[\"']{re.escape(element_id)}[\"'][^>]*>\s*([^<]+)",
        re.IGNORECASE,
    )


def _text_by_id(html_content: str, element_id: str) -> str:
    match = _element_text_pattern(element_id).search(html_content)
    raw_text = match.group(1).strip() if match else ""
    return decode_html_entities(raw_text)


def _number_by_id(html_content: str, element_id: str) -> int:
    digits = _NON_DIGITS.sub("", _text_by_id(html_content, element_id))
    return int(digits) if digits else 0


def parse_metadata(html_content: str) -> ReceiptMetadata | None:
    """Read the issuer and transaction labels of the viewer page.

    Missing labels become empty strings (None for the buyer id, 0 for the
    counters). Metadata is supplementary, so any failure here is logged and
    reported as None instead of failing the scan.
    """
    try:
        values: dict[str, object] = {
            field: _text_by_id(html_content, element_id) for field, element_id in _TEXT_FIELDS.items()
        }
        values["buyer_id"] = _text_by_id(html_content, _BUYER_ID_ELEMENT) or None
        for field, element_id in _COUNTER_FIELDS.items():
            values[field] = _number_by_id(html_content, element_id)
        return ReceiptMetadata(**values)
    except Exception as e:
        LOGGER.warning("Failed to extract receipt metadata: %s", e, exc_info=True)
        return None
