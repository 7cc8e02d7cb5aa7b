"""Client for the suf.purs.gov.rs fiscal receipt verification portal."""

from apps.receipt_scanner.exceptions import PursError, PursResponseError, PursTransportError
from apps.receipt_scanner.schemas import Receipt, ReceiptItem, ReceiptMetadata, ScanResult
from apps.receipt_scanner.services.scanner import ReceiptScanner, scan_receipt

__all__ = [
    "ReceiptScanner",
    "scan_receipt",
    "ScanResult",
    "Receipt",
    "ReceiptItem",
    "ReceiptMetadata",
    "PursError",
    "PursTransportError",
    "PursResponseError",
]
