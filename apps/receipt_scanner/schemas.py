from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from libs.common.constants import SCAN_ERROR_CODES


class PortalModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (matches the portal's JSON keys)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ReceiptItem(PortalModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    # total feeds the recomputed receipt total; everything else is passed through as sent
    total: float
    gtin: str | None = None
    name: str | None = None
    quantity: float | None = None
    unit_price: float | None = None
    label: str | None = None
    label_rate: float | None = None
    tax_base_amount: float | None = None
    vat_amount: float | None = None


class ReceiptMetadata(PortalModel):
    pib: str = ""
    shop_full_name: str = ""
    address: str = ""
    city: str = ""
    municipality: str = ""
    buyer_id: str | None = None
    requested_by: str = ""
    invoice_type: str = ""
    transaction_type: str = ""
    total_amount: str = ""  # as printed on the page, not parsed
    transaction_type_counter: int = 0
    total_counter: int = 0
    invoice_counter_extension: str = ""
    invoice_number: str = ""
    signed_by: str = ""
    sdc_date_time: str = ""


class Receipt(PortalModel):
    success: bool
    items: list[ReceiptItem] | None = None
    invoice_number: str | None = None
    total_amount: float | None = None  # always recomputed from items
    item_count: int | None = None
    metadata: ReceiptMetadata | None = None


class ScanResult(PortalModel):
    success: bool
    message: str
    data: Receipt | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_outcome(self):
        if self.success:
            if self.data is None or self.error is not None:
                raise ValueError("successful scan result must carry data and no error code")
        else:
            if self.data is not None:
                raise ValueError("failed scan result must not carry data")
            if self.error not in SCAN_ERROR_CODES:
                raise ValueError(f"unknown scan error code: {self.error!r}")
        return self

    @classmethod
    def ok(cls, receipt: Receipt, message: str = "Receipt scanned successfully") -> "ScanResult":
        return cls(success=True, message=message, data=receipt)

    @classmethod
    def failure(cls, error: str, message: str) -> "ScanResult":
        return cls(success=False, message=message, error=error)

    def as_payload(self) -> dict[str, Any]:
        """camelCase dict with absent fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)
