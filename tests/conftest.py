import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from libs.common.config import ScannerSettings, get_settings

RECEIPT_URL = "https://suf.purs.gov.rs/v/?vl=A0VSVUlYSTJRQ0ZSVUlYSTJRQ0Y"

VIEWER_HTML = """<!DOCTYPE html>
<html>
<head><title>Провера рачуна</title></head>
<body>
  <div class="invoice-info">
    <span id="tinLabel" class="form-control">100002548</span>
    <span id="shopFullNameLabel">1234567-Maxi&#32;Beograd &amp; Co</span>
    <span id="addressLabel">Булевар краља Александра 1</span>
    <span id="cityLabel">Београд</span>
    <span id="administrativeUnitLabel">Палилула</span>
    <span id="requestedByLabel">RUIXI2QC</span>
    <span id="invoiceTypeId">Промет</span>
    <span id="transactionTypeId">Продаја</span>
    <span id="totalAmountLabel">350,00</span>
    <span id="transactionTypeCounterLabel">12.345</span>
    <span id="totalCounterLabel">67890</span>
    <span id="invoiceCounterExtensionLabel">ПП</span>
    <span id="invoiceNumberLabel">RUIXI2QC-RUIXI2QC-12345</span>
    <span id="signedByLabel">RUIXI2QC</span>
    <span id="sdcDateTimeLabel">
        19.10.2026. 12:30:45
    </span>
  </div>
  <script type="text/javascript">
    $(document).ready(function () {
        viewModel.InvoiceNumber('RUIXI2QC-RUIXI2QC-12345');
        viewModel.Token("0f4c9e1a-7b2d-4e7a-9c3f-1d2e3f4a5b6c");
        ko.applyBindings(viewModel);
    });
  </script>
</body>
</html>
"""


@pytest.fixture
def settings() -> ScannerSettings:
    get_settings.cache_clear()
    return ScannerSettings()


@pytest.fixture
def receipt_url() -> str:
    return RECEIPT_URL


@pytest.fixture
def viewer_html() -> str:
    return VIEWER_HTML


@pytest.fixture
def specifications_payload() -> dict[str, Any]:
    return {
        "success": True,
        "totalAmount": 999999,
        "itemCount": 7,
        "items": [
            {
                "gtin": "8600043003356",
                "name": "Хлеб бели 500г/КОМ",
                "quantity": 1,
                "total": 100,
                "unitPrice": 100,
                "label": "Е",
                "labelRate": 10,
                "taxBaseAmount": 90.91,
                "vatAmount": 9.09,
            },
            {
                "gtin": 8606012345678,
                "name": "Млеко 2,8% 1л/КОМ",
                "quantity": 2,
                "total": 250,
                "unitPrice": 125,
                "label": "Ђ",
                "labelRate": 20,
                "taxBaseAmount": 208.33,
                "vatAmount": 41.67,
            },
        ],
    }
