"""Common constants used across the scanner."""

PORTAL_HOST = "suf.purs.gov.rs"
SPECIFICATIONS_PATH = "/specifications"

# Locale cookie the portal sets for interactive visitors
LOCALE_COOKIE_NAME = "localization"
DEFAULT_LOCALE = "sr-Cyrl-RS"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/136.0.0.0 Safari/537.36"
)


class ScanErrorCode(str):
    INVALID_URL = "INVALID_URL"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    FETCH_FAILED = "FETCH_FAILED"
    PROCESSING_ERROR = "PROCESSING_ERROR"


SCAN_ERROR_CODES = frozenset(
    {
        ScanErrorCode.INVALID_URL,
        ScanErrorCode.EXTRACTION_FAILED,
        ScanErrorCode.FETCH_FAILED,
        ScanErrorCode.PROCESSING_ERROR,
    }
)

# Client hints shared by both requests. Accept-Encoding is left to httpx so
# only encodings it can actually decode are advertised.
BROWSER_HINT_HEADERS = {
    "Sec-Ch-Ua": '"Chromium";v="136", "Brave";v="136", "Not.A/Brand";v="99"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Sec-Gpc": "1",
}

VIEWER_PAGE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,sr;q=0.8",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
}

SPECIFICATIONS_HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Priority": "u=1, i",
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-origin",
    "X-Requested-With": "XMLHttpRequest",
}
