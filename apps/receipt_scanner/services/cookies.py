from __future__ import annotations

import logging
from typing import Sequence

import httpx

from libs.common.constants import DEFAULT_LOCALE, LOCALE_COOKIE_NAME

LOGGER = logging.getLogger(__name__)


class SessionCookies:
    """Cookies of one scan: collected from the viewer page, replayed on the specifications request.

    Only name/value pairs are kept. Expiry, domain and path are ignored since
    both requests go to the same origin within a single scan.
    """

    def __init__(self, default_locale: str = DEFAULT_LOCALE) -> None:
        self._default_locale = default_locale
        self._cookies: dict[str, str] = {}

    def update(self, set_cookie: str | Sequence[str] | None) -> None:
        if not set_cookie:
            return

        headers = [set_cookie] if isinstance(set_cookie, str) else list(set_cookie)
        for header in headers:
            pair = header.split(";", 1)[0].strip()
            name, _, value = pair.partition("=")
            name, value = name.strip(), value.strip()
            if name and value:
                self._cookies[name] = value

        if LOCALE_COOKIE_NAME not in self._cookies:
            self._cookies[LOCALE_COOKIE_NAME] = self._default_locale

    def update_from_response(self, response: httpx.Response) -> None:
        """Record Set-Cookie headers of the response and of every redirect hop before it."""
        for hop in [*response.history, response]:
            self.update(hop.headers.get_list("set-cookie"))
        LOGGER.debug("Session cookies recorded: %s", ", ".join(self._cookies) or "(none)")

    def get(self, name: str) -> str | None:
        return self._cookies.get(name)

    def header_value(self) -> str:
        if not self._cookies:
            return f"{LOCALE_COOKIE_NAME}={self._default_locale}"
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())

    def __len__(self) -> int:
        return len(self._cookies)
