import httpx

from apps.receipt_scanner.services.cookies import SessionCookies


def test_injects_default_locale_when_server_sets_none():
    cookies = SessionCookies()
    cookies.update("a=1")

    header = cookies.header_value()
    assert "a=1" in header
    assert "localization=sr-Cyrl-RS" in header


def test_server_locale_is_preserved():
    cookies = SessionCookies()
    cookies.update("localization=en-US; path=/")

    assert cookies.header_value() == "localization=en-US"


def test_multiple_headers_and_overwrite():
    cookies = SessionCookies()
    cookies.update(["ASP.NET_SessionId=abc; path=/; HttpOnly", "a=1", "a=2; Secure"])

    assert cookies.get("ASP.NET_SessionId") == "abc"
    assert cookies.get("a") == "2"
    assert cookies.header_value() == "ASP.NET_SessionId=abc; a=2; localization=sr-Cyrl-RS"


def test_malformed_entries_are_skipped():
    cookies = SessionCookies()
    cookies.update(["novalue=", "=orphan", "garbage"])

    assert len(cookies) == 1
    assert cookies.header_value() == "localization=sr-Cyrl-RS"


def test_absent_header_falls_back_to_default_locale():
    cookies = SessionCookies(default_locale="sr-Latn-RS")
    cookies.update(None)

    assert len(cookies) == 0
    assert cookies.header_value() == "localization=sr-Latn-RS"


def test_update_from_response_reads_redirect_hops():
    request = httpx.Request("GET", "https://suf.purs.gov.rs/v/?vl=x")
    redirect = httpx.Response(302, headers=[("set-cookie", "hop=1; path=/")], request=request)
    final = httpx.Response(
        200,
        headers=[("set-cookie", "session=abc"), ("set-cookie", "localization=sr-Latn-RS")],
        request=request,
    )
    final.history = [redirect]

    cookies = SessionCookies()
    cookies.update_from_response(final)

    assert cookies.header_value() == "hop=1; localization=sr-Latn-RS; session=abc"
