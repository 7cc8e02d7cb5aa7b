from __future__ import annotations

import re

_HEX_REFERENCE = re.compile(r"&#x([0-9A-Fa-f]{1,6});")
_DECIMAL_REFERENCE = re.compile(r"&#(\d{1,7});")
_NAMED_REFERENCE = re.compile(r"&(amp|lt|gt|quot|apos);")

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


def _code_point_replacer(base: int):
    def replace(match: re.Match[str]) -> str:
        code_point = int(match.group(1), base)
        if code_point > _MAX_CODE_POINT or code_point in _SURROGATES:
            return match.group(0)
        return chr(code_point)

    return replace


def decode_html_entities(text: str) -> str:
    """Decode numeric character references, then the five XML named entities.

    Named entities are replaced in one scan, so "&amp;lt;" becomes "&lt;"
    rather than "<".
    """
    if not text or "&" not in text:
        return text

    decoded = _HEX_REFERENCE.sub(_code_point_replacer(16), text)
    decoded = _DECIMAL_REFERENCE.sub(_code_point_replacer(10), decoded)
    return _NAMED_REFERENCE.sub(lambda match: _NAMED_ENTITIES[match.group(1)], decoded)


__all__ = ["decode_html_entities"]
