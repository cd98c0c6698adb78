"""
Template formatter for the generic webhook channel.

Templates are plain text that may reference two placeholders, ``$title`` and
``$content``. Header and body templates use one ``key: value`` pair per line;
a ``text/plain`` body is taken verbatim.

Substituted values are percent-encoded when they land in a URL (same safe set
as JavaScript's ``encodeURIComponent``) and inserted raw everywhere else.
"""

import json
import re
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

_URI_SAFE = "-_.!~*'()"

# Key, then the value up to end of line. ``\s*`` may swallow a blank line.
_PAIR_RE = re.compile(r"(\w+):\s*((?:(?!\n\w+:).)*)", re.ASCII)

JSON_TYPE = "application/json"
FORM_TYPE = "application/x-www-form-urlencoded"
MULTIPART_TYPE = "multipart/form-data"
TEXT_TYPE = "text/plain"


def replace_placeholders(text: str, title: str, content: str, url: bool = False) -> str:
    if url:
        title = quote(title, safe=_URI_SAFE)
        content = quote(content, safe=_URI_SAFE)
    return text.replace("$title", title).replace("$content", content)


def parse_headers(text: Optional[str]) -> dict[str, str]:
    """Parse ``Key: value`` lines. Keys are lower-cased; repeats are joined with ", "."""
    headers: dict[str, str] = {}
    if not text:
        return headers

    for line in text.split("\n"):
        key, sep, value = line.partition(":")
        key = key.strip().lower()
        if not sep or not key:
            continue
        value = value.strip()
        headers[key] = f"{headers[key]}, {value}" if key in headers else value
    return headers


def _decode(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError:
        return value


def parse_body(
    text: Optional[str],
    content_type: Optional[str],
    fmt: Optional[Callable[[str], str]] = None,
) -> Union[str, dict[str, Any], None]:
    """
    Parse a body template.

    ``text/plain`` (or an empty template) yields the formatted text itself.
    Every other content type yields a mapping of ``key: value`` pairs; each
    value is passed through ``fmt`` and JSON-decoded when it is valid JSON.
    The first occurrence of a key wins.
    """
    if content_type == TEXT_TYPE or not text:
        return fmt(text) if fmt and text else text

    pairs: dict[str, Any] = {}
    for match in _PAIR_RE.finditer(text):
        key, value = match.group(1).strip(), match.group(2).strip()
        if not key or key in pairs:
            continue
        if fmt:
            value = fmt(value)
        pairs[key] = _decode(value)
    return pairs


def _form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def format_body(content_type: Optional[str], body: Union[str, dict[str, Any], None]) -> dict[str, Any]:
    """
    Turn a parsed body into ``httpx`` request keyword arguments.

    Unknown content types, and empty bodies, send no body at all.
    """
    if not body:
        return {}

    if content_type == JSON_TYPE:
        return {"json": body}
    if content_type == FORM_TYPE and isinstance(body, dict):
        return {"data": {k: _form_value(v) for k, v in body.items()}}
    if content_type == MULTIPART_TYPE and isinstance(body, dict):
        # (None, value) makes httpx send a plain form field instead of a file
        return {"files": {k: (None, _form_value(v)) for k, v in body.items()}}
    if content_type == TEXT_TYPE:
        return {"content": body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)}
    return {}
