"""
Lookup of record identifiers carried by a request.

Guards need to know which venue or user a request is about before they can
decide anything. The identifier is looked up by name in a fixed order:

1. route path parameters
2. query string parameters
3. top-level keys of a JSON object body

The first source holding a usable value wins. Values are converted with the
same integer validation FastAPI applies to ``int`` route parameters, so
``"+5"`` and ``"5.0"`` name record 5 here exactly as they do in the handler.
Values that would fail that validation (missing keys, empty strings,
non-numeric text) are skipped and the lookup moves on to the next source;
the handler rejects them on its own.
"""

from typing import Any, Optional

from fastapi import Request
from pydantic import TypeAdapter, ValidationError

_IDENTIFIER = TypeAdapter(int)


def parse_identifier(value: Any) -> Optional[int]:
    """Convert a raw parameter value to an integer id, or None."""
    if value is None:
        return None
    try:
        return _IDENTIFIER.validate_python(value)
    except ValidationError:
        return None


async def _json_body(request: Request) -> Optional[dict]:
    body = await request.body()
    if not body:
        return None
    try:
        payload = await request.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


async def extract_identifier(request: Request, name: str) -> Optional[int]:
    """
    Find the identifier called ``name`` in the request.

    Args:
        request: The incoming request
        name: Parameter name, e.g. "venueId" or "userId"

    Returns:
        The identifier, or None when no source carries a usable value
    """
    identifier = parse_identifier(request.path_params.get(name))
    if identifier is not None:
        return identifier

    identifier = parse_identifier(request.query_params.get(name))
    if identifier is not None:
        return identifier

    body = await _json_body(request)
    if body is not None:
        return parse_identifier(body.get(name))

    return None
