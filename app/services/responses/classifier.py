# app/services/responses/classifier.py
from __future__ import annotations
import json
import logging
from typing import Any, Optional, Union

from .contracts import NormalizedResult, UnknownResult
from .registry import get_matchers
from . import matchers  # noqa: F401  registers the built-in shapes

logger = logging.getLogger(__name__)

def classify(raw: Any) -> NormalizedResult:
    """
    Turn whatever the backend sent into exactly one NormalizedResult.
    Never raises: a matcher that blows up counts as "no match".
    """
    for name, matcher in get_matchers():
        try:
            result = matcher(raw)
        except Exception as e:
            logger.warning(f"Matcher {name} failed, trying the next shape: {e}", exc_info=True)
            continue
        if result is not None:
            logger.debug(f"Backend response classified as {result.kind} by {name}")
            return result
    return UnknownResult(raw=raw)

def is_json_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media = content_type.split(";", 1)[0].strip().lower()
    return media == "application/json" or media.endswith("+json")

def decode_body(body: Union[bytes, str], content_type: Optional[str]) -> Any:
    """JSON bodies are parsed; anything else (or JSON that fails to parse) stays opaque text."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, (bytes, bytearray)) else body
    if not is_json_content_type(content_type):
        return text
    try:
        return json.loads(text)
    except ValueError:
        logger.warning("Backend declared JSON but sent an unparseable body")
        return text

def classify_body(body: Union[bytes, str], content_type: Optional[str]) -> NormalizedResult:
    raw = decode_body(body, content_type)
    if isinstance(raw, str) and not is_json_content_type(content_type):
        return UnknownResult(raw=raw)
    return classify(raw)
