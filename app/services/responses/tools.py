import re
from typing import Any, List, Mapping, Optional, Tuple

GRADE_KEY = re.compile(r"grade_(\d+)", re.ASCII)

def is_mapping(value) -> bool:
    return isinstance(value, Mapping)

def is_sequence(value) -> bool:
    return isinstance(value, (list, tuple))

def non_empty_str(value) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None

def _parse_digits(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        # past the interpreter's int string conversion limit
        return None

def as_int(value) -> Optional[int]:
    """Integer-valued ints, floats and digit strings; anything else (bools included) is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return _parse_digits(value.strip())
    return None

def grade_from_key(key) -> Optional[int]:
    """`grade_3` -> 3. Keys with a non-numeric suffix (`grade_x`) give None."""
    if not isinstance(key, str) or not key.startswith("grade_"):
        return None
    match = GRADE_KEY.fullmatch(key)
    return _parse_digits(match.group(1)) if match else None

def grade_keys(raw: Mapping) -> List[Tuple[str, Optional[int]]]:
    return [(k, grade_from_key(k)) for k in raw if isinstance(k, str) and k.startswith("grade_")]

def string_items(value) -> Optional[List[str]]:
    if not is_sequence(value):
        return None
    return [v for v in value if isinstance(v, str)]

def image_url_of(item: Any) -> Optional[str]:
    if not is_mapping(item):
        return None
    return non_empty_str(item.get("image_url")) or non_empty_str(item.get("imageUrl"))

def resolve_image_url(url: str, base_url: Optional[str]) -> str:
    """Absolute http(s) URLs pass through; relative paths hang off the backend base URL."""
    if not url:
        return ""
    if url.startswith("http://") or url.startswith("https://") or not base_url:
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"

def md_text(val) -> str:
    """Pretty-print free text in MD."""
    if val is None:
        return ""
    s = str(val).strip()
    # escape triple underscores so they display as blanks
    return s.replace("___", r"\_\_\_")
