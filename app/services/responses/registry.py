from typing import Any, Callable, List, Optional, Tuple
from .contracts import NormalizedResult

Matcher = Callable[[Any], Optional[NormalizedResult]]

# order is significant: first match wins
_REGISTRY: List[Tuple[str, Matcher]] = []

def register_matcher(name: str, fn: Matcher):
    if any(existing == name for existing, _ in _REGISTRY):
        raise KeyError(f"matcher already registered: {name}")
    _REGISTRY.append((name, fn))

def get_matchers() -> List[Tuple[str, Matcher]]:
    return list(_REGISTRY)
