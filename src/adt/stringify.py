import json
from collections.abc import Mapping

from adt.tags import ABSENT, is_primitive_type, is_type, is_typed_value

__all__ = ['COMPACT_KEYS', 'to_string', 'capitalize']

# Mappings with more keys than this are printed on multiple lines.
COMPACT_KEYS = 3


def to_string(x: object) -> str:
    """Render any value, type or typed value for display and diagnostics."""
    if x is None or x is ABSENT:
        return 'Nil'
    if isinstance(x, (list, tuple)):
        return '[' + ', '.join(to_string(e) for e in x) + ']'
    if is_primitive_type(x):
        return x.__name__  # type: ignore[attr-defined]
    if is_type(x) or is_typed_value(x):
        return str(x)
    if isinstance(x, Mapping):
        try:
            obj = _json_ready(x, set())
            if len(obj) > COMPACT_KEYS:  # type: ignore[arg-type]
                return json.dumps(obj, indent=2, default=to_string)
            return json.dumps(obj, separators=(',', ':'), default=to_string)
        except (ValueError, RecursionError):
            return str(x)
    return str(x)


def capitalize(s: str | None) -> str | None:
    """Upper-case the first character and lower-case the rest."""
    if s is None:
        return s
    return s[:1].upper() + s[1:].lower()


def _json_ready(x: object, path: set[int]) -> object:
    """Copy nested mappings and sequences, turning mapping keys that are not strings into strings."""
    if isinstance(x, Mapping):
        if id(x) in path:
            raise ValueError('Circular reference detected')
        path.add(id(x))
        obj = {k if isinstance(k, str) else to_string(k): _json_ready(v, path) for k, v in x.items()}
        path.discard(id(x))
        return obj
    if isinstance(x, (list, tuple)):
        if id(x) in path:
            raise ValueError('Circular reference detected')
        path.add(id(x))
        seq = [_json_ready(e, path) for e in x]
        path.discard(id(x))
        return seq
    return x
