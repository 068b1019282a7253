"""
Identity tags shared by type descriptors and typed values.

Every descriptor (`Type`, `Record`) and every value they produce carries a
`Tags` struct in its `tags` attribute. The three predicates below classify any
object into one of: primitive type, user-defined type, typed value, or plain
value, by looking only at those tags.
"""
import collections.abc
import numbers
from dataclasses import dataclass

__all__ = ['ABSENT', 'Tags', 'tags_of', 'PRIMITIVE_TYPES',
           'is_primitive_type', 'is_type', 'is_typed_value']


class _Absent:
    """Marker for a tag that is not set at all (as opposed to set to `None`)."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'ABSENT'

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class Tags:
    """Type name, constructor name and payload of a tagged object."""
    type_name: object
    constructor: str | None = None
    value: object = ABSENT


def tags_of(obj: object) -> Tags | None:
    """Get the tags of an object, or None if it carries none."""
    if obj is None:
        return None
    tags = getattr(obj, 'tags', None)
    return tags if isinstance(tags, Tags) else None


PRIMITIVE_TYPES: tuple[type, ...] = (
    list, tuple, bool, int, float, complex, str, bytes, dict, set, object,
    numbers.Number,
    collections.abc.Awaitable,
    collections.abc.Callable,
)


def is_primitive_type(obj: object) -> bool:
    """Test if `obj` is one of the built-in classes usable as a field type."""
    return any(obj is t for t in PRIMITIVE_TYPES)


def is_type(obj: object) -> bool:
    """Test if `obj` is a user-defined type (as opposed to a value of one)."""
    tags = tags_of(obj)
    if tags is None or tags.type_name is None:
        return False
    if isinstance(tags.type_name, str) and len(tags.type_name) == 0:
        return False
    # a payload means this is a value of a type or a record
    return tags.value is ABSENT


def is_typed_value(obj: object) -> bool:
    """Test if `obj` is a value produced by a type constructor or a record.

    Values of arity-0 constructors carry `None` as payload and still count.
    """
    tags = tags_of(obj)
    if tags is None:
        return False
    return tags.type_name is not None and tags.constructor is not None and tags.value is not ABSENT
