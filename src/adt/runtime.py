from abc import ABC, abstractmethod
from dataclasses import dataclass

from adt.diagnostics import err
from adt.tags import is_primitive_type, is_type, tags_of

__all__ = ['FieldType', 'BuiltinType', 'UserType', 'ListType', 'field_type', 'is_field_type']


## Field types ##

class FieldType(ABC):
    """(Runtime) type of a record field."""

    @abstractmethod
    def __contains__(self, value: object) -> bool:
        """Test if value is a member of this type."""
        raise NotImplementedError()


@dataclass(frozen=True)
class BuiltinType(FieldType):
    """Builtin type."""
    py_type: type

    def __contains__(self, value: object) -> bool:
        return isinstance(value, self.py_type)

    def __str__(self) -> str:
        return self.py_type.__name__


@dataclass(frozen=True, eq=False)
class UserType(FieldType):
    """Type defined by `Type` or `Record`."""
    handle: object

    def __contains__(self, value: object) -> bool:
        return value in self.handle  # type: ignore[operator]

    def __str__(self) -> str:
        tags = tags_of(self.handle)
        assert tags is not None
        return str(tags.type_name)


@dataclass(frozen=True)
class ListType(FieldType):
    """Homogeneous list type."""
    element_type: BuiltinType | UserType

    def __contains__(self, value: object) -> bool:
        if isinstance(value, (list, tuple)):
            return all(v in self.element_type for v in value)

        return False

    def __str__(self) -> str:
        return f'[{self.element_type}]'


def _is_element_type(obj: object) -> bool:
    return obj is not None and (is_primitive_type(obj) or is_type(obj))


def is_field_type(obj: object) -> bool:
    """Test if `obj` may be used as a field type in a record shape."""
    match obj:
        case [t] if isinstance(obj, (list, tuple)):
            return _is_element_type(t)
        case _:
            return _is_element_type(obj)


def field_type(obj: object) -> FieldType:
    """Compile a shape entry into its field type."""
    match obj:
        case [t] if isinstance(obj, (list, tuple)) and _is_element_type(t):
            return ListType(field_type(t))  # type: ignore[arg-type]
        case _ if is_primitive_type(obj):
            return BuiltinType(obj)  # type: ignore[arg-type]
        case _ if is_type(obj):
            return UserType(obj)
        case _:
            err(f"{obj!r} is not a valid field type")
