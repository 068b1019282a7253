"""
Record types.

`Record` builds a structural type from a name and a shape, and helps you:

    1. verify the shape of a mapping,
    2. verify the types of all of its fields,
    3. access the fields of its values in an immutable way through lenses.

A shape maps each field name to a field type, which is one of:

    - a primitive type, such as `int` or `numbers.Number`,
    - a user-defined type (built with `Type` or `Record`),
    - a list of one primitive or user-defined type, such as `[str]`.

Sample usage:

    Point = Record('Point', {'x': Number, 'y': Number})
    p = Point.of({'x': 1, 'y': 2})
    str(p)                      # Point { x : 1, y : 2 }
    Point.lenses.y.set(3, p)    # Point { x : 1, y : 3 }
"""
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

from adt.diagnostics import err
from adt.runtime import FieldType, ListType, field_type, is_field_type
from adt.stringify import capitalize, to_string
from adt.tags import Tags, is_typed_value, tags_of
from adt.values import RecordValue, type_label

__all__ = ['Lens', 'Lenses', 'Record']


def _print_shape(separator: str, padding: str, shape: Mapping[object, object]) -> str:
    entries = sorted(shape.items(), key=lambda kv: str(kv[0]))
    return separator.join(f'{padding}{k} : {type_label(v)}' for k, v in entries)


def _print_record(record_name: str, shape: Mapping[object, object]) -> str:
    body = _print_shape('\n', '    ', shape)
    return f'record {record_name} {{\n{body}\n}}'


def _value_type_name(value: object) -> str:
    """Infer the type name of a value, for diagnostics."""
    if is_typed_value(value):
        return str(tags_of(value).type_name)  # type: ignore[union-attr]
    if isinstance(value, (list, tuple)):
        return to_string([_value_type_name(v) for v in value])
    return capitalize(type(value).__name__)  # type: ignore[return-value]


## Safety checks ##

def _check_record_name(record_name: object) -> None:
    if record_name is None:
        err('Record must have a name')
    if not isinstance(record_name, str):
        err(f"Record name must be a string, got {to_string(record_name)}")
    if len(record_name) == 0:
        err("Record name can't be empty")
    if record_name[0] != record_name[0].upper():
        err(f"Record names must be capitalized. Try {capitalize(record_name)} instead of {record_name}")


def _check_record_shape_field(record_name: str, shape: Mapping[object, object], name: object, typ: object) -> None:
    if name is None or name == '':
        err(f"{record_name} has a strangely undefined name for property. See: {_print_record(record_name, shape)}")
    if not isinstance(name, str):
        err(f"{record_name} has a property named {to_string(name)} that is not a string. "
            f"See: {_print_record(record_name, shape)}")
    if typ is None:
        err(f"{record_name} has an undefined property named {name}. See: {_print_record(record_name, shape)}")
    if is_field_type(typ):
        return
    err(f"""{record_name} has a property named {name} that is not:

- a primitive, such as int
- a user-defined type, such as Result
- a list of one primitive or user-defined type, such as [int] or [Result]

See:

{_print_record(record_name, shape)}""")


def _check_record_shape(record_name: str, shape: object) -> None:
    if shape is None:
        err(f"Record shape for {record_name} can't be None")
    if not isinstance(shape, Mapping):
        err(f"Record shape for {record_name} must be a mapping, got {to_string(shape)}")
    if len(shape) == 0:
        err(f"Record shape for {record_name} can't be empty")
    for name, typ in shape.items():
        _check_record_shape_field(record_name, shape, name, typ)


def _check_valid_value(record_name: str, value: object) -> None:
    if value is None:
        err(f"Record value for {record_name} can't be None")
    if not isinstance(value, Mapping):
        err(f"Record value for {record_name} must be a mapping, got {to_string(value)}")
    if len(value) == 0:
        err(f"Record value for {record_name} can't be empty")


## Lenses ##

@dataclass(frozen=True)
class Lens:
    """Immutable accessor for one field of the values of a record."""
    record_name: str
    field: str

    def _payload(self, target: object) -> Mapping[str, object]:
        tags = tags_of(target)
        if not is_typed_value(target) or tags.type_name != self.record_name:  # type: ignore[union-attr]
            err(f"Lens {self.record_name}.{self.field} cannot focus on {to_string(target)}")
        return tags.value  # type: ignore[union-attr, return-value]

    def view(self, target: RecordValue) -> object:
        """Read the field."""
        return self._payload(target)[self.field]

    def set(self, value: object, target: RecordValue) -> RecordValue:
        """Return a new record value with the field replaced by `value`."""
        payload = dict(self._payload(target))
        payload[self.field] = value
        return RecordValue(replace(target.tags, value=MappingProxyType(payload)))

    def over(self, fn: Callable[[object], object], target: RecordValue) -> RecordValue:
        """Return a new record value with `fn` applied to the field."""
        return self.set(fn(self.view(target)), target)


class Lenses(Mapping[str, Lens]):
    """Lenses of a record, addressable by item or by attribute."""

    def __init__(self, lenses: Mapping[str, Lens]) -> None:
        object.__setattr__(self, '_lenses', dict(lenses))

    def __getitem__(self, name: str) -> Lens:
        return self._lenses[name]

    def __getattr__(self, name: str) -> Lens:
        if not name.startswith('_') and name in self._lenses:
            return self._lenses[name]
        raise AttributeError(f"no lens for field {name!r}")

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("lenses are immutable")

    def __iter__(self) -> Iterator[str]:
        return iter(self._lenses)

    def __len__(self) -> int:
        return len(self._lenses)


## API ##

class Record:
    """Record type."""

    def __init__(self, record_name: str | None = None, shape: Mapping[str, object] | None = None) -> None:
        if record_name is None and shape is None:
            err('Record definition must not be None')
        _check_record_name(record_name)
        assert record_name is not None
        _check_record_shape(record_name, shape)
        assert shape is not None

        fields = {name: field_type(typ) for name, typ in shape.items()}
        lenses = Lenses({name: Lens(record_name, name) for name in shape})
        object.__setattr__(self, '_record_name', record_name)
        object.__setattr__(self, '_shape', MappingProxyType(dict(shape)))
        object.__setattr__(self, '_fields', MappingProxyType(fields))
        object.__setattr__(self, '_lenses', lenses)

    @property
    def tags(self) -> Tags:
        return Tags(self._record_name)

    @property
    def record_name(self) -> str:
        return self._record_name

    @property
    def shape(self) -> Mapping[str, object]:
        return self._shape

    @property
    def fields(self) -> Mapping[str, FieldType]:
        """Compiled field types, in shape order."""
        return self._fields

    @property
    def lenses(self) -> Lenses:
        return self._lenses

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"record {self._record_name} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"record {self._record_name} is immutable")

    def is_(self, value: object) -> bool:
        """Test if `value` is a value of this record."""
        tags = tags_of(value)
        return tags is not None and tags.type_name == self._record_name

    def __contains__(self, value: object) -> bool:
        return self.is_(value)

    def of(self, value: Mapping[str, object]) -> RecordValue:
        """Create a value of this record, checking its keys and the types of its fields."""
        _check_valid_value(self._record_name, value)
        self._check_matching_keys(value)
        self._check_matching_types(value)
        return RecordValue(Tags(self._record_name, self._record_name, MappingProxyType(value)))

    def _check_matching_keys(self, value: Mapping[object, object]) -> None:
        value_keys = set(value)
        shape_keys = set(self._shape)
        if value_keys == shape_keys:
            return

        extra = sorted(str(k) for k in value_keys - shape_keys)
        if len(extra) > 0:
            title, diff = 'Unexpected properties', extra
        else:
            title, diff = 'Missing properties', sorted(shape_keys - value_keys)

        listing = '\n'.join(f'  - {k}' for k in diff)
        err(f"""Failed to create {self._record_name} of shape:

{self.signature()}

With value:

{_print_record('value', value)}

{title}:

{listing}
""")

    def _check_matching_types(self, value: Mapping[str, object]) -> None:
        for name in sorted(self._fields):
            expected = self._fields[name]
            actual = value[name]
            if actual in expected:
                continue

            note = ''
            if isinstance(expected, ListType) and isinstance(actual, (list, tuple)):
                index, element = next((i, e) for i, e in enumerate(actual) if e not in expected.element_type)
                note = f'Element {index} ("{to_string(element)}") is not of type "{expected.element_type}".\n'

            err(f"""Failed to create {self._record_name} of shape:

{self.signature()}

With values:

{_print_record('value', value)}

Property "{name}" expected value of type "{expected}"
but found value "{to_string(actual)}" of type "{_value_type_name(actual)}".
{note}""")

    def signature(self) -> str:
        """Render the record declaration on multiple lines."""
        return _print_record(self._record_name, self._shape)

    def __str__(self) -> str:
        return f'record {self._record_name} {{ {_print_shape(", ", "", self._shape)} }}'

    def __repr__(self) -> str:
        return f'<Record {self._record_name}>'
