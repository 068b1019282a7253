from collections.abc import Mapping
from dataclasses import dataclass, field

from adt.stringify import to_string
from adt.tags import Tags, is_primitive_type, is_type, tags_of

__all__ = ['TypedValue', 'RecordValue', 'type_label']


@dataclass(frozen=True, repr=False)
class TypedValue:
    """Value produced by a constructor of a tagged union."""
    tags: Tags
    arity: int = field(default=0, compare=False)

    @property
    def type_name(self) -> str:
        return self.tags.type_name  # type: ignore[return-value]

    @property
    def constructor(self) -> str:
        return self.tags.constructor  # type: ignore[return-value]

    @property
    def payload(self) -> object:
        return self.tags.value

    def __str__(self) -> str:
        prefix = f'{self.type_name}.{self.constructor}'
        match self.arity:
            case 0:
                return prefix
            case 1:
                return f'{prefix}({to_string(self.payload)})'
            case _:
                return f'{prefix}({",".join(to_string(p) for p in self.payload)})'  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return str(self)


@dataclass(frozen=True, repr=False)
class RecordValue(TypedValue):
    """Value produced by `Record.of`: its payload is a read-only field mapping."""
    __hash__ = None  # type: ignore[assignment]

    @property
    def payload(self) -> Mapping[str, object]:
        return self.tags.value  # type: ignore[return-value]

    def __str__(self) -> str:
        fields = ', '.join(f'{k} : {type_label(v)}' for k, v in sorted(self.payload.items()))
        return f'{self.type_name} {{ {fields} }}'


def type_label(value: object) -> str:
    """Render a shape entry: types by name, lists of types as `[T]`, anything else by `to_string`."""
    if is_primitive_type(value):
        return value.__name__  # type: ignore[attr-defined]
    if is_type(value):
        return str(tags_of(value).type_name)  # type: ignore[union-attr]
    if isinstance(value, (list, tuple)) and len(value) > 0 \
            and all(is_primitive_type(v) or is_type(v) for v in value):
        return '[' + ', '.join(type_label(v) for v in value) + ']'
    return to_string(value)
