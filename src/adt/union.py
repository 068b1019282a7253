"""
Tagged unions.

`Type` builds a type object from a name and a list of constructors. The type
object provides:

    1. constructors for values of this type (`Shape.Circle(1.0)`),
    2. a membership test (`Shape.is_(v)`, or `v in Shape`),
    3. exhaustive case analysis over its values (`Shape.match({...})`).

Sample usage:

    Bool = Type('Bool', [('True', 0), ('False', 0)])

    negate = Bool.match({
        'True': Bool['False'](),
        'False': Bool['True'](),
    })

    negate(Bool['False']())  # Bool.True
    negate(1)                # ValidationError: Matcher for Bool found object of type int.

A branch function always takes exactly one argument, the payload: a tuple for
constructors of arity 2 or more, the value itself for arity 1, and None for
arity 0. Use `lambda _: ...` or a plain constant for arity-0 constructors.

Constructor names that are Python keywords or clash with the attributes of the
type object are reachable through item access only.
"""
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from adt.diagnostics import err
from adt.stringify import to_string
from adt.tags import Tags, tags_of
from adt.values import TypedValue

__all__ = ['INLINE_CONSTRUCTORS', 'Constructor', 'Branch', 'Thunk', 'Constant', 'Type']

# Types with more constructors than this are printed one constructor per line.
INLINE_CONSTRUCTORS = 3


@dataclass(frozen=True)
class Constructor:
    """Constructor of a tagged union: packages `arity` positional values into a typed value.

    A constructor is unbound (`type_name` is None) when used to declare a type, and
    bound once the `Type` owning it has been created.
    """
    name: str
    arity: int
    type_name: str | None = None

    @property
    def label(self) -> str:
        return self.name

    def is_(self, value: object) -> bool:
        """Test if `value` was produced by this constructor."""
        tags = tags_of(value)
        return tags is not None and tags.type_name == self.type_name and tags.constructor == self.name

    def __call__(self, *args: object) -> TypedValue:
        if self.type_name is None:
            err(f"Constructor {self.name} does not belong to any type")
        _check_arity(self.type_name, self.name, self.arity, args)
        return TypedValue(Tags(self.type_name, self.name, _payload(self.arity, args)), self.arity)


## Branches ##

class Branch(ABC):
    """Entry of a match table."""

    @abstractmethod
    def resolve(self, payload: object) -> object:
        """Compute the result of the match for the given payload."""
        raise NotImplementedError()


@dataclass(frozen=True)
class Thunk(Branch):
    """Branch computed from the payload of the matched value."""
    fn: Callable[[Any], object]

    def resolve(self, payload: object) -> object:
        return self.fn(payload)


@dataclass(frozen=True)
class Constant(Branch):
    """Branch returning a fixed value; use it to return a callable unevaluated."""
    value: object

    def resolve(self, payload: object) -> object:
        return self.value


def _branch(value: object) -> Branch:
    match value:
        case Branch():
            return value
        case _ if callable(value):
            return Thunk(value)
        case _:
            return Constant(value)


## Safety checks ##

def _check_not_none(type_name: object, constructors: object) -> None:
    if type_name is None and constructors is None:
        err('Type definition cannot be empty')


def _check_valid_name(type_name: object) -> None:
    if type_name is None:
        err('Type name cannot be None')

    if not isinstance(type_name, str) or len(type_name) == 0:
        err(f"{type_name!r} is not a valid Type name")


def _constructor_fields(entry: object) -> tuple[object, object]:
    match entry:
        case Constructor(name=name, arity=arity):
            return name, arity
        case Mapping():
            return entry.get('name'), entry.get('arity')
        case (name, arity) if isinstance(entry, (list, tuple)):
            return name, arity
        case _:
            err(f"Type constructor must be a Constructor, a (name, arity) pair or a mapping, got {to_string(entry)}")


def _check_valid_constructor(entry: object) -> Constructor:
    name, arity = _constructor_fields(entry)
    if name is None or name == '':
        err('Type constructor name must be provided')

    if not isinstance(name, str):
        err(f"Type constructor name must be a string, got {to_string(name)}")

    if not isinstance(arity, int) or isinstance(arity, bool):
        err(f"Type constructor arity must be a number, got {to_string(arity)} for {name}")

    if arity < 0:
        err(f"Type constructor arity must be greater than or equal to 0, got {arity} for {name}")

    return Constructor(name, arity)


def _check_valid_constructors(type_name: str, constructors: object) -> list[Constructor]:
    if not isinstance(constructors, (list, tuple)) or len(constructors) == 0:
        err(f"Type constructors must be provided for {type_name}")

    checked = [_check_valid_constructor(c) for c in constructors]
    seen: set[str] = set()
    for c in checked:
        if c.name in seen:
            err(f"Type constructor {type_name}.{c.name} is defined more than once")
        seen.add(c.name)
    return checked


def _check_arity(type_name: str, constructor_name: str, arity: int, args: Sequence[object]) -> None:
    if arity != len(args):
        err(f"""Attempting to construct value of type {type_name} with
constructor {type_name}.{constructor_name} with {len(args)} values [{', '.join(to_string(a) for a in args)}]
but this is an arity {arity} constructor (takes {arity} values)""")


def _case_list(names: Sequence[str]) -> str:
    return '\n'.join(f'\t-> {name}' for name in names)


def _check_branches_is_mapping(type_name: str, constructor_names: Sequence[str], branches: object) -> None:
    if isinstance(branches, Mapping):
        return

    err(f"""
    When checking for branches for {type_name} expecting {', '.join(constructor_names)} we found {to_string(branches)}
    """)


def _check_branch_names_not_empty(type_name: str, constructor_names: Sequence[str],
                                  branch_names: Sequence[str]) -> None:
    if len(branch_names) == 0:
        err(f"""
    Attempted to construct matcher for type {type_name} without any matching.

    Missing cases for:

{_case_list(constructor_names)}
    """)


def _check_matcher_names(type_name: str, constructor_names: Sequence[str], branch_names: Sequence[object]) -> None:
    expected = sorted(constructor_names)
    actual = sorted(branch_names, key=str)
    if expected != actual:
        missing = [n for n in expected if n not in actual]
        extra = [str(n) for n in actual if n not in expected]

        if len(extra) == 0:
            message, diff = 'Missing cases for', missing
        else:
            message, diff = 'The following cases will never match', extra

        err(f"""
    Non-exhaustive pattern matching found for {type_name}.

    {message}:

{_case_list(diff)}
    """)


def _check_branches_not_none(type_name: str, branches: Mapping[str, object]) -> None:
    for name, branch in branches.items():
        if branch is None:
            err(f"""
        Branch {name} for type {type_name} is None
        """)


def _payload(arity: int, args: Sequence[object]) -> object:
    match arity:
        case 0:
            return None
        case 1:
            return args[0]
        case _:
            return tuple(args[:arity])


## API ##

class Type:
    """Tagged union type."""

    def __init__(self, type_name: str | None = None,
                 constructors: Sequence[Constructor | tuple[str, int] | Mapping[str, object]] | None = None) -> None:
        _check_not_none(type_name, constructors)
        _check_valid_name(type_name)
        assert type_name is not None
        checked = _check_valid_constructors(type_name, constructors)

        bound = {c.name: Constructor(c.name, c.arity, type_name) for c in checked}
        object.__setattr__(self, '_type_name', type_name)
        object.__setattr__(self, '_constructors', MappingProxyType(bound))

    @property
    def tags(self) -> Tags:
        return Tags(self._type_name)

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def constructors(self) -> Mapping[str, Constructor]:
        """Constructors of this type, in declaration order."""
        return self._constructors

    def __getattr__(self, name: str) -> Constructor:
        if name.startswith('_'):
            raise AttributeError(name)
        if name in self._constructors:
            return self._constructors[name]
        raise AttributeError(f"type {self._type_name} has no constructor {name!r}")

    def __getitem__(self, name: str) -> Constructor:
        if name not in self._constructors:
            raise KeyError(f"type {self._type_name} has no constructor {name!r}")
        return self._constructors[name]

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"type {self._type_name} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"type {self._type_name} is immutable")

    def is_(self, value: object) -> bool:
        """Test if `value` is a value of this type."""
        tags = tags_of(value)
        return tags is not None and tags.type_name == self._type_name

    def __contains__(self, value: object) -> bool:
        return self.is_(value)

    def match(self, branches: Mapping[str, object]) -> Callable[[object], object]:
        """Create an exhaustive matcher from a table of branches, one per constructor.

        A branch is either a function of the payload or a constant. Branch functions
        take one argument even for arity-0 constructors, where the payload is None.
        """
        type_name = self._type_name
        constructor_names = list(self._constructors)

        _check_branches_is_mapping(type_name, constructor_names, branches)
        branch_names = list(branches)
        _check_branch_names_not_empty(type_name, constructor_names, branch_names)
        _check_matcher_names(type_name, constructor_names, branch_names)
        _check_branches_not_none(type_name, branches)

        table = {name: _branch(b) for name, b in branches.items()}

        def matcher(value: object) -> object:
            tags = tags_of(value)
            if tags is None or tags.type_name != type_name:
                found = tags.type_name if tags is not None and tags.type_name else type(value).__name__
                err(f"""
        Matcher for {type_name} found object of type {found}.
        """)

            if tags.constructor not in table:
                err(f"Matcher for {type_name} found value of unknown constructor {type_name}.{tags.constructor}")
            return table[tags.constructor].resolve(tags.value)  # type: ignore[index]

        return matcher

    def __str__(self) -> str:
        labels = sorted(self._constructors)
        if len(labels) > INLINE_CONSTRUCTORS:
            printable = '\n' + '\n'.join(f'\t | {name}' for name in labels)
        else:
            printable = ' | '.join(labels)
        return f'type {self._type_name} = {printable}'

    def __repr__(self) -> str:
        return f'<Type {self._type_name}>'
