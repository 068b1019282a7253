from dataclasses import dataclass
from typing import Sequence, TypeAlias

from adt.diagnostics import Location

__all__ = ['Node', 'Name', 'ConstructorDecl', 'TypeDecl', 'TypeRef', 'FieldDecl', 'RecordDecl', 'Decl']


class Node:
    """Node with a location."""
    loc: Location


@dataclass
class Name(Node):
    """Identifier."""
    id: str


@dataclass
class ConstructorDecl(Node):
    """Constructor of a tagged union: its arity is the number of parameters."""
    name: Name
    params: Sequence[Name]


@dataclass
class TypeDecl(Node):
    """Tagged union declaration: `type Name = A | B(x) | C(x, y)`."""
    name: Name
    constructors: Sequence[ConstructorDecl]


@dataclass
class TypeRef(Node):
    """Reference to a field type, possibly wrapped in a list: `T` or `[T]`."""
    name: Name
    is_list: bool


@dataclass
class FieldDecl(Node):
    """Record field: `name : T`."""
    name: Name
    type: TypeRef


@dataclass
class RecordDecl(Node):
    """Record declaration: `record Name { a : T, b : [U] }`."""
    name: Name
    fields: Sequence[FieldDecl]


Decl: TypeAlias = TypeDecl | RecordDecl
