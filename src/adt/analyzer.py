from collections.abc import Mapping, Sequence

from adt.diagnostics import *
from adt.grammar import *
from adt.parser import parse
from adt.record import Record
from adt.tags import PRIMITIVE_TYPES
from adt.union import Constructor, Type

__all__ = ['PRIMITIVE_NAMES', 'analyze', 'declare']

PRIMITIVE_NAMES: Mapping[str, type] = {t.__name__: t for t in PRIMITIVE_TYPES}


def analyze(decls: Sequence[Decl], issuer: Issuer,
            env: Mapping[str, object] | None = None) -> dict[str, Type | Record]:
    """Build the declared types and records, in declaration order.

    Field types are resolved against earlier declarations, then `env`, then the primitive type names.
    Declarations that fail are reported to the issuer and left out of the result.
    """
    env = env or {}
    scope: dict[str, Type | Record] = {}

    def lookup(name: str) -> object | None:
        if name in scope:
            return scope[name]
        if name in env:
            return env[name]
        return PRIMITIVE_NAMES.get(name)

    for decl in decls:
        decl_name = decl.name.id
        if decl_name in scope:
            issuer.issue(RedefinedName(decl_name, decl.name.loc))
            continue

        match decl:
            case TypeDecl(_, constructors):
                ctors = [Constructor(c.name.id, len(c.params)) for c in constructors]
                try:
                    scope[decl_name] = Type(decl_name, ctors)
                except ValidationError as e:
                    issuer.issue(InvalidDeclaration(decl_name, str(e), decl.loc))

            case RecordDecl(_, fields):
                shape: dict[str, object] = {}
                resolved = True
                for f in fields:
                    typ = lookup(f.type.name.id)
                    if typ is None:
                        issuer.issue(UndefinedName(f.type.name.id, f.type.name.loc))
                        resolved = False
                    elif f.name.id in shape:
                        issuer.issue(RedefinedName(f.name.id, f.name.loc))
                        resolved = False
                    else:
                        shape[f.name.id] = [typ] if f.type.is_list else typ

                if resolved:
                    try:
                        scope[decl_name] = Record(decl_name, shape)
                    except ValidationError as e:
                        issuer.issue(InvalidDeclaration(decl_name, str(e), decl.loc))

    return scope


def declare(source: str, env: Mapping[str, object] | None = None,
            *, file_path: str = '<unknown>') -> dict[str, Type | Record]:
    """Create types and records from their declarations.

    Sample usage:

        declared = declare('''
            type Bool = True | False
            record Point { x : Number, y : Number, visible : Bool }
        ''')
        Point = declared['Point']
    """
    issuer = Issuer()
    scope: dict[str, Type | Record] = {}
    match parse(source, file_path):
        case InvalidSyntax() as error:
            issuer.issue(error)
        case decls:
            scope = analyze(decls, issuer, env)

    if issuer.has_errors:
        err(issuer.pretty())
    return scope
