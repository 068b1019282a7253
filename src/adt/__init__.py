from adt.analyzer import declare
from adt.diagnostics import ValidationError, err
from adt.record import Lens, Record
from adt.stringify import capitalize, to_string
from adt.tags import is_primitive_type, is_type, is_typed_value
from adt.union import Branch, Constant, Constructor, Thunk, Type
from adt.values import RecordValue, TypedValue

__all__ = ['Type', 'Constructor', 'TypedValue', 'Branch', 'Thunk', 'Constant',
           'Record', 'RecordValue', 'Lens',
           'is_primitive_type', 'is_type', 'is_typed_value', 'to_string', 'capitalize',
           'ValidationError', 'err', 'declare']
