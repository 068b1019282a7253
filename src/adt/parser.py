import re
import string

from parsy import Parser, ParseError, Result, line_info_at, seq

from adt.diagnostics import InvalidSyntax, Location, Position, Range
from adt.grammar import *

__all__ = ['DeclParser', 'parse']

IDENTIFIER = r'[A-Za-z_][A-Za-z0-9_]*'


class DeclParser:
    """Parser of type and record declarations."""

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path

    def skip_whitespace(self, source: str, offset: int) -> int:
        while offset < len(source):
            if source[offset] in string.whitespace:
                offset += 1
            elif source[offset] == '#':  # comment to end of line
                while offset < len(source) and source[offset] != '\n':
                    offset += 1
            else:
                break
        return offset

    def literal(self, s: str) -> Parser:
        @Parser
        def literal_parser(source: str, offset: int) -> Result:
            offset = self.skip_whitespace(source, offset)
            if source.startswith(s, offset):
                return Result.success(offset + len(s), s)
            else:
                return Result.failure(offset, repr(s))

        return literal_parser

    def regex(self, r: str, expected: str) -> Parser:
        pattern = re.compile(r)

        @Parser
        def regex_parser(source: str, offset: int) -> Result:
            offset = self.skip_whitespace(source, offset)
            m = pattern.match(source, offset)
            if m:
                i, j = m.span()
                return Result.success(j, source[i:j])
            else:
                return Result.failure(offset, expected)

        return regex_parser

    def keyword(self, word: str) -> Parser:
        return self.regex(rf'{word}\b', repr(word))

    def paren(self, p: Parser) -> Parser:
        return self.literal('(') >> p << self.literal(')')

    def brace(self, p: Parser) -> Parser:
        return self.literal('{') >> p << self.literal('}')

    def bracket(self, p: Parser) -> Parser:
        return self.literal('[') >> p << self.literal(']')

    def set_loc(self, p: Parser) -> Parser:
        @Parser
        def set_loc_parser(source: str, offset: int) -> Result:
            offset = self.skip_whitespace(source, offset)
            start = Position(*line_info_at(source, offset))
            result = p(source, offset)
            if result.status:
                end = Position(*line_info_at(source, max(result.index - 1, offset)))
                loc = Location(self.file_path, Range(start, end))
                setattr(result.value, 'loc', loc)
                return Result.success(result.index, result.value)

            return result

        return set_loc_parser

    def name(self) -> Parser:
        return self.set_loc(self.regex(IDENTIFIER, 'identifier').map(Name))

    def constructor(self) -> Parser:
        params = self.paren(self.name().sep_by(self.literal(','))).optional([])
        return self.set_loc(seq(self.name(), params).combine(ConstructorDecl))

    def type_decl(self) -> Parser:
        # a leading '|' lets the vertical form printed by `Type.__str__` read back
        constructors = self.literal('|').optional() >> self.constructor().sep_by(self.literal('|'), min=1)
        return self.set_loc(seq(self.keyword('type') >> self.name(),
                                self.literal('=') >> constructors).combine(TypeDecl))

    def type_ref(self) -> Parser:
        list_ref = self.bracket(self.name()).map(lambda n: TypeRef(n, True))
        plain_ref = self.name().map(lambda n: TypeRef(n, False))
        return self.set_loc(list_ref | plain_ref)

    def field(self) -> Parser:
        return self.set_loc(seq(self.name(), self.literal(':') >> self.type_ref()).combine(FieldDecl))

    def record_decl(self) -> Parser:
        fields = (self.field() << self.literal(',').optional()).at_least(1)
        return self.set_loc(seq(self.keyword('record') >> self.name(), self.brace(fields)).combine(RecordDecl))

    def decls(self) -> Parser:
        return (self.type_decl() | self.record_decl()).many() << self.literal('')


def parse(source: str, file_path: str = '<unknown>') -> list[Decl] | InvalidSyntax:
    """Parse declarations. Return the declarations if parsing succeed; otherwise, return the syntax error."""
    parser = DeclParser(file_path).decls()
    try:
        return parser.parse(source)
    except ParseError as e:
        row, offset = line_info_at(source, e.index)
        pos = Position(row, offset)
        expected = ' or '.join(sorted(e.expected))
        return InvalidSyntax(f"expected {expected}", Location(file_path, Range(pos, pos)))
