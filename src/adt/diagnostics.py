from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NoReturn

__all__ = ['ValidationError', 'err',
           'Position', 'Range', 'Location', 'Level', 'Diagnostic', 'Issuer',
           'InvalidSyntax', 'UndefinedName', 'RedefinedName', 'InvalidDeclaration']


class ValidationError(TypeError):
    """Construction or validation failure of a type, record or value."""
    pass


def err(msg: str) -> NoReturn:
    """Fail with a descriptive message."""
    raise ValidationError(msg)


@dataclass
class Position:
    """Position in a file: consists of a row number and an offset in that row, both *zero*-based."""
    row: int
    offset: int

    def __str__(self):
        return f"{self.row + 1}:{self.offset + 1}"


@dataclass
class Range:
    """Position range in a file: consists of two *inclusive* endpoints."""
    start: Position
    end: Position

    def __str__(self):
        return f"{self.start}-{self.end}"


@dataclass
class Location:
    """Location in a file: consists of the file path and a range within that file."""
    file_path: str
    range: Range

    def __str__(self):
        return f"{self.file_path}:{self.range.start}"


class Level(Enum):
    """Diagnostic level."""
    ERROR = 1
    WARN = 2


@dataclass(kw_only=True)
class Diagnostic:
    """Diagnostic object: consists of a diagnostic level, a main error location, and a message."""
    level: Level = Level.ERROR
    loc: Location | None
    msg: str


class Issuer:
    """Diagnostic collector."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def issue(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self._diagnostics.append(diagnostic)

    @property
    def has_diagnostics(self) -> bool:
        """Test if there are any diagnostics."""
        return len(self._diagnostics) > 0

    @property
    def has_errors(self) -> bool:
        """Test if there are any ERROR-level diagnostics."""
        return any(d.level == Level.ERROR for d in self._diagnostics)

    def get_diagnostics(self) -> Iterable[Diagnostic]:
        """Get all diagnostics."""
        return self._diagnostics

    def pretty(self) -> str:
        """Pretty-print all diagnostics."""
        lines = []
        for d in self._diagnostics:
            prefix = "ERROR" if d.level == Level.ERROR else "WARN"
            loc_str = f"{d.loc}" if d.loc else "<unknown location>"
            lines.append(f"{loc_str} - {prefix}: {d.msg}")
        return "\n".join(lines)


# Instances of specific diagnostics:
class InvalidSyntax(Diagnostic):
    def __init__(self, msg: str, loc: Location) -> None:
        super().__init__(loc=loc, msg=f"Invalid syntax: {msg}")


class UndefinedName(Diagnostic):
    def __init__(self, id: str, loc: Location) -> None:
        super().__init__(loc=loc, msg=f"Undefined name: {id}")


class RedefinedName(Diagnostic):
    def __init__(self, id: str, loc: Location) -> None:
        super().__init__(loc=loc, msg=f"Name '{id}' is already defined")


class InvalidDeclaration(Diagnostic):
    def __init__(self, id: str, reason: str, loc: Location) -> None:
        super().__init__(loc=loc, msg=f"Invalid declaration of '{id}': {reason.strip()}")
