import os
import sys
from argparse import ArgumentParser
from typing import Sequence

from adt.analyzer import analyze
from adt.diagnostics import InvalidSyntax, Issuer
from adt.parser import parse
from adt.record import Record


def check_path(path: str, issuer: Issuer, *, quiet: bool = False) -> None:
    if os.path.isfile(path):
        process_file(path, issuer, quiet=quiet)
    else:
        for entry in sorted(os.listdir(path)):
            entry_path = os.path.join(path, entry)
            if os.path.isfile(entry_path) and entry_path.endswith('.adt'):
                process_file(entry_path, issuer, quiet=quiet)


def process_file(file_path: str, issuer: Issuer, *, quiet: bool = False) -> None:
    with open(file_path) as f:
        source = f.read()

    result = parse(source, file_path)
    if isinstance(result, InvalidSyntax):
        issuer.issue(result)
        return

    scope = analyze(result, issuer)
    if quiet:
        return
    for declared in scope.values():
        print(declared.signature() if isinstance(declared, Record) else declared)


def main(argv: Sequence[str] | None = None) -> int:
    parser = ArgumentParser(prog='adt', description='check type and record declarations')
    parser.add_argument('INPUT_FILE', nargs='+', help='declaration files, or folders of *.adt files')
    parser.add_argument('-q', '--quiet', action='store_true', help='only report diagnostics')

    args = parser.parse_args(argv)
    missing = [path for path in args.INPUT_FILE if not os.path.exists(path)]
    if missing:
        for path in missing:
            print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)

    issuer = Issuer()
    for path in args.INPUT_FILE:
        check_path(path, issuer, quiet=args.quiet)

    if issuer.has_diagnostics:
        print(issuer.pretty(), file=sys.stderr)
    return 1 if issuer.has_errors else 0


if __name__ == '__main__':
    sys.exit(main())
