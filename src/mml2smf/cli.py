import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from mml2smf.application.converter import MMLConverter
from mml2smf.domain.errors import MMLError
from mml2smf.domain.instruments import (
    CATEGORIES,
    INSTRUMENTS,
    Instrument,
    get_instrument,
)

logger = logging.getLogger(__name__)

PROG_NAME = 'mml2smf'


def _package_version() -> str:
    try:
        return version(PROG_NAME)
    except PackageNotFoundError:
        return '0.0.0'


def _instrument_arg(value: str) -> Instrument:
    try:
        return get_instrument(int(value))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f'número de instrumento inválido: {value} (use 1..{len(INSTRUMENTS)})'
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description='Gera arquivos SMF (Standard MIDI File) a partir de MML.',
    )
    parser.add_argument(
        '-v',
        '--version',
        action='version',
        version=f'{PROG_NAME} {_package_version()}',
    )
    parser.add_argument(
        '--debug', action='store_true', help='Mostra mensagens de depuração.'
    )

    commands = parser.add_subparsers(dest='command')

    to_smf = commands.add_parser(
        'mml2smf', help='Gera um arquivo SMF a partir de um arquivo de texto MML.'
    )
    to_smf.add_argument('mml_file', type=Path, help='Arquivo de texto MML.')
    to_smf.add_argument('--output', type=Path, default=None, help='Arquivo de saída.')
    to_smf.add_argument(
        '--instrument',
        type=_instrument_arg,
        default=None,
        help=f'Número do instrumento (1..{len(INSTRUMENTS)}, padrão: 1).',
    )

    commands.add_parser(
        'list-instruments', help='Lista os instrumentos aceitos por --instrument.'
    )
    return parser


def list_instruments() -> None:
    for category in CATEGORIES:
        print(category.name)
        for instrument in category.instruments:
            print(f'   {instrument.number:3} - {instrument.name}')


def mml_to_smf(args: argparse.Namespace) -> int:
    input_path: Path = args.mml_file
    if not input_path.is_file():
        print(f'{input_path} não encontrado', file=sys.stderr)
        return 1

    try:
        MMLConverter().convert_file(
            input_path=input_path,
            output_path=args.output,
            instrument=args.instrument,
        )
    except MMLError as exc:
        print(f'Erro MML: {exc}', file=sys.stderr)
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(message)s',
    )

    match args.command:
        case 'mml2smf':
            return mml_to_smf(args)
        case 'list-instruments':
            list_instruments()
        case _:
            parser.print_help()

    return 0
