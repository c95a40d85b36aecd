"""Conversor de MML (Music Macro Language) para Standard MIDI File."""

from mml2smf.application.converter import MMLConverter, convert
from mml2smf.domain.cursor import Position
from mml2smf.domain.errors import ErrorKind, MMLError
from mml2smf.domain.instruments import INSTRUMENTS, Instrument, get_instrument

__all__ = [
    'INSTRUMENTS',
    'ErrorKind',
    'Instrument',
    'MMLConverter',
    'MMLError',
    'Position',
    'convert',
    'get_instrument',
]
