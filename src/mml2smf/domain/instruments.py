from dataclasses import dataclass
from typing import Final

from mml2smf.config import INSTRUMENT_CATEGORIES


@dataclass(frozen=True)
class Instrument:
    """Instrumento General MIDI com número de usuário (base 1)."""

    number: int
    name: str
    category: str

    @property
    def program(self) -> int:
        """Número de programa MIDI (base 0) enviado no Program Change."""
        return self.number - 1


@dataclass(frozen=True)
class Category:
    number: int
    name: str
    instruments: tuple[Instrument, ...]


def _build_catalog() -> tuple[tuple[Category, ...], tuple[Instrument, ...]]:
    categories: list[Category] = []
    instruments: list[Instrument] = []

    for cat_number, (cat_name, names) in enumerate(INSTRUMENT_CATEGORIES, start=1):
        members = tuple(
            Instrument(number=len(instruments) + i, name=name, category=cat_name)
            for i, name in enumerate(names, start=1)
        )
        instruments.extend(members)
        categories.append(
            Category(number=cat_number, name=cat_name, instruments=members)
        )

    return tuple(categories), tuple(instruments)


CATEGORIES, INSTRUMENTS = _build_catalog()
DEFAULT_INSTRUMENT: Final[Instrument] = INSTRUMENTS[0]


def get_instrument(number: int) -> Instrument:
    """Busca um instrumento pelo número de usuário (1..128)."""
    if not 1 <= number <= len(INSTRUMENTS):
        raise ValueError(
            f'Número de instrumento fora da faixa 1..{len(INSTRUMENTS)}: {number}'
        )
    return INSTRUMENTS[number - 1]
