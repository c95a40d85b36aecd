from mml2smf.config import (
    DEFAULT_DURATION,
    DEFAULT_RESOLUTION,
    DEFAULT_TEMPO,
)
from mml2smf.domain import tone_control
from mml2smf.domain.cursor import Cursor


class ParseState:
    """Estado transitório usado apenas durante uma conversão."""

    def __init__(self, text: str) -> None:
        self.cursor: Cursor = Cursor(text)
        self.tempo: int = DEFAULT_TEMPO
        self.resolution: int = DEFAULT_RESOLUTION
        self.octave: int = tone_control.C4  # Nota MIDI do Dó da oitava atual
        self.duration: int = DEFAULT_DURATION  # Duração padrão em ticks
        self.next_block_id: int = 0
