import logging
from array import array
from typing import Final

from mml2smf.config import (
    MAX_MIDI_VALUE,
    MAX_RESOLUTION,
    MAX_TEMPO,
    MAX_VOLUME,
    MIN_REPEAT,
    MIN_RESOLUTION,
    MIN_TEMPO,
)
from mml2smf.domain import tone_control
from mml2smf.domain.errors import ErrorKind, MMLError
from mml2smf.domain.models import ParseState

logger = logging.getLogger(__name__)

# Distância em semitons a partir do Dó da oitava atual
NOTE_OFFSETS: Final[dict[str, int]] = {
    'C': 0,
    'D': 2,
    'E': 4,
    'F': 5,
    'G': 7,
    'A': 9,
    'B': 11,
}
SHARP_SIGNS: Final[tuple[str, ...]] = ('+', '#')
FLAT_SIGN: Final[str] = '-'
OCTAVE_STEP: Final[int] = 12

# Descritor de eventos: bit 0 = alguma produção casou,
# demais bits = 2 * quantidade de notas/pausas
MATCHED: Final[int] = 1
NOTE_EVENT: Final[int] = 2


class MMLParser:
    """Converte texto MML em uma sequência de tons (descida recursiva).

    A mesma gramática de sequência é usada para a raiz, para o corpo dos
    blocos `{id ...}` e para o corpo das repetições `[n ...]`.
    """

    def parse(self, text: str) -> bytes:
        """Converte o texto inteiro; o primeiro erro aborta a conversão."""
        state = ParseState(text)
        output = array('b')

        self._parse_tempo(state)
        self._parse_resolution(state)
        output.extend(
            (
                tone_control.VERSION,
                tone_control.FORMAT_VERSION,
                tone_control.TEMPO,
                state.tempo >> 2,
                tone_control.RESOLUTION,
                state.resolution,
            )
        )

        self._parse_blocks(state, output)
        descriptor = self._parse_sequence(state, output)

        cursor = state.cursor
        cursor.skip_whitespace()
        if cursor.has_char():
            raise self._error(state, ErrorKind.UNEXPECTED_REMAINS)
        if not descriptor & MATCHED:
            raise self._error(state, ErrorKind.EMPTY_SEQUENCE)

        logger.debug(
            'MML analisado: %d blocos, %d bytes de sequência',
            state.next_block_id,
            len(output),
        )
        return output.tobytes()

    def _error(self, state: ParseState, kind: ErrorKind) -> MMLError:
        return MMLError(kind, state.cursor.position())

    def _parse_tempo(self, state: ParseState) -> None:
        cursor = state.cursor
        cursor.skip_whitespace()
        if cursor.current not in ('T', 't'):
            return

        cursor.advance()
        tempo = cursor.parse_number()
        if not MIN_TEMPO <= tempo <= MAX_TEMPO:
            raise self._error(state, ErrorKind.INVALID_TEMPO)
        state.tempo = tempo

    def _parse_resolution(self, state: ParseState) -> None:
        cursor = state.cursor
        cursor.skip_whitespace()
        if cursor.current != '%':
            return

        cursor.advance()
        resolution = cursor.parse_number()
        if not MIN_RESOLUTION <= resolution <= MAX_RESOLUTION:
            raise self._error(state, ErrorKind.INVALID_RESOLUTION)
        state.resolution = resolution
        state.duration = max(1, resolution // 4)

    def _parse_blocks(self, state: ParseState, output: array) -> None:
        """Lê as definições `{id ...}` que precedem a sequência raiz."""
        cursor = state.cursor

        while True:
            cursor.skip_whitespace()
            if cursor.current != '{':
                return

            cursor.advance()
            cursor.skip_whitespace()
            if not cursor.is_digit():
                raise self._error(state, ErrorKind.INVALID_BLOCK_ID)

            block_id = cursor.parse_number()
            if block_id != state.next_block_id or block_id > MAX_MIDI_VALUE:
                raise self._error(state, ErrorKind.INVALID_BLOCK_ID)

            output.extend((tone_control.BLOCK_START, block_id))
            self._parse_sequence(state, output)

            match cursor.current:
                case '}':
                    cursor.advance()
                case None:
                    raise self._error(state, ErrorKind.UNTERMINATED_BLOCK)
                case _:
                    raise self._error(state, ErrorKind.UNEXPECTED_CHARACTER)

            output.extend((tone_control.BLOCK_END, block_id))
            state.next_block_id += 1

    def _parse_sequence(self, state: ParseState, output: array) -> int:
        """Despacha produções até o fim do texto, `]`, `}` ou um caractere
        desconhecido. Retorna o descritor de eventos."""
        cursor = state.cursor
        descriptor = 0

        while True:
            cursor.skip_whitespace()
            char = cursor.current
            if char is None:
                return descriptor

            match char.upper():
                case 'O':
                    self._handle_octave(state)
                case '<':
                    self._handle_octave_up(state)
                case '>':
                    self._handle_octave_down(state)
                case 'L':
                    self._handle_length(state)
                case 'C' | 'D' | 'E' | 'F' | 'G' | 'A' | 'B':
                    self._handle_note(state, output)
                    descriptor += NOTE_EVENT
                case 'R':
                    self._handle_rest(state, output)
                    descriptor += NOTE_EVENT
                case '$':
                    self._handle_play_block(state, output)
                case '[':
                    self._handle_repeat(state, output)
                case 'V':
                    self._handle_volume(state, output)
                case _:
                    return descriptor

            descriptor |= MATCHED

    def _handle_octave(self, state: ParseState) -> None:
        cursor = state.cursor
        cursor.advance()
        if not cursor.is_digit():
            raise self._error(state, ErrorKind.INVALID_OCTAVE)

        octave = cursor.parse_number()
        baseline = tone_control.C4 + (octave - 4) * OCTAVE_STEP
        if not 0 <= baseline <= MAX_MIDI_VALUE:
            raise self._error(state, ErrorKind.INVALID_OCTAVE_VALUE)
        state.octave = baseline

    def _handle_octave_up(self, state: ParseState) -> None:
        # `<` sobe e `>` desce, ao contrário do MML mais comum
        if state.octave + OCTAVE_STEP > MAX_MIDI_VALUE:
            raise self._error(state, ErrorKind.INVALID_INCREASE_OCTAVE)
        state.octave += OCTAVE_STEP
        state.cursor.advance()

    def _handle_octave_down(self, state: ParseState) -> None:
        if state.octave - OCTAVE_STEP < 0:
            raise self._error(state, ErrorKind.INVALID_DECREASE_OCTAVE)
        state.octave -= OCTAVE_STEP
        state.cursor.advance()

    def _handle_length(self, state: ParseState) -> None:
        state.cursor.advance()
        state.duration = self._parse_length(state)

    def _handle_note(self, state: ParseState, output: array) -> None:
        cursor = state.cursor
        note = state.octave + NOTE_OFFSETS[cursor.current.upper()]
        cursor.advance()
        if not 0 <= note <= MAX_MIDI_VALUE:
            raise self._error(state, ErrorKind.INVALID_NOTE)

        if cursor.current in SHARP_SIGNS:
            note += 1
            cursor.advance()
        elif cursor.current == FLAT_SIGN:
            note -= 1
            cursor.advance()

        if not 0 <= note <= MAX_MIDI_VALUE:
            raise self._error(state, ErrorKind.INVALID_NOTE)

        duration = self._parse_length(state)
        output.extend((note, duration))

    def _handle_rest(self, state: ParseState, output: array) -> None:
        cursor = state.cursor
        cursor.advance()
        if cursor.current in SHARP_SIGNS or cursor.current == FLAT_SIGN:
            raise self._error(state, ErrorKind.INVALID_REST)

        duration = self._parse_length(state)
        output.extend((tone_control.SILENCE, duration))

    def _handle_play_block(self, state: ParseState, output: array) -> None:
        cursor = state.cursor
        cursor.advance()
        if not cursor.is_digit():
            raise self._error(state, ErrorKind.INVALID_PLAY_BLOCK_ID)

        block_id = cursor.parse_number()
        # Só blocos já fechados: sem referência adiante nem a si mesmo
        if not 0 <= block_id < state.next_block_id:
            raise self._error(state, ErrorKind.INVALID_PLAY_BLOCK_ID)
        output.extend((tone_control.PLAY_BLOCK, block_id))

    def _handle_repeat(self, state: ParseState, output: array) -> None:
        """Trata `[n ...]`.

        Um corpo com exatamente uma nota ou pausa vira a instrução compacta
        `REPEAT n cmd duração`; qualquer outro corpo é copiado n vezes.
        """
        cursor = state.cursor
        cursor.advance()
        multiplier = cursor.parse_number()
        if not MIN_REPEAT <= multiplier <= MAX_MIDI_VALUE:
            raise self._error(state, ErrorKind.INVALID_REPEAT_NUMBER)

        body = array('b')
        descriptor = self._parse_sequence(state, body)

        if cursor.current != ']':
            raise self._error(state, ErrorKind.INVALID_REPEAT_END)
        if not descriptor & MATCHED or not body:
            raise self._error(state, ErrorKind.INVALID_REPEAT)
        cursor.advance()

        if descriptor >> 1 == 1 and len(body) == tone_control.COMMAND_SIZE:
            output.extend((tone_control.REPEAT, multiplier, body[0], body[1]))
        else:
            output.extend(body * multiplier)

    def _handle_volume(self, state: ParseState, output: array) -> None:
        cursor = state.cursor
        cursor.advance()
        if not cursor.is_digit():
            raise self._error(state, ErrorKind.INVALID_VOLUME)

        volume = cursor.parse_number()
        if not 0 <= volume <= MAX_VOLUME:
            raise self._error(state, ErrorKind.INVALID_VOLUME)
        output.extend((tone_control.SET_VOLUME, volume))

    def _parse_length(self, state: ParseState) -> int:
        """Lê um literal de duração opcional e devolve a duração em ticks.

        `(n)` é uma contagem de ticks crua; `n` divide a resolução e cada `.`
        seguinte soma a metade do valor anterior. Sem literal, vale a duração
        padrão atual.
        """
        cursor = state.cursor

        if cursor.current == '(':
            cursor.advance()
            ticks = cursor.parse_number()
            if cursor.current != ')':
                raise self._error(state, ErrorKind.INVALID_LENGTH)
            cursor.advance()
        elif cursor.is_digit():
            divisor = cursor.parse_number()
            if not 1 <= divisor <= state.resolution:
                raise self._error(state, ErrorKind.INVALID_LENGTH)

            ticks = max(1, state.resolution // divisor)
            while cursor.current == '.':
                cursor.advance()
                divisor *= 2
                ticks += max(1, state.resolution // divisor)
        else:
            return state.duration

        if not 1 <= ticks <= MAX_MIDI_VALUE:
            raise self._error(state, ErrorKind.INVALID_LENGTH)
        return ticks
