import io
import logging
import struct
from array import array
from typing import BinaryIO, Final

import mido  # pyright: ignore[reportMissingTypeStubs]
from midiutil.MidiFile import writeVarLength  # pyright: ignore[reportMissingTypeStubs]

from mml2smf.config import (
    DEFAULT_RESOLUTION,
    DEFAULT_TEMPO,
    DEFAULT_VELOCITY,
    MAX_MIDI_VALUE,
)
from mml2smf.domain import tone_control
from mml2smf.domain.errors import ErrorKind, MMLError

logger = logging.getLogger(__name__)

SMF_FORMAT: Final[int] = 0
TRACK_COUNT: Final[int] = 1
HEADER_LENGTH: Final[int] = 6
MAX_BLOCKS: Final[int] = MAX_MIDI_VALUE + 1


class TrackWriter:
    """Escreve os eventos da trilha controlando delta-time e running status."""

    def __init__(self, sink: BinaryIO) -> None:
        self.sink: BinaryIO = sink
        self.delta_time: int = 0  # Ticks acumulados desde o último evento sonoro
        self.last_note_on: bool = False
        self.velocity: int = DEFAULT_VELOCITY

    def write_delta(self, ticks: int) -> None:
        self.sink.write(bytes(writeVarLength(ticks)))

    def write_message(self, message: mido.Message | mido.MetaMessage) -> None:
        """Escreve um evento com delta 0 e status completo."""
        self.write_delta(0)
        self.sink.write(bytes(message.bytes()))
        self.last_note_on = False

    def write_note(self, note: int, duration: int) -> None:
        """Escreve Note On no delta pendente e Note Off após `duration` ticks.

        O Note Off é um Note On com velocidade 0, sempre em running status.
        """
        note_on = mido.Message('note_on', note=note, velocity=self.velocity).bytes()

        self.write_delta(self.delta_time)
        if self.last_note_on:
            self.sink.write(bytes(note_on[1:]))
        else:
            self.sink.write(bytes(note_on))

        self.write_delta(duration)
        self.sink.write(bytes((note, 0)))

        self.delta_time = 0
        self.last_note_on = True


class SMFEncoder:
    """Interpreta uma sequência de tons e gera um Standard MIDI File formato 0.

    A sequência é confiável: ela só é produzida pelo `MMLParser`, portanto
    nenhuma validação é refeita aqui.
    """

    def encode(self, tseq: bytes, program: int) -> bytes:
        """Gera o arquivo completo em memória."""
        sink = io.BytesIO()
        self.write(tseq, program, sink)
        data = sink.getvalue()
        logger.debug('SMF gerado: %d bytes', len(data))
        return data

    def write(self, tseq: bytes, program: int, sink: BinaryIO) -> None:
        """Escreve o SMF em `sink`, que precisa aceitar `seek` para o
        preenchimento posterior do tamanho da trilha."""
        codes = array('b', tseq)
        tempo, resolution, pos = self._read_header(codes)
        block_pos, pos = self._scan_blocks(codes, pos)

        sink.write(
            struct.pack(
                '>4sIHHH',
                b'MThd',
                HEADER_LENGTH,
                SMF_FORMAT,
                TRACK_COUNT,
                max(1, resolution >> 2),
            )
        )
        sink.write(struct.pack('>4sI', b'MTrk', 0))  # Tamanho provisório
        track_start = sink.tell()

        track = TrackWriter(sink)
        track.write_message(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(tempo)))
        track.write_message(mido.Message('program_change', program=program))

        self._interpret(codes, pos, block_pos, track)

        track.write_message(mido.MetaMessage('end_of_track'))

        track_end = sink.tell()
        sink.seek(track_start - 4)
        sink.write(struct.pack('>I', track_end - track_start))
        sink.seek(track_end)

    def _read_header(self, codes: array) -> tuple[int, int, int]:
        """Lê tempo e resolução depois do marcador de versão."""
        tempo = DEFAULT_TEMPO
        resolution = DEFAULT_RESOLUTION
        pos = tone_control.COMMAND_SIZE

        if pos < len(codes) and codes[pos] == tone_control.TEMPO:
            tempo = (codes[pos + 1] & 0x7F) << 2
            pos += tone_control.COMMAND_SIZE

        if pos < len(codes) and codes[pos] == tone_control.RESOLUTION:
            resolution = codes[pos + 1] & 0x7F
            pos += tone_control.COMMAND_SIZE

        return tempo, resolution, pos

    def _scan_blocks(self, codes: array, pos: int) -> tuple[list[int], int]:
        """Registra o início do corpo de cada bloco, indexado pelo id."""
        block_pos = [0] * MAX_BLOCKS

        while pos < len(codes) and codes[pos] == tone_control.BLOCK_START:
            block_pos[codes[pos + 1] & 0x7F] = pos + tone_control.COMMAND_SIZE
            pos += tone_control.COMMAND_SIZE
            while pos < len(codes):
                cmd = codes[pos]
                pos += tone_control.instruction_size(cmd)
                if cmd == tone_control.BLOCK_END:
                    break

        return block_pos, pos

    def _interpret(
        self,
        codes: array,
        pos: int,
        block_pos: list[int],
        track: TrackWriter,
    ) -> None:
        pos_stack: list[int] = []

        while pos < len(codes):
            cmd = codes[pos]
            match cmd:
                case tone_control.PLAY_BLOCK:
                    if len(pos_stack) >= MAX_BLOCKS:
                        raise MMLError(
                            ErrorKind.INVALID_PLAY_BLOCK_ID,
                            detail='aninhamento de blocos excedido',
                        )
                    pos_stack.append(pos + tone_control.COMMAND_SIZE)
                    pos = block_pos[codes[pos + 1] & 0x7F]
                case tone_control.BLOCK_END:
                    pos = pos_stack.pop()
                case tone_control.SET_VOLUME:
                    volume = codes[pos + 1] & 0x7F
                    track.velocity = (MAX_MIDI_VALUE * volume // 100) & 0x7F
                    pos += tone_control.COMMAND_SIZE
                case tone_control.SILENCE:
                    track.delta_time += codes[pos + 1] & 0x7F
                    pos += tone_control.COMMAND_SIZE
                case tone_control.REPEAT:
                    multiplier = codes[pos + 1] & 0xFF
                    repeated = codes[pos + 2]
                    duration = codes[pos + 3] & 0x7F
                    if repeated == tone_control.SILENCE:
                        track.delta_time += multiplier * duration
                    else:
                        # Só a primeira nota herda o delta pendente
                        for _ in range(multiplier):
                            track.write_note(repeated & 0x7F, duration)
                    pos += tone_control.REPEAT_SIZE
                case _:
                    track.write_note(cmd & 0x7F, codes[pos + 1] & 0x7F)
                    pos += tone_control.COMMAND_SIZE
