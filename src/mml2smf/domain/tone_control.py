"""Contrato da sequência de tons (bytecode entre o parser e o encoder).

Cada instrução ocupa dois bytes com sinal, exceto `REPEAT`, que ocupa quatro.
Um primeiro byte não negativo é sempre uma nota (`nota, duração`).
"""

from typing import Final

SILENCE: Final[int] = -1
VERSION: Final[int] = -2
TEMPO: Final[int] = -3
RESOLUTION: Final[int] = -4
BLOCK_START: Final[int] = -5
BLOCK_END: Final[int] = -6
PLAY_BLOCK: Final[int] = -7
SET_VOLUME: Final[int] = -8
REPEAT: Final[int] = -9

FORMAT_VERSION: Final[int] = 1

# Nota MIDI do Dó central
C4: Final[int] = 60

# Tamanho do cabeçalho: VERSION 1 TEMPO t RESOLUTION r
HEADER_SIZE: Final[int] = 6
REPEAT_SIZE: Final[int] = 4
COMMAND_SIZE: Final[int] = 2


def instruction_size(cmd: int) -> int:
    return REPEAT_SIZE if cmd == REPEAT else COMMAND_SIZE
