from enum import StrEnum

from mml2smf.domain.cursor import Position


class ErrorKind(StrEnum):
    """Tipos de erro que podem abortar uma conversão."""

    INVALID_TEMPO = 'tempo inválido'
    INVALID_RESOLUTION = 'resolução inválida'
    INVALID_BLOCK_ID = 'id de bloco inválido'
    UNEXPECTED_CHARACTER = 'caractere inesperado no bloco'
    UNTERMINATED_BLOCK = 'bloco sem fechamento'
    INVALID_OCTAVE = 'oitava inválida'
    INVALID_OCTAVE_VALUE = 'valor de oitava fora da faixa'
    INVALID_INCREASE_OCTAVE = 'oitava acima do limite'
    INVALID_DECREASE_OCTAVE = 'oitava abaixo do limite'
    INVALID_LENGTH = 'duração inválida'
    INVALID_NOTE = 'nota inválida'
    INVALID_REST = 'pausa inválida'
    INVALID_PLAY_BLOCK_ID = 'id de bloco a tocar inválido'
    INVALID_REPEAT = 'repetição inválida'
    INVALID_REPEAT_NUMBER = 'número de repetições inválido'
    INVALID_REPEAT_END = 'repetição sem fechamento'
    INVALID_VOLUME = 'volume inválido'
    UNEXPECTED_REMAINS = 'texto restante inesperado'
    EMPTY_SEQUENCE = 'sequência vazia'
    IO_ERROR = 'erro de E/S'


class MMLError(Exception):
    """Erro de conversão MML -> SMF.

    Erros de sintaxe carregam a `Position` do cursor no momento da detecção;
    erros de E/S não têm posição.
    """

    def __init__(
        self,
        kind: ErrorKind,
        position: Position | None = None,
        detail: str | None = None,
    ) -> None:
        self.kind: ErrorKind = kind
        self.position: Position | None = position
        self.detail: str | None = detail
        super().__init__(self._format())

    def _format(self) -> str:
        message = str(self.kind)
        if self.position is not None:
            message += f' em {self.position}'
        if self.detail:
            message += f': {self.detail}'
        return message
