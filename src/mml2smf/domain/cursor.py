from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

# Valor devolvido por `parse_number` quando o número passa do limite
NUMBER_OVERFLOW: Final[int] = 0x10000
NUMBER_LIMIT: Final[int] = 1000


@dataclass(frozen=True)
class Position:
    """Posição no texto MML, usada apenas em mensagens de erro."""

    character: str | None
    column: int
    row: int

    def __str__(self) -> str:
        char = 'fim do texto' if self.character is None else repr(self.character)
        return f'linha {self.row}, coluna {self.column} ({char})'


class Cursor:
    """Leitor de caracteres com rastreamento de linha e coluna (base 1)."""

    def __init__(self, text: str) -> None:
        self._chars: Iterator[str] = iter(text)
        self.current: str | None = next(self._chars, None)
        self.column: int = 1
        self.row: int = 1

    def has_char(self) -> bool:
        return self.current is not None

    def position(self) -> Position:
        return Position(character=self.current, column=self.column, row=self.row)

    def advance(self) -> str | None:
        """Consome o caractere atual e devolve o próximo."""
        if self.current is None:
            return None

        if self.current == '\n':
            self.column = 1
            self.row += 1
        else:
            self.column += 1

        self.current = next(self._chars, None)
        return self.current

    def skip_whitespace(self) -> None:
        while self.current is not None and self.current.isspace():
            self.advance()

    def parse_number(self) -> int:
        """Lê uma sequência de dígitos ASCII.

        Retorna 0 sem consumir nada se não houver dígitos. Se o valor passar
        de 1000, retorna `NUMBER_OVERFLOW` imediatamente e o dígito que causou
        o estouro NÃO é consumido (comportamento herdado do MML original).
        """
        value = 0
        while self.is_digit():
            value = value * 10 + int(self.current)
            if value > NUMBER_LIMIT:
                return NUMBER_OVERFLOW
            self.advance()

        return value

    def is_digit(self) -> bool:
        # str.isdigit aceita dígitos Unicode; aqui só ASCII
        return self.current is not None and '0' <= self.current <= '9'
