import logging
from pathlib import Path

from mml2smf.config import MAX_MIDI_VALUE, OUTPUT_SUFFIX
from mml2smf.domain.errors import ErrorKind, MMLError
from mml2smf.domain.instruments import DEFAULT_INSTRUMENT, Instrument
from mml2smf.domain.parser import MMLParser
from mml2smf.infrastructure.smf_encoder import SMFEncoder

logger = logging.getLogger(__name__)


def convert(source: str, program: int = 0) -> bytes:
    """Converte texto MML em um arquivo SMF completo.

    `program` é o número de programa MIDI (base 0). Qualquer erro de sintaxe
    aborta a conversão com `MMLError`; nenhum resultado parcial é devolvido.
    """
    if not 0 <= program <= MAX_MIDI_VALUE:
        raise ValueError(f'Programa MIDI fora da faixa 0..127: {program}')

    tseq = MMLParser().parse(source)
    try:
        return SMFEncoder().encode(tseq, program)
    except OSError as exc:
        raise MMLError(ErrorKind.IO_ERROR, detail=str(exc)) from exc


class MMLConverter:
    """Lê um arquivo MML, converte e grava o arquivo MIDI."""

    def convert_file(
        self,
        input_path: Path,
        output_path: Path | None = None,
        instrument: Instrument | None = None,
    ) -> Path:
        """Converte `input_path` e devolve o caminho do arquivo gerado.

        Sem `output_path`, grava `<nome do arquivo>.mid` no diretório atual.
        O arquivo de saída só é criado se a conversão inteira der certo.
        """
        instrument = instrument or DEFAULT_INSTRUMENT
        if output_path is None:
            output_path = Path(input_path.name + OUTPUT_SUFFIX)

        logger.info('Entrada: %s', input_path)
        logger.info('Saída: %s', output_path)
        logger.info('Instrumento: %d - %s', instrument.number, instrument.name)

        try:
            source = input_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            logger.exception('Erro ao ler %s', input_path)
            raise MMLError(ErrorKind.IO_ERROR, detail=str(exc)) from exc

        data = convert(source, instrument.program)

        try:
            with output_path.open('wb') as output_file:
                output_file.write(data)
        except OSError as exc:
            logger.exception('Erro ao salvar MIDI')
            raise MMLError(ErrorKind.IO_ERROR, detail=str(exc)) from exc

        logger.info('Conversão de MML para SMF concluída')
        return output_path
