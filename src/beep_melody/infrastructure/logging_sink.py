import logging
from types import TracebackType
from typing import Self

logger = logging.getLogger(__name__)


class LoggingToneSink:
    """Não toca nada; apenas registra os comandos (modo de ensaio)."""

    def __init__(self) -> None:
        self.emitted: int = 0

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        logger.info('%d comandos de tom registrados', self.emitted)

    def emit_tone(self, frequency: int) -> None:
        self.emitted += 1
        if frequency:
            logger.info('tom %d Hz', frequency)
        else:
            logger.info('tom desligado')

    def send_sound_event(self, code: int, value: int) -> None:
        self.emitted += 1
        logger.info('evento de som code=%d value=%d', code, value)
