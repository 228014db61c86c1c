import logging
from typing import Protocol

logger = logging.getLogger('beep_melody')


class DiagnosticSink(Protocol):
    """Recebe avisos do parser, do resolvedor e do sequenciador."""

    def report(self, level: int, index: int | None, message: str) -> None: ...


class LoggingDiagnostics:
    """Encaminha os diagnósticos para o módulo `logging`."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log: logging.Logger = log or logger

    def report(self, level: int, index: int | None, message: str) -> None:
        if index is None:
            self.log.log(level, message)
        else:
            self.log.log(level, 'nota %d: %s', index, message)
