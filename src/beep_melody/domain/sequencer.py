import logging
import threading
import time
from collections.abc import Callable, Iterator
from typing import Protocol

from beep_melody.domain.diagnostics import DiagnosticSink, LoggingDiagnostics
from beep_melody.domain.errors import NoteError, SinkIoError
from beep_melody.domain.events import ResolvedNote
from beep_melody.domain.models import Melody
from beep_melody.domain.parser import MelodyParser, NoteResolver

logger = logging.getLogger(__name__)

MICROS_PER_SECOND: int = 1_000_000


class ToneSink(Protocol):
    """Dispositivo que liga (frequência > 0) ou desliga (0) o tom."""

    def emit_tone(self, frequency: int) -> None: ...


class MelodySequencer:
    """Toca as notas em ordem, uma de cada vez, sem montar a lista inteira.

    Cada nota vira: tom ligado, espera da duração, tom desligado e uma
    pausa extra de 1/4 da duração. Pausas (frequência 0) passam pela mesma
    sequência. Notas malformadas são ignoradas com aviso, a menos que
    `strict` esteja ativo.
    """

    def __init__(
        self,
        sink: ToneSink,
        *,
        strict: bool = False,
        diagnostics: DiagnosticSink | None = None,
        parser: MelodyParser | None = None,
        resolver: NoteResolver | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.sink: ToneSink = sink
        self.strict: bool = strict
        self.diagnostics: DiagnosticSink = diagnostics or LoggingDiagnostics()
        self.parser: MelodyParser = parser or MelodyParser(self.diagnostics)
        self.resolver: NoteResolver = resolver or NoteResolver()
        self._sleep: Callable[[float], None] = sleep
        self._stop_request: threading.Event = threading.Event()

    def play(self, text: str) -> int:
        """Analisa e toca a melodia. Retorna o número de notas tocadas."""
        return self.play_melody(self.parser.parse(text))

    def play_melody(self, melody: Melody) -> int:
        self._stop_request.clear()
        if melody.name:
            logger.info('Tocando %s', melody.name)

        played = 0
        for note in self.resolve_notes(melody):
            self._play_note(note)
            played += 1

        if self._stop_request.is_set():
            logger.info('Reprodução interrompida depois de %d notas', played)
        return played

    def resolve_notes(self, melody: Melody) -> Iterator[ResolvedNote]:
        """Resolve as notas sob demanda, aplicando a política de erros.

        Um pedido de `stop()` encerra a sequência antes de ler a próxima nota.
        """
        for token in melody.note_tokens():
            if self._stop_request.is_set():
                return
            try:
                note = self.resolver.resolve(token, melody.defaults)
            except NoteError as exc:
                if self.strict:
                    raise
                self.diagnostics.report(
                    logging.WARNING, exc.index, f'{exc.detail}; nota ignorada'
                )
                continue
            yield note

    def stop(self) -> None:
        """Sinalizar para parar antes da próxima nota."""
        self._stop_request.set()

    def _play_note(self, note: ResolvedNote) -> None:
        logger.debug(
            'nota %d %r: %d Hz, %d us',
            note.source_index,
            note.source_text,
            note.frequency,
            note.duration_micros,
        )
        self._emit(note.frequency, note.source_index)
        try:
            self._wait(note.duration_micros)
        finally:
            self._emit(0, note.source_index)
        self._wait(note.gap_micros)

    def _emit(self, frequency: int, index: int) -> None:
        try:
            self.sink.emit_tone(frequency)
        except OSError as exc:
            raise SinkIoError(index, exc) from exc

    def _wait(self, micros: int) -> None:
        if micros > 0:
            self._sleep(micros / MICROS_PER_SECOND)
