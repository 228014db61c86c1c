import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from beep_melody.config import DEFAULT_BEEP_FREQUENCY, SND_BELL, SND_TONE
from beep_melody.domain.diagnostics import DiagnosticSink, LoggingDiagnostics
from beep_melody.domain.models import PlaybackSettings
from beep_melody.domain.parser import MelodyParser
from beep_melody.domain.sequencer import MelodySequencer, ToneSink
from beep_melody.infrastructure.evdev_sink import EvdevToneSink
from beep_melody.infrastructure.logging_sink import LoggingToneSink
from beep_melody.infrastructure.midi_port_sink import MidiPortToneSink
from beep_melody.melodies import get_melody

logger = logging.getLogger(__name__)


class BeeperController:
    def __init__(
        self,
        sleep: Callable[[float], None] = time.sleep,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self.sleep: Callable[[float], None] = sleep
        self.diagnostics: DiagnosticSink = diagnostics or LoggingDiagnostics()
        self.parser: MelodyParser = MelodyParser(self.diagnostics)
        self.current_sequencer: MelodySequencer | None = None

    def play_melody(self, text: str, settings: PlaybackSettings) -> int:
        """Analisa o texto e toca a melodia no dispositivo escolhido.

        O cabeçalho é validado antes de abrir o dispositivo, então um erro
        nos padrões nunca produz som.
        """
        melody = self.parser.parse(text)

        with self.open_sink(settings) as sink:
            self.current_sequencer = MelodySequencer(
                sink,
                strict=settings.strict,
                diagnostics=self.diagnostics,
                parser=self.parser,
                sleep=self.sleep,
            )
            try:
                return self.current_sequencer.play_melody(melody)
            finally:
                self.current_sequencer = None

    def play_named(self, name: str, settings: PlaybackSettings) -> int:
        """Toca uma melodia do catálogo."""
        return self.play_melody(get_melody(name), settings)

    def stop_music(self) -> None:
        """Para a reprodução atual depois da nota em andamento."""
        if self.current_sequencer:
            self.current_sequencer.stop()

    def beep(
        self,
        frequency: int | None,
        duration_ms: int,
        settings: PlaybackSettings,
    ) -> None:
        """Um único bipe: tom na frequência dada ou a campainha padrão."""
        if frequency is None:
            code, value = SND_BELL, DEFAULT_BEEP_FREQUENCY
        else:
            code, value = SND_TONE, frequency

        device = (
            LoggingToneSink()
            if settings.dry_run
            else EvdevToneSink(settings.device_path)
        )
        with device as sink:
            sink.send_sound_event(code, value)
            try:
                self.sleep(duration_ms / 1000)
            finally:
                sink.send_sound_event(code, 0)

    @contextmanager
    def open_sink(self, settings: PlaybackSettings) -> Iterator[ToneSink]:
        if settings.dry_run:
            with LoggingToneSink() as sink:
                yield sink
        elif settings.midi_port is not None:
            with MidiPortToneSink.open(settings.midi_port or None) as sink:
                yield sink
        else:
            with EvdevToneSink(settings.device_path) as sink:
                logger.info('Usando o dispositivo %s', settings.device_path)
                yield sink
