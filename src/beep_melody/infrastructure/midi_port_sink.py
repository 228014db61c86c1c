import logging
import math
from types import TracebackType
from typing import Self

import mido  # pyright: ignore[reportMissingTypeStubs]
from mido.ports import BaseOutput  # pyright: ignore[reportMissingTypeStubs]

from beep_melody.config import (
    DEFAULT_MIDI_VELOCITY,
    MAX_MIDI_VALUE,
    MIDI_A4_FREQUENCY,
    MIDI_A4_KEY,
)

logger = logging.getLogger(__name__)


def frequency_to_key(frequency: int) -> int:
    """Tecla MIDI mais próxima da frequência (A4 = 440 Hz = 69)."""
    key = round(MIDI_A4_KEY + 12 * math.log2(frequency / MIDI_A4_FREQUENCY))
    return max(0, min(MAX_MIDI_VALUE, key))


class MidiPortToneSink:
    """Envia os comandos de tom para uma porta de saída MIDI.

    Apenas uma tecla soa por vez: cada novo tom solta a anterior e o tom
    0 envia `note_off`.
    """

    def __init__(
        self,
        port: BaseOutput,
        velocity: int = DEFAULT_MIDI_VELOCITY,
        channel: int = 0,
    ) -> None:
        self.port: BaseOutput = port
        self.velocity: int = velocity
        self.channel: int = channel
        self._sounding_key: int | None = None

    @classmethod
    def open(cls, name: str | None = None) -> Self:
        """Abre a porta pelo nome (ou a porta padrão do backend)."""
        port = mido.open_output(name)
        logger.info('Porta MIDI aberta: %s', port.name)
        return cls(port)

    def close(self) -> None:
        try:
            self._release()
        finally:
            self.port.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def emit_tone(self, frequency: int) -> None:
        self._release()
        if frequency <= 0:
            return

        key = frequency_to_key(frequency)
        self._send(
            mido.Message(
                'note_on', channel=self.channel, note=key, velocity=self.velocity
            )
        )
        self._sounding_key = key

    def _release(self) -> None:
        if self._sounding_key is None:
            return
        key = self._sounding_key
        self._sounding_key = None
        self._send(mido.Message('note_off', channel=self.channel, note=key))

    def _send(self, message: mido.Message) -> None:
        try:
            self.port.send(message)
        except ValueError as exc:
            # mido sinaliza porta fechada com ValueError
            raise OSError(str(exc)) from exc
