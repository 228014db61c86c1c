import errno
import logging
import os
import struct
from pathlib import Path
from types import TracebackType
from typing import Final, Self

from beep_melody.config import EV_SND, SND_TONE

logger = logging.getLogger(__name__)


class EvdevToneSink:
    """Escreve eventos de som (`EV_SND`) em /dev/input/eventN."""

    # struct input_event: timeval (2 x long), type (u16), code (u16), value (s32)
    INPUT_EVENT: Final[struct.Struct] = struct.Struct('llHHi')

    def __init__(self, path: str | Path) -> None:
        self.path: Path = Path(path)
        self._fd: int | None = None

    def open(self) -> None:
        self._fd = os.open(self.path, os.O_WRONLY)
        logger.debug('Dispositivo %s aberto', self.path)

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def emit_tone(self, frequency: int) -> None:
        self.send_sound_event(SND_TONE, frequency)

    def send_sound_event(self, code: int, value: int) -> None:
        """Escreve um único `input_event` com `type=EV_SND`."""
        if self._fd is None:
            raise OSError(errno.EBADF, 'dispositivo não está aberto', str(self.path))

        data = self.INPUT_EVENT.pack(0, 0, EV_SND, code, value)
        written = os.write(self._fd, data)
        if written != len(data):
            raise OSError(
                errno.EIO,
                f'escrita parcial ({written} de {len(data)} bytes)',
                str(self.path),
            )
