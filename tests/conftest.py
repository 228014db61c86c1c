import pytest

from beep_melody.domain.models import MelodyDefaults


class Timeline:
    """Registra, em ordem, os tons emitidos e as esperas."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, float]] = []

    def emit_tone(self, frequency: int) -> None:
        self.entries.append(('tone', frequency))

    def sleep(self, seconds: float) -> None:
        self.entries.append(('sleep', seconds))

    @property
    def tones(self) -> list[float]:
        return [value for kind, value in self.entries if kind == 'tone']


class RecordingDiagnostics:
    def __init__(self) -> None:
        self.reports: list[tuple[int, int | None, str]] = []

    def report(self, level: int, index: int | None, message: str) -> None:
        self.reports.append((level, index, message))


@pytest.fixture
def timeline() -> Timeline:
    return Timeline()


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture
def defaults() -> MelodyDefaults:
    return MelodyDefaults(octave=5, duration=4, tempo=125)
