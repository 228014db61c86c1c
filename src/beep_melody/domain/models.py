from collections.abc import Iterator
from dataclasses import dataclass

from beep_melody.config import DEFAULT_EVENT_NUMBER, EVENT_DEVICE_TEMPLATE

WHOLE_NOTE_MILLIS_PER_BPM: int = 240_000


@dataclass(frozen=True)
class MelodyDefaults:
    """Parâmetros padrão já validados de uma melodia."""

    octave: int
    duration: int
    tempo: int

    @property
    def whole_note_millis(self) -> float:
        """Duração da semibreve em ms (240000 / tempo).

        Valor de referência do formato; o resolvedor usa a forma inteira
        `whole_note_micros` para evitar arredondamento de ponto flutuante.
        """
        return WHOLE_NOTE_MILLIS_PER_BPM / self.tempo

    @property
    def whole_note_micros(self) -> int:
        return WHOLE_NOTE_MILLIS_PER_BPM * 1000 // self.tempo


@dataclass(frozen=True)
class NoteToken:
    """Trecho bruto entre vírgulas da lista de notas."""

    index: int
    text: str


@dataclass(frozen=True)
class Melody:
    """Resultado do parser: nome, padrões e a lista de notas ainda não lida."""

    name: str | None
    defaults: MelodyDefaults
    notes_text: str

    def note_tokens(self) -> Iterator[NoteToken]:
        """Gera as notas uma a uma, na ordem do texto.

        Cada chamada devolve um novo iterador; o iterador em si só pode
        ser percorrido uma vez. Espaços em volta de cada nota são
        removidos e trechos vazios são ignorados. O índice começa em 1.
        """
        text = self.notes_text
        index = 0
        start = 0
        while start <= len(text):
            end = text.find(',', start)
            if end == -1:
                end = len(text)
            chunk = text[start:end].strip()
            start = end + 1
            if chunk:
                index += 1
                yield NoteToken(index=index, text=chunk)


@dataclass
class PlaybackSettings:
    """Configuração definida pelo usuário na linha de comando."""

    event_number: int = DEFAULT_EVENT_NUMBER
    strict: bool = False
    dry_run: bool = False
    midi_port: str | None = None

    @property
    def device_path(self) -> str:
        return EVENT_DEVICE_TEMPLATE.format(self.event_number)
