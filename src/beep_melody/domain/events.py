from dataclasses import dataclass

from beep_melody.config import GAP_DIVISOR


@dataclass(frozen=True)
class ResolvedNote:
    """Nota pronta para tocar: frequência (0 = pausa) e duração."""

    frequency: int
    duration_micros: int
    source_index: int
    source_text: str

    @property
    def is_rest(self) -> bool:
        return self.frequency == 0

    @property
    def gap_micros(self) -> int:
        """Silêncio extra depois da nota."""
        return self.duration_micros // GAP_DIVISOR
