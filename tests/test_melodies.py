import pytest

from beep_melody.config import DURATION_VALUES, OCTAVE_RANGE, TEMPO_RANGE
from beep_melody.domain.parser import MelodyParser, NoteResolver
from beep_melody.melodies import DEFAULT_MELODY, MELODIES, get_melody


@pytest.mark.parametrize('name', sorted(MELODIES))
def test_catalog_melodies_resolve_cleanly(name, diagnostics) -> None:
    melody = MelodyParser(diagnostics).parse(MELODIES[name])
    resolver = NoteResolver()

    notes = [resolver.resolve(token, melody.defaults) for token in melody.note_tokens()]

    assert notes
    assert diagnostics.reports == []


@pytest.mark.parametrize('name', sorted(MELODIES))
def test_catalog_defaults_are_within_range(name) -> None:
    defaults = MelodyParser().parse(MELODIES[name]).defaults

    assert defaults.tempo in TEMPO_RANGE
    assert defaults.octave in OCTAVE_RANGE
    assert defaults.duration in DURATION_VALUES


def test_nokia_melody() -> None:
    melody = MelodyParser().parse(get_melody('nokia'))

    assert melody.defaults.tempo == 200
    assert len(list(melody.note_tokens())) == 14


def test_tetris_is_the_default_melody() -> None:
    melody = MelodyParser().parse(MELODIES[DEFAULT_MELODY])
    resolver = NoteResolver()
    notes = [resolver.resolve(token, melody.defaults) for token in melody.note_tokens()]

    assert melody.name == 'Tetris'
    assert melody.defaults.tempo == 144
    assert len(notes) == 99
    # E5 semínima, B4 colcheia
    assert (notes[0].frequency, notes[0].duration_micros) == (659, 416666)
    assert (notes[1].frequency, notes[1].duration_micros) == (494, 208333)
    # G#5 mínima no final
    assert (notes[-1].frequency, notes[-1].duration_micros) == (831, 833333)


def test_get_melody_is_case_insensitive() -> None:
    assert get_melody('Nokia') == MELODIES['nokia']


def test_get_melody_unknown_name() -> None:
    with pytest.raises(KeyError) as excinfo:
        get_melody('macarena')

    assert 'tetris' in excinfo.value.args[0]
