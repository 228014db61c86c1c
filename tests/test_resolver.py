import pytest

from beep_melody.config import FREQUENCY_TABLE
from beep_melody.domain.errors import (
    MalformedNote,
    NoteTooLong,
    OctaveOutOfRange,
)
from beep_melody.domain.models import MelodyDefaults, NoteToken
from beep_melody.domain.parser import NoteResolver


@pytest.fixture
def resolver() -> NoteResolver:
    return NoteResolver()


def resolve(resolver, text, defaults, index=1):
    return resolver.resolve(NoteToken(index=index, text=text), defaults)


def test_explicit_duration_dot_and_octave(resolver, defaults) -> None:
    note = resolve(resolver, '4d.6', defaults)

    assert note.duration_micros == (240000 * 1000 // 125 // 4) * 3 // 2
    assert note.duration_micros == 720000
    assert note.frequency == FREQUENCY_TABLE[6][2]
    assert note.frequency == 1175


def test_missing_duration_uses_default_units(resolver) -> None:
    defaults = MelodyDefaults(octave=5, duration=8, tempo=120)

    note = resolve(resolver, 'c6', defaults)

    assert note.duration_micros == 250000
    assert note.frequency == 1047


def test_missing_octave_uses_default_octave(resolver) -> None:
    note = resolve(resolver, '8a', MelodyDefaults(octave=4, duration=4, tempo=120))

    assert note.frequency == 440
    assert note.duration_micros == 250000


@pytest.mark.parametrize('text', ['p', 'P', '8p', '2p.', 'p6'])
def test_rest_is_silent(resolver, defaults, text) -> None:
    note = resolve(resolver, text, defaults)

    assert note.frequency == 0
    assert note.is_rest
    assert note.duration_micros > 0


def test_sharp_on_rest_is_ignored(resolver, defaults) -> None:
    assert resolve(resolver, 'p#', defaults).frequency == 0


@pytest.mark.parametrize(
    ('prefix', 'units'), [('1', 1), ('2', 2), ('16', 16), ('32', 32)]
)
def test_duration_prefixes(resolver, prefix, units) -> None:
    defaults = MelodyDefaults(octave=5, duration=4, tempo=120)

    note = resolve(resolver, f'{prefix}c', defaults)

    assert note.duration_micros == 2_000_000 // units


def test_letters_are_case_insensitive(resolver, defaults) -> None:
    upper = resolve(resolver, 'G#', defaults)
    lower = resolve(resolver, 'g#', defaults)

    assert upper.frequency == lower.frequency == 831
    assert upper.duration_micros == lower.duration_micros == 480000


@pytest.mark.parametrize('letter', ['b', 'e'])
@pytest.mark.parametrize('octave', [4, 5, 6, 7])
def test_b_and_e_have_no_distinct_sharp(resolver, defaults, letter, octave) -> None:
    natural = resolve(resolver, f'{letter}{octave}', defaults)
    sharp = resolve(resolver, f'{letter}#{octave}', defaults)

    assert natural.frequency == sharp.frequency


@pytest.mark.parametrize(
    ('letter', 'natural', 'sharp'),
    [
        ('c', 0, 1),
        ('d', 2, 3),
        ('e', 4, 4),
        ('f', 5, 6),
        ('g', 7, 8),
        ('a', 9, 10),
        ('b', 11, 11),
    ],
)
def test_chromatic_mapping(resolver, defaults, letter, natural, sharp) -> None:
    table = FREQUENCY_TABLE[7]

    assert resolve(resolver, f'{letter}7', defaults).frequency == table[natural]
    assert resolve(resolver, f'{letter}#7', defaults).frequency == table[sharp]


def test_dot_after_sharp(resolver, defaults) -> None:
    note = resolve(resolver, '8c#.', defaults)

    assert note.frequency == 554
    assert note.duration_micros == 240000 + 120000


def test_resolving_twice_gives_the_same_note(resolver, defaults) -> None:
    first = resolve(resolver, '16f#.7', defaults)
    second = resolve(resolver, '16f#.7', defaults)

    assert first == second


@pytest.mark.parametrize(
    'text', ['X9', 'h', '#c', '3c', '6c', '64c', '4', 'c6x', 'c.#', 'c##', '.c']
)
def test_malformed_note(resolver, defaults, text) -> None:
    with pytest.raises(MalformedNote) as excinfo:
        resolve(resolver, text, defaults, index=7)

    assert excinfo.value.index == 7
    assert 'nota 7' in str(excinfo.value)


@pytest.mark.parametrize(('text', 'octave'), [('c8', 8), ('c3', 3), ('4a#.0', 0)])
def test_octave_out_of_range(resolver, defaults, text, octave) -> None:
    with pytest.raises(OctaveOutOfRange) as excinfo:
        resolve(resolver, text, defaults, index=3)

    assert excinfo.value.index == 3
    assert excinfo.value.value == octave


def test_note_too_long(resolver, defaults) -> None:
    with pytest.raises(NoteTooLong) as excinfo:
        resolve(resolver, 'c' * 32, defaults, index=4)

    assert excinfo.value.index == 4
    assert excinfo.value.length == 32


def test_gap_is_a_quarter_of_the_duration(resolver, defaults) -> None:
    note = resolve(resolver, 'c', defaults)

    assert note.gap_micros == note.duration_micros // 4
