from typing import Final

# Dispositivo de entrada (evdev) usado como beeper
DEFAULT_EVENT_NUMBER: Final[int] = 0
EVENT_DEVICE_TEMPLATE: Final[str] = '/dev/input/event{}'

# Valores padrão do comando `beep`
DEFAULT_BEEP_FREQUENCY: Final[int] = 1
DEFAULT_BEEP_DURATION_MS: Final[int] = 200

# Constantes de linux/input.h
EV_SND: Final[int] = 0x12
SND_BELL: Final[int] = 0x01
SND_TONE: Final[int] = 0x02

# Limites do formato de melodia
NOTE_TOKEN_MAX_LENGTH: Final[int] = 31
DEFAULT_VALUE_DIGITS: Final[int] = 3

OCTAVE_RANGE: Final[range] = range(4, 8)
DURATION_VALUES: Final[tuple[int, ...]] = (1, 2, 4, 8, 16, 32)
TEMPO_RANGE: Final[range] = range(40, 201)

# Pausa entre notas = duração da nota / GAP_DIVISOR
GAP_DIVISOR: Final[int] = 4

# Letras do bloco de parâmetros padrão
DEFAULT_FIELDS: Final[dict[str, str]] = {
    'o': 'octave',
    'd': 'duration',
    'b': 'tempo',
}

REST_LETTER: Final[str] = 'P'

# Índice cromático (natural, sustenido). B# == B e E# == E
CHROMATIC_INDEX: Final[dict[str, tuple[int, int]]] = {
    'C': (0, 1),
    'D': (2, 3),
    'E': (4, 4),
    'F': (5, 6),
    'G': (7, 8),
    'A': (9, 10),
    'B': (11, 11),
}

# Frequências (Hz) por oitava: C, C#, D, D#, E, F, F#, G, G#, A, A#, B
FREQUENCY_TABLE: Final[dict[int, tuple[int, ...]]] = {
    4: (262, 277, 294, 311, 330, 349, 370, 392, 415, 440, 466, 494),
    5: (523, 554, 587, 622, 659, 698, 740, 784, 831, 880, 932, 988),
    6: (1047, 1109, 1175, 1245, 1319, 1397, 1480, 1568, 1661, 1760, 1865, 1976),
    7: (2093, 2217, 2349, 2489, 2637, 2794, 2960, 3136, 3322, 3520, 3729, 3951),
}

# Saída MIDI opcional
MIDI_A4_KEY: Final[int] = 69
MIDI_A4_FREQUENCY: Final[float] = 440.0
MAX_MIDI_VALUE: Final[int] = 127
DEFAULT_MIDI_VELOCITY: Final[int] = 100
