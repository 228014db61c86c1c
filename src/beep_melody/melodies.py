from typing import Final

# Tetris (Korobeiniki), arranjo de https://www.flutetunes.com/tunes.php?id=192
_TETRIS_A: Final[str] = (
    'e,8b4,8c,d,8c,8b4,a4,8a4,8c,e,8d,8c,b.4,8c,d,e,c,a4,8a4,a4,8b4,8c,'
    'd.,8f,a,8g,8f,e.,8c,e,8d,8c,b4,8b4,8c,d,e,c,a4,a4,p'
)
_TETRIS_B: Final[str] = '2e,2c,2d,2b4,2c,2a4,2g#4,b4,8p,2e,2c,2d,2b4,c,e,2a,2g#'

MELODIES: Final[dict[str, str]] = {
    'tetris': f'Tetris:d=4,o=5,b=144:{_TETRIS_A},{_TETRIS_A},{_TETRIS_B}',
    'nokia': 'Nokia:d=4,o=5,b=200:8e6,8d6,8f#,8g#,8c#6,8b,d,8p,8b,8a,8c#,8e,8a,8p',
    'william_tell': (
        'WilliamTell:d=4,o=5,b=125:8e,8e,8e,2p,8e,8e,8e,2p,'
        '8e,8e,8e,8e,8e,8e,8e,8e,8e,8e,8e,8e,8e,8e,e'
    ),
    'good_bad_ugly': (
        'TheGoodTheBad:d=4,o=5,b=160:c,8d,8e,8d,c,8d,8e,8d,c,8d,e,8f,2g,8p,'
        'a,b,c6,8b,8a,8g,8f,e,8f,g,8e,8d,8c'
    ),
}

DEFAULT_MELODY: Final[str] = 'tetris'


def get_melody(name: str) -> str:
    """Retorna o texto de uma melodia do catálogo."""
    try:
        return MELODIES[name.lower()]
    except KeyError:
        known = ', '.join(sorted(MELODIES))
        message = f'melodia desconhecida {name!r}; disponíveis: {known}'
        raise KeyError(message) from None
