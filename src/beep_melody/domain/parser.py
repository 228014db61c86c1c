import logging
import re
from typing import Final

from beep_melody.config import (
    CHROMATIC_INDEX,
    DEFAULT_FIELDS,
    DEFAULT_VALUE_DIGITS,
    DURATION_VALUES,
    FREQUENCY_TABLE,
    NOTE_TOKEN_MAX_LENGTH,
    OCTAVE_RANGE,
    REST_LETTER,
    TEMPO_RANGE,
)
from beep_melody.domain.diagnostics import DiagnosticSink, LoggingDiagnostics
from beep_melody.domain.errors import (
    DefaultOutOfRange,
    MalformedDefaultPair,
    MalformedNote,
    MissingDefaultsBlock,
    MissingRequiredDefault,
    NoteTooLong,
    OctaveOutOfRange,
)
from beep_melody.domain.events import ResolvedNote
from beep_melody.domain.models import Melody, MelodyDefaults, NoteToken


class MelodyParser:
    """Separa o texto em nome, bloco de padrões e lista de notas.

    Formato: ``[nome:]o=5,d=4,b=120:nota,nota,...``. Os pares do bloco de
    padrões podem vir em qualquer ordem; os três são obrigatórios.
    """

    NUMBER_REGEX: Final[re.Pattern[str]] = re.compile(r'[0-9]+')
    RANGES: Final[dict[str, range | tuple[int, ...]]] = {
        'o': OCTAVE_RANGE,
        'd': DURATION_VALUES,
        'b': TEMPO_RANGE,
    }

    def __init__(self, diagnostics: DiagnosticSink | None = None) -> None:
        self.diagnostics: DiagnosticSink = diagnostics or LoggingDiagnostics()

    def parse(self, text: str) -> Melody:
        """Valida o cabeçalho da melodia. As notas só são lidas depois."""
        parts = text.strip().split(':', 2)
        if len(parts) < 2:
            raise MissingDefaultsBlock()

        if len(parts) == 2:
            name = None
            block, notes = parts
        else:
            name, block, notes = parts
            name = name.strip() or None

        defaults = self.parse_defaults(block)
        return Melody(name=name, defaults=defaults, notes_text=notes)

    def parse_defaults(self, block: str) -> MelodyDefaults:
        if not block.strip():
            raise MissingDefaultsBlock()

        values: dict[str, int] = {}
        pos = 0
        while True:
            field, value, pos = self._read_pair(block, pos)
            if field in values:
                self.diagnostics.report(
                    logging.WARNING,
                    None,
                    f"parâmetro padrão '{field}' repetido; mantendo {values[field]}",
                )
            else:
                values[field] = value

            if pos >= len(block):
                break
            # pula a vírgula; depois dela outro par é obrigatório
            pos += 1

        for field, name in DEFAULT_FIELDS.items():
            if field not in values:
                raise MissingRequiredDefault(field, name)

        for field, name in DEFAULT_FIELDS.items():
            if values[field] not in self.RANGES[field]:
                raise DefaultOutOfRange(field, name, values[field])

        return MelodyDefaults(
            octave=values['o'], duration=values['d'], tempo=values['b']
        )

    def _read_pair(self, block: str, pos: int) -> tuple[str, int, int]:
        pos = self._skip_spaces(block, pos)
        if pos >= len(block):
            raise MalformedDefaultPair(pos, 'letra esperada')

        field = block[pos].lower()
        if field not in DEFAULT_FIELDS:
            raise MalformedDefaultPair(pos, f'letra desconhecida {block[pos]!r}')

        pos = self._skip_spaces(block, pos + 1)
        if pos >= len(block) or block[pos] != '=':
            raise MalformedDefaultPair(pos, f"'=' esperado depois de '{field}'")

        pos = self._skip_spaces(block, pos + 1)
        value, pos = self._read_number(block, pos, field)

        pos = self._skip_spaces(block, pos)
        if pos < len(block) and block[pos] != ',':
            raise MalformedDefaultPair(
                pos, f"',' esperado, encontrado {block[pos]!r}"
            )

        return field, value, pos

    def _read_number(self, text: str, pos: int, field: str) -> tuple[int, int]:
        """Lê um número de até três dígitos; dígitos extras são descartados."""
        match = self.NUMBER_REGEX.match(text, pos)
        if not match:
            raise MalformedDefaultPair(pos, f"número esperado para '{field}'")

        digits = match.group()
        if len(digits) > DEFAULT_VALUE_DIGITS:
            self.diagnostics.report(
                logging.WARNING,
                None,
                f"valor de '{field}' truncado em {DEFAULT_VALUE_DIGITS} dígitos: "
                f'{digits}',
            )
            digits = digits[:DEFAULT_VALUE_DIGITS]

        return int(digits), match.end()

    @staticmethod
    def _skip_spaces(text: str, pos: int) -> int:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        return pos


class NoteResolver:
    """Converte uma nota em frequência e duração usando os padrões da melodia.

    Gramática: ``[duração]letra[#][.][oitava]``. Sem estado: a mesma nota
    com os mesmos padrões sempre resulta no mesmo valor.
    """

    DURATION_DIGITS: Final[tuple[str, ...]] = ('1', '2', '4', '8')

    def resolve(self, token: NoteToken, defaults: MelodyDefaults) -> ResolvedNote:
        text = token.text
        index = token.index
        if len(text) > NOTE_TOKEN_MAX_LENGTH:
            raise NoteTooLong(index, len(text))

        units, pos = self._read_duration(text, 0, index)
        letter, pos = self._read_letter(text, pos, index)
        sharp, pos = self._read_marker(text, pos, '#')
        dotted, pos = self._read_marker(text, pos, '.')
        octave, pos = self._read_octave(text, pos, index)

        if pos < len(text):
            raise MalformedNote(
                index, f'caracteres inesperados {text[pos:]!r} em {text!r}'
            )

        if units is None:
            units = defaults.duration
        if octave is None:
            octave = defaults.octave

        duration = defaults.whole_note_micros // units
        if dotted:
            duration += duration // 2

        if letter == REST_LETTER:
            frequency = 0
        else:
            frequency = self.frequency_of(letter, sharp, octave)

        return ResolvedNote(
            frequency=frequency,
            duration_micros=duration,
            source_index=index,
            source_text=text,
        )

    @staticmethod
    def frequency_of(letter: str, sharp: bool, octave: int) -> int:
        step = CHROMATIC_INDEX[letter][1 if sharp else 0]
        return FREQUENCY_TABLE[octave][step]

    def _read_duration(self, text: str, pos: int, index: int) -> tuple[int | None, int]:
        if text.startswith(('16', '32'), pos):
            return int(text[pos : pos + 2]), pos + 2

        char = text[pos : pos + 1]
        if char == '3':
            raise MalformedNote(index, f"'3' deve ser seguido de '2' em {text!r}")
        if char in self.DURATION_DIGITS:
            return int(char), pos + 1
        if self._is_digit(char):
            raise MalformedNote(index, f'duração inválida em {text!r}')

        return None, pos

    def _read_letter(self, text: str, pos: int, index: int) -> tuple[str, int]:
        char = text[pos : pos + 1].upper()
        if not char:
            raise MalformedNote(index, f'nota sem letra em {text!r}')
        if char != REST_LETTER and char not in CHROMATIC_INDEX:
            raise MalformedNote(index, f'letra de nota inválida {text[pos]!r}')
        return char, pos + 1

    @staticmethod
    def _read_marker(text: str, pos: int, marker: str) -> tuple[bool, int]:
        if text.startswith(marker, pos):
            return True, pos + 1
        return False, pos

    def _read_octave(self, text: str, pos: int, index: int) -> tuple[int | None, int]:
        char = text[pos : pos + 1]
        if not self._is_digit(char):
            return None, pos

        octave = int(char)
        if octave not in OCTAVE_RANGE:
            raise OctaveOutOfRange(index, octave)
        return octave, pos + 1

    @staticmethod
    def _is_digit(char: str) -> bool:
        return len(char) == 1 and char.isascii() and char.isdigit()
