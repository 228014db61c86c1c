class MelodyError(Exception):
    """Classe base para todos os erros de melodia."""


class ParseError(MelodyError):
    """Erro no formato do texto da melodia."""


class DefaultsError(ParseError):
    """Erro no bloco de parâmetros padrão. Sempre fatal."""


class MissingDefaultsBlock(DefaultsError):
    def __init__(self) -> None:
        super().__init__('bloco de parâmetros padrão ausente')


class MalformedDefaultPair(DefaultsError):
    def __init__(self, position: int, reason: str) -> None:
        super().__init__(f'par padrão malformado na posição {position}: {reason}')
        self.position: int = position
        self.reason: str = reason


class MissingRequiredDefault(DefaultsError):
    def __init__(self, field: str, name: str) -> None:
        super().__init__(f"parâmetro padrão obrigatório ausente: '{field}' ({name})")
        self.field: str = field
        self.name: str = name


class DefaultOutOfRange(DefaultsError):
    def __init__(self, field: str, name: str, value: int) -> None:
        super().__init__(
            f"parâmetro padrão '{field}' ({name}) fora do intervalo: {value}"
        )
        self.field: str = field
        self.name: str = name
        self.value: int = value


class NoteError(ParseError):
    """Erro em uma única nota. A política do sequenciador decide se é fatal."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f'nota {index}: {message}')
        self.index: int = index
        self.detail: str = message


class NoteTooLong(NoteError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(index, f'nota longa demais ({length} caracteres)')
        self.length: int = length


class MalformedNote(NoteError):
    def __init__(self, index: int, reason: str) -> None:
        super().__init__(index, reason)
        self.reason: str = reason


class OctaveOutOfRange(NoteError):
    def __init__(self, index: int, value: int) -> None:
        super().__init__(index, f'oitava fora do intervalo: {value}')
        self.value: int = value


class SinkIoError(MelodyError):
    """Falha ao escrever no dispositivo. Interrompe a reprodução."""

    def __init__(self, index: int, cause: OSError) -> None:
        super().__init__(f'nota {index}: falha ao emitir tom: {cause}')
        self.index: int = index
        self.cause: OSError = cause
