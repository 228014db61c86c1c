import argparse
import logging
import sys
from pathlib import Path

from beep_melody.application.controller import BeeperController
from beep_melody.config import (
    DEFAULT_BEEP_DURATION_MS,
    DEFAULT_EVENT_NUMBER,
)
from beep_melody.domain.errors import MelodyError
from beep_melody.domain.models import PlaybackSettings
from beep_melody.melodies import DEFAULT_MELODY, MELODIES, get_melody

logger = logging.getLogger('beep_melody')


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-e',
        '--event',
        type=int,
        default=DEFAULT_EVENT_NUMBER,
        help='número do dispositivo de eventos (/dev/input/eventN)',
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='apenas registra os comandos de tom, sem abrir o dispositivo',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='mostra cada nota')


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )


def build_melody_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='beep-melody',
        description='Toca uma melodia (formato RTTTL) no beeper.',
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument('-n', '--name', help='melodia do catálogo (veja --list)')
    source.add_argument('-t', '--text', help='texto da melodia')
    source.add_argument('-f', '--file', type=Path, help='arquivo com a melodia')
    parser.add_argument(
        '--strict',
        action='store_true',
        help='interrompe na primeira nota malformada em vez de ignorá-la',
    )
    parser.add_argument('--midi-port', help='envia os tons para uma porta MIDI')
    parser.add_argument(
        '--list', action='store_true', help='lista as melodias do catálogo'
    )
    _add_common_options(parser)
    return parser


def build_beep_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='beep',
        description='Faz um bipe enviando um evento de som ao beeper.',
    )
    parser.add_argument(
        '-f',
        '--frequency',
        type=int,
        help='frequência do tom em Hz (sem ela, usa a campainha padrão)',
    )
    parser.add_argument(
        '-d',
        '--duration',
        type=int,
        default=DEFAULT_BEEP_DURATION_MS,
        help='duração em milissegundos',
    )
    _add_common_options(parser)
    return parser


def read_melody_text(args: argparse.Namespace) -> str:
    """Escolhe a origem do texto: opção, arquivo, stdin ou a melodia padrão."""
    if args.name:
        return get_melody(args.name)
    if args.text:
        return args.text
    if args.file:
        return _first_line(args.file.read_text(encoding='utf-8'))
    if not sys.stdin.isatty():
        return _first_line(sys.stdin.read())
    return MELODIES[DEFAULT_MELODY]


def _first_line(content: str) -> str:
    for line in content.splitlines():
        if line.strip():
            return line
    return ''


def main_melody(argv: list[str] | None = None) -> int:
    args = build_melody_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.list:
        for name in sorted(MELODIES):
            print(name)
        return 0

    settings = PlaybackSettings(
        event_number=args.event,
        strict=args.strict,
        dry_run=args.dry_run,
        midi_port=args.midi_port,
    )
    controller = BeeperController()

    try:
        text = read_melody_text(args)
        played = controller.play_melody(text, settings)
    except KeyError as exc:
        logger.error('%s', exc.args[0])
        return 1
    except MelodyError as exc:
        logger.error('%s', exc)
        return 1
    except OSError as exc:
        logger.error('Falha de E/S: %s', exc)
        return 1
    except KeyboardInterrupt:
        logger.warning('Interrompido')
        return 1

    logger.debug('%d notas tocadas', played)
    return 0


def main_beep(argv: list[str] | None = None) -> int:
    args = build_beep_parser().parse_args(argv)
    _configure_logging(args.verbose)

    settings = PlaybackSettings(event_number=args.event, dry_run=args.dry_run)
    try:
        BeeperController().beep(args.frequency, args.duration, settings)
    except OSError as exc:
        logger.error(
            'Falha ao acessar o dispositivo "%s": %s',
            settings.device_path,
            exc.strerror,
        )
        return 1
    except KeyboardInterrupt:
        logger.warning('Interrompido')
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main_melody())
