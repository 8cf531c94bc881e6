"""Command line entry point: grid file + levels -> closed contour polylines."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from contours.builder import Contour, build_contours
from contours.export import dump_json, load_grid
from contours.grid import ScalarGrid
from contours.triangles import make_source
from domain.models import ContourSettings
from domain.profiles import load_profile
from shared.constants import LOG_FORMAT, GridOrientation
from shared.diagnostics import log_memory_usage, log_thread_status

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """Configure root logging to stdout and an optional file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _parse_levels(text: str) -> list[float]:
    try:
        return [float(part) for part in text.split(',') if part.strip()]
    except ValueError as e:
        msg = f'Invalid level list: {text!r}'
        raise argparse.ArgumentTypeError(msg) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract closed contour lines from a scalar grid'
    )
    parser.add_argument('grid', help='Grid file (.json, .npy, .csv or text)')
    parser.add_argument('-p', '--profile', help='Profile name or path to TOML file')
    parser.add_argument(
        '-l', '--levels', type=_parse_levels, help='Comma separated levels'
    )
    parser.add_argument('-o', '--output', help='Output JSON path')
    parser.add_argument('--triangulation', choices=['grid', 'delaunay'])
    parser.add_argument('--diagonal', choices=['main', 'anti'])
    parser.add_argument(
        '--columns', action='store_true', help='Grid file is column-major'
    )
    parser.add_argument('--epsilon', type=float)
    parser.add_argument('--workers', type=int)
    parser.add_argument('--progress', action='store_true', default=None)
    parser.add_argument('--log-file')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def resolve_settings(args: argparse.Namespace) -> ContourSettings:
    """Profile (or defaults) with command line overrides applied."""
    base = load_profile(args.profile) if args.profile else ContourSettings()
    overrides = {
        'levels': args.levels,
        'output_path': args.output,
        'triangulation': args.triangulation,
        'diagonal': args.diagonal,
        'epsilon': args.epsilon,
        'workers': args.workers,
        'progress': args.progress,
        'orientation': GridOrientation.COLUMNS if args.columns else None,
    }
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ContourSettings.model_validate(data)


def run(grid: ScalarGrid, settings: ContourSettings) -> list[Contour]:
    source = make_source(settings.triangulation, settings.diagonal)
    return build_contours(
        grid,
        settings.resolved_levels,
        source=source,
        epsilon=settings.epsilon,
        workers=settings.workers,
        progress=settings.progress,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        settings = resolve_settings(args)
        grid = load_grid(
            args.grid, columns=settings.orientation is GridOrientation.COLUMNS
        )
        if not settings.resolved_levels:
            logger.warning('No contour levels configured')
        log_memory_usage('before contour build')
        contours = run(grid, settings)
        log_memory_usage('after contour build')
        log_thread_status('after contour build')
        dump_json(contours, settings.output_path)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        logger.error('Contour extraction failed: %s', e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
