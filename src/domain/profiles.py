import logging
import os
from pathlib import Path

import tomlkit

from domain.models import ContourSettings
from domain.toml_sections import flat_to_sectioned, sectioned_to_flat
from shared.constants import PROFILES_DIR

logger = logging.getLogger(__name__)

PROFILES_ENV = 'GRIDCONTOURS_PROFILES'


def _user_profiles_dir() -> Path:
    """
    Determine profiles directory.

    1) ``$GRIDCONTOURS_PROFILES`` when set.
    2) ``<project_root>/configs/profiles`` if it exists (run-from-repo setups).
    3) Otherwise ``~/.gridcontours/profiles``.
    """
    env_dir = os.getenv(PROFILES_ENV)
    if env_dir:
        return Path(env_dir)

    project_root = Path(__file__).resolve().parent.parent.parent
    local_profiles = project_root / PROFILES_DIR
    if local_profiles.exists():
        return local_profiles

    return Path.home() / '.gridcontours' / 'profiles'


def ensure_profiles_dir(base_dir: str | Path | None = None) -> Path:
    profiles_dir = Path(base_dir) if base_dir is not None else _user_profiles_dir()
    profiles_dir.mkdir(parents=True, exist_ok=True)
    return profiles_dir


def list_profiles(base_dir: str | Path | None = None) -> list[str]:
    """Profile names without extension."""
    folder = ensure_profiles_dir(base_dir)
    return sorted(p.stem for p in folder.glob('*.toml') if p.is_file())


def profile_path(name: str, base_dir: str | Path | None = None) -> Path:
    return ensure_profiles_dir(base_dir) / f'{name}.toml'


def load_profile(
    name_or_path: str | Path, base_dir: str | Path | None = None
) -> ContourSettings:
    """
    Load and validate a TOML profile.

    Accepts either a profile name (without .toml) from the profiles directory
    or a path to a TOML file.
    """
    p = Path(name_or_path)
    path = (
        p
        if p.suffix.lower() == '.toml' and p.exists()
        else profile_path(str(name_or_path), base_dir)
    )
    if not path.exists():
        msg = f'Profile not found: {path}'
        raise FileNotFoundError(msg)
    data = tomlkit.parse(path.read_text(encoding='utf-8')).unwrap()
    settings = ContourSettings.model_validate(sectioned_to_flat(data))
    logger.info(
        'Profile %s loaded: %d levels, triangulation=%s',
        path.stem,
        len(settings.resolved_levels),
        settings.triangulation.value,
    )
    return settings


def save_profile(
    name: str, settings: ContourSettings, base_dir: str | Path | None = None
) -> Path:
    """Save a profile as sectioned TOML."""
    path = profile_path(name, base_dir)
    data = flat_to_sectioned(settings.model_dump(mode='json'))
    path.write_text(tomlkit.dumps(data), encoding='utf-8')
    logger.info('Profile %s saved to %s', name, path)
    return path


def delete_profile(name: str, base_dir: str | Path | None = None) -> None:
    path = profile_path(name, base_dir)
    if path.exists():
        path.unlink()
