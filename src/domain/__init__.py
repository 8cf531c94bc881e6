"""Domain layer - settings model and profiles."""
from domain.models import ContourSettings
from domain.profiles import (
    delete_profile,
    ensure_profiles_dir,
    list_profiles,
    load_profile,
    save_profile,
)

__all__ = [
    'ContourSettings',
    'delete_profile',
    'ensure_profiles_dir',
    'list_profiles',
    'load_profile',
    'save_profile',
]
