"""Config settings – validated settings dataclasses and loaders."""
from mp_search.config.settings.base import Settings
from mp_search.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader"]
