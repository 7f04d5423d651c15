"""Config – search configuration, loaders and errors."""
from mp_search.config.search import DEFAULT_EVENT_HISTORY_LIMIT, SearchConfig
from mp_search.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from mp_search.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "DEFAULT_EVENT_HISTORY_LIMIT",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SearchConfig",
    "Settings",
    "SettingsLoader",
]
