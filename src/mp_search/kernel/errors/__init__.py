"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    SearchError
    ├── SearchBackendError   (backend.py)
    └── ConfigError          (mp_search.config.validation)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from mp_search.kernel.errors.backend import ErrorSource, SearchBackendError
from mp_search.kernel.errors.base import SearchError

__all__ = [
    "ErrorSource",
    "SearchBackendError",
    "SearchError",
]
