"""
mp_search – client-side search coordination engine.

Import path convention::

    from mp_search.state import SearchStateContainer
    from mp_search.coordination import SearchCoordinator
    from mp_search.facets import FacetConfig, FacetManager
    from mp_search.adapters import InMemorySearchAdapter
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
