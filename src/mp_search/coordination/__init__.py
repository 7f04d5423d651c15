"""Coordination – search/suggestion pipelines and the generation guard."""
from mp_search.coordination.coordinator import SearchCoordinator
from mp_search.coordination.generation import GenerationGuard

__all__ = ["GenerationGuard", "SearchCoordinator"]
