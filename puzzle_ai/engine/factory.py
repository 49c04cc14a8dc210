"""
Strategy Registry - Look up search strategies by name.

Strategies register themselves at import time with @register_strategy;
importing puzzle_ai.engine.strategies populates the registry.
"""

from typing import Any, Dict, List, Type

from .base import SearchStrategy

DEFAULT_STRATEGY = "astar"

_REGISTRY: Dict[str, Type[SearchStrategy]] = {}


def register_strategy(cls: Type[SearchStrategy]) -> Type[SearchStrategy]:
    """
    Class decorator adding a strategy to the registry under cls.name.

    Raises:
        ValueError: If another class already uses the name
    """
    existing = _REGISTRY.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Strategy name '{cls.name}' already registered by {existing.__name__}"
        )
    _REGISTRY[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> SearchStrategy:
    """
    Instantiate a registered strategy.

    Args:
        name: Registered name ("astar", "cycle", ...)
        **kwargs: Passed to the strategy constructor

    Raises:
        ValueError: If no strategy has that name
    """
    try:
        cls = _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        raise ValueError(f"Unknown strategy: {name}. Available: {available}") from None
    return cls(**kwargs)


def get_strategy_names() -> List[str]:
    return list(_REGISTRY)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name and description of every registered strategy, for menus and --help."""
    return [{"name": name, "description": cls.description} for name, cls in _REGISTRY.items()]


def get_default_strategy_name() -> str:
    """DEFAULT_STRATEGY when registered, otherwise the first registered name."""
    if DEFAULT_STRATEGY in _REGISTRY:
        return DEFAULT_STRATEGY
    return next(iter(_REGISTRY), "")
