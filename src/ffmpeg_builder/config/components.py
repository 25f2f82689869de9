"""Registry of optional components built before FFmpeg.

The set of buildable components is closed. Requested selections are
validated against it before anything touches the filesystem.
"""

from enum import Enum
from typing import List, Optional, Tuple


class BuildConfigError(Exception):
    """Raised when the build configuration is invalid."""

    pass


class ComponentSelectionError(BuildConfigError):
    """Raised when a requested component is not in the registry."""

    pass


class Component(str, Enum):
    """Optional libraries that can be built ahead of FFmpeg."""

    X264 = "x264"


DEFAULT_COMPONENTS: Tuple[Component, ...] = (Component.X264,)

COMPONENT_SEPARATOR = ","


def available_components() -> List[str]:
    """Return the identifiers of every buildable component."""
    return [component.value for component in Component]


def resolve_selection(env_value: Optional[str]) -> Tuple[Component, ...]:
    """Resolve the ordered component selection for one run.

    Args:
        env_value: Comma-separated component list, or None when unset

    Returns:
        Ordered tuple of components, without duplicates

    Raises:
        ComponentSelectionError: On the first identifier that is not a
            known component
    """
    if env_value is None:
        return DEFAULT_COMPONENTS

    known = {component.value: component for component in Component}
    selection: List[Component] = []

    for candidate in env_value.split(COMPONENT_SEPARATOR):
        component = known.get(candidate)
        if component is None:
            raise ComponentSelectionError(
                f"component list unknown component {candidate!r} "
                + f"(available: {', '.join(available_components())})"
            )
        if component not in selection:
            selection.append(component)

    return tuple(selection)
