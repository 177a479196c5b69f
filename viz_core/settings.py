from dataclasses import dataclass


@dataclass(frozen=True)
class VisualizerSettings:
    """Layout, animation and history tunables shared by the view and the interpreter."""

    node_radius: float = 25
    top_margin: float = 50
    level_gap: float = 80
    max_initial_spacing: float = 150

    history_limit: int = 10
    history_display: int = 5

    # Base durations in ms, before the global speed multiplier is applied.
    search_step_ms: int = 500
    search_pause_ms: int = 2000
    traversal_step_ms: int = 600
    traversal_pause_ms: int = 1000

    min_speed: float = 0.5
    max_speed: float = 3.0


DEFAULT_SETTINGS = VisualizerSettings()
