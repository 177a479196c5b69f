from PyQt5.QtCore import QObject, pyqtSignal

from viz_core.settings import DEFAULT_SETTINGS


class GlobalController(QObject):
    """
    Holds global playback speed and emits changes so that every highlight
    sequence can adjust its step delays consistently.
    """

    speedChanged = pyqtSignal(float)

    def __init__(self, settings=DEFAULT_SETTINGS):
        super().__init__()
        self.settings = settings
        self._speed = 1.0  # multiplier: 1.0× by default

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, value: float):
        """Clamp and broadcast speed multiplier."""
        value = max(self.settings.min_speed, min(self.settings.max_speed, value))
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            self.speedChanged.emit(self._speed)

    def scale_duration(self, base_ms: int) -> int:
        """
        Convert a base duration (ms) into the actual playback duration.
        Higher speed → shorter duration.
        """
        if self._speed <= 0:
            return base_ms
        return max(1, int(base_ms / self._speed))
