"""Day/night theme switch state."""

from enum import Enum
from typing import Callable, NamedTuple


class Rgb(NamedTuple):
    red: int
    green: int
    blue: int


class MouseButton(Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


SUN_LIGHT_MODE = Rgb(248, 227, 161)
SUN_DARK_MODE = Rgb(124, 113, 60)
SUN_BACKGROUND = Rgb(100, 123, 210)
MOON_LIGHT_MODE = Rgb(74, 79, 89)
MOON_DARK_MODE = Rgb(248, 227, 161)
MOON_BACKGROUND = Rgb(39, 51, 69)


def icon_colors(checked: bool) -> tuple[Rgb, Rgb]:
    """Colours of the sun and moon icons for a switch state."""
    if checked:
        return SUN_DARK_MODE, MOON_DARK_MODE
    return SUN_LIGHT_MODE, MOON_LIGHT_MODE


class SwitchButton:
    """A two-state switch toggled by a full left click."""

    def __init__(self, width: int = 0, height: int = 0):
        self.checked = False
        self._mouse_pressed = False
        self.width = 0
        self.height = 0
        self.half_width = 0.0
        self.half_height = 0.0
        self._listeners: list[Callable[[bool], None]] = []
        self.resize(width, height)

    def on_state_changed(self, callback: Callable[[bool], None]) -> None:
        """Call ``callback`` with the new state whenever it changes."""
        self._listeners.append(callback)

    def set_checked(self, checked: bool) -> None:
        """Change the state, notifying listeners only on a real change."""
        if self.checked == checked:
            return
        self.checked = checked
        for callback in self._listeners:
            callback(checked)

    @property
    def icon_colors(self) -> tuple[Rgb, Rgb]:
        return icon_colors(self.checked)

    @property
    def background(self) -> Rgb:
        return MOON_BACKGROUND if self.checked else SUN_BACKGROUND

    @property
    def knob_center(self) -> tuple[float, float]:
        """Centre of the round knob: left when off, right when on."""
        if self.checked:
            return self.width - self.half_height, self.half_height
        return self.half_height, self.half_height

    def mouse_press(self, button: MouseButton) -> None:
        if button is MouseButton.LEFT:
            self._mouse_pressed = True

    def mouse_release(self, button: MouseButton) -> None:
        if button is MouseButton.LEFT and self._mouse_pressed:
            self.set_checked(not self.checked)
            self._mouse_pressed = False

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.half_width = width / 2.0
        self.half_height = height / 2.0