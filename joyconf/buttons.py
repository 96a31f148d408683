"""Logical and physical button state and settings."""

import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from joyconf.debuglog import DebugLog
from joyconf.pinconfig import MAX_BUTTONS_NUM, Signal

_RENDER_HOLD_MS = 30

HIGHLIGHT_COLOR = (0, 128, 0)
FOCUS_STYLE = "background-color: rgba(0, 120, 215, 200); color: rgb(255, 255, 255)"


class ButtonFunction(IntEnum):
    """What a logical button does on the device."""

    BUTTON_NORMAL = 0
    BUTTON_TOGGLE = 1
    TOGGLE_SWITCH = 2
    TOGGLE_SWITCH_ON = 3
    TOGGLE_SWITCH_OFF = 4
    POV1_UP = 5
    POV1_RIGHT = 6
    POV1_DOWN = 7
    POV1_LEFT = 8
    POV1_CENTER = 9
    POV2_UP = 10
    POV2_RIGHT = 11
    POV2_DOWN = 12
    POV2_LEFT = 13
    POV2_CENTER = 14
    POV3_UP = 15
    POV3_RIGHT = 16
    POV3_DOWN = 17
    POV3_LEFT = 18
    POV4_UP = 19
    POV4_RIGHT = 20
    POV4_DOWN = 21
    POV4_LEFT = 22
    ENCODER_INPUT_A = 23
    ENCODER_INPUT_B = 24
    RADIO_BUTTON1 = 25
    RADIO_BUTTON2 = 26
    RADIO_BUTTON3 = 27
    RADIO_BUTTON4 = 28
    SEQUENTIAL_TOGGLE = 29
    SEQUENTIAL_BUTTON = 30

    @property
    def gui_name(self) -> str:
        return _FUNCTION_NAMES[self]


_FUNCTION_NAMES = {
    ButtonFunction.BUTTON_NORMAL: "Button normal",
    ButtonFunction.BUTTON_TOGGLE: "Button toggle",
    ButtonFunction.TOGGLE_SWITCH: "Toggle switch ON/OFF",
    ButtonFunction.TOGGLE_SWITCH_ON: "Toggle switch ON",
    ButtonFunction.TOGGLE_SWITCH_OFF: "Toggle switch OFF",
    ButtonFunction.POV1_UP: "POV1 Up",
    ButtonFunction.POV1_RIGHT: "POV1 Right",
    ButtonFunction.POV1_DOWN: "POV1 Down",
    ButtonFunction.POV1_LEFT: "POV1 Left",
    ButtonFunction.POV1_CENTER: "POV1 Center",
    ButtonFunction.POV2_UP: "POV2 Up",
    ButtonFunction.POV2_RIGHT: "POV2 Right",
    ButtonFunction.POV2_DOWN: "POV2 Down",
    ButtonFunction.POV2_LEFT: "POV2 Left",
    ButtonFunction.POV2_CENTER: "POV2 Center",
    ButtonFunction.POV3_UP: "POV3 Up",
    ButtonFunction.POV3_RIGHT: "POV3 Right",
    ButtonFunction.POV3_DOWN: "POV3 Down",
    ButtonFunction.POV3_LEFT: "POV3 Left",
    ButtonFunction.POV4_UP: "POV4 Up",
    ButtonFunction.POV4_RIGHT: "POV4 Right",
    ButtonFunction.POV4_DOWN: "POV4 Down",
    ButtonFunction.POV4_LEFT: "POV4 Left",
    ButtonFunction.ENCODER_INPUT_A: "Encoder A",
    ButtonFunction.ENCODER_INPUT_B: "Encoder B",
    ButtonFunction.RADIO_BUTTON1: "Radio button 1",
    ButtonFunction.RADIO_BUTTON2: "Radio button 2",
    ButtonFunction.RADIO_BUTTON3: "Radio button 3",
    ButtonFunction.RADIO_BUTTON4: "Radio button 4",
    ButtonFunction.SEQUENTIAL_TOGGLE: "Sequential toggle",
    ButtonFunction.SEQUENTIAL_BUTTON: "Sequential button",
}

# Display order of the function list.
FUNCTION_LIST: tuple = tuple(ButtonFunction)


class ButtonTimer(IntEnum):
    """Delay or press timer attached to a logical button."""

    OFF = 0
    TIMER_1 = 1
    TIMER_2 = 2
    TIMER_3 = 3

    @property
    def gui_name(self) -> str:
        return "-" if self is ButtonTimer.OFF else f"Timer {int(self)}"


SHIFT_COUNT = 6
SHIFT_NAMES: tuple = ("-",) + tuple(f"Shift {i}" for i in range(1, SHIFT_COUNT))


@dataclass
class ButtonSettings:
    """Device-side settings of one logical button."""

    physical_num: int = -1
    is_disabled: bool = False
    is_inverted: bool = False
    type: ButtonFunction = ButtonFunction.BUTTON_NORMAL
    shift_modificator: int = 0
    delay_timer: ButtonTimer = ButtonTimer.OFF
    press_timer: ButtonTimer = ButtonTimer.OFF


def _clock_ms(clock: Callable[[], float]) -> int:
    return int(clock() * 1000)


def _expired(started: Optional[int], now_ms: int) -> bool:
    return started is None or now_ms - started > _RENDER_HOLD_MS


class LogicalButton:
    """One logical button row: its physical source, function, shift and timers.

    The focused button and the auto-assign switch are shared by all buttons.
    """

    current_focus: int = -1
    auto_phys_but_enabled: bool = False

    def __init__(self, button_index: int, debug_log: Optional[DebugLog] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.button_index = button_index
        self.debug_log = debug_log
        self._clock = clock
        self.functions: list[ButtonFunction] = list(FUNCTION_LIST)
        self.item_enabled: list[bool] = [True] * len(self.functions)
        self.function_index = 0
        self._function_prev_type = ButtonFunction.BUTTON_NORMAL
        self.physical_number = 0
        self.physical_maximum = MAX_BUTTONS_NUM
        self.spin_enabled = True
        self.editing_enabled = False
        self.is_disabled = False
        self.is_inverted = False
        self.shift_index = 0
        self.delay_timer = ButtonTimer.OFF
        self.press_timer = ButtonTimer.OFF
        self.current_state = False
        self._debug_state = False
        self._last_act: Optional[int] = None
        self.spin_style = ""
        self.function_type_changed = Signal()

    @property
    def label(self) -> int:
        return self.button_index + 1

    def set_function(self, index: int) -> None:
        """Choose the function at ``index`` of the function list."""
        if not 0 <= index < len(self.functions):
            raise IndexError(f"no button function at index {index}")
        if index == self.function_index:
            return
        self.function_index = index
        current = self.functions[index]
        self.function_type_changed.emit(current, self._function_prev_type, self.button_index)
        self._function_prev_type = current

    def _set_physical_number(self, value: int) -> None:
        value = max(0, min(value, self.physical_maximum))
        if value == self.physical_number:
            return
        self.physical_number = value
        self.editing_enabled = value > 0 and self.spin_enabled

    def set_max_phys_buttons(self, max_phys_buttons: int) -> None:
        self.physical_maximum = max(0, max_phys_buttons)
        if self.physical_number > self.physical_maximum:
            self._set_physical_number(self.physical_maximum)

    def set_spin_box_on_off(self, max_phys_buttons: int) -> None:
        self.spin_enabled = max_phys_buttons > 0

    def set_button_state(self, state: bool) -> None:
        """Show the button as pressed, keeping a press visible for at least 30 ms."""
        now_ms = _clock_ms(self._clock)
        if state != self.current_state:
            if state:
                self._last_act = now_ms
                self.current_state = True
            elif _expired(self._last_act, now_ms):
                self.current_state = False

        if state != self._debug_state:
            if self.debug_log is not None:
                self.debug_log.logical_button_state(self.label, state)
            self._debug_state = state

    def set_physic_button(self, button_index: int) -> None:
        """Assign the zero-based physical button ``button_index``."""
        self._set_physical_number(button_index + 1)

    def disable_button_type(self, button_type: int, disable: bool) -> None:
        """Grey out or restore one entry of the function list."""
        if button_type in self.functions:
            self.item_enabled[self.functions.index(button_type)] = not disable

    def current_button_type(self) -> ButtonFunction:
        return self.functions[self.function_index]

    def focus_in(self) -> None:
        if LogicalButton.auto_phys_but_enabled:
            self.spin_style = FOCUS_STYLE
            LogicalButton.current_focus = self.button_index

    def focus_out(self) -> None:
        if LogicalButton.auto_phys_but_enabled:
            self.spin_style = ""
            LogicalButton.current_focus = -1

    def read_from_config(self, settings: ButtonSettings) -> None:
        self._set_physical_number(settings.physical_num + 1)
        self.is_disabled = bool(settings.is_disabled)
        self.is_inverted = bool(settings.is_inverted)
        if settings.type in self.functions:
            self.set_function(self.functions.index(settings.type))
        if 0 <= settings.shift_modificator < SHIFT_COUNT:
            self.shift_index = int(settings.shift_modificator)
        if settings.delay_timer in ButtonTimer._value2member_map_:
            self.delay_timer = ButtonTimer(settings.delay_timer)
        if settings.press_timer in ButtonTimer._value2member_map_:
            self.press_timer = ButtonTimer(settings.press_timer)

    def write_to_config(self, settings: ButtonSettings) -> None:
        settings.physical_num = self.physical_number - 1
        settings.is_disabled = self.is_disabled
        settings.is_inverted = self.is_inverted
        settings.type = self.current_button_type()
        settings.shift_modificator = self.shift_index
        settings.delay_timer = self.delay_timer
        settings.press_timer = self.press_timer


_STYLE_TEMPLATE = """
    QLabel {{
        border-radius: 13px;
        min-height: 26px;
        min-width: 26px;
        background-color: rgb({0});
        color: rgb(220, 221, 222);
    }}
"""

WHITE_STYLE_OFF = _STYLE_TEMPLATE.format("170, 60, 60")
DARK_STYLE_OFF = _STYLE_TEMPLATE.format("90, 90, 90")
STYLE_ON = _STYLE_TEMPLATE.format("0, 128, 0")


class PhysicalButton:
    """One physical button indicator."""

    def __init__(self, button_index: int, clock: Callable[[], float] = time.monotonic):
        self.button_index = button_index
        self.current_state = False
        self._clock = clock
        self._last_act: Optional[int] = None
        self.pressed = Signal()

    @property
    def label(self) -> int:
        return self.button_index + 1

    def set_button_state(self, state: bool) -> None:
        """Show a press at once and a release once the press was visible for 30 ms."""
        if state == self.current_state:
            return
        now_ms = _clock_ms(self._clock)
        if state:
            self.pressed.emit(self.button_index)
            self._last_act = now_ms
            self.current_state = True
        elif _expired(self._last_act, now_ms):
            self.current_state = False

    def style(self, dark: bool) -> str:
        """Style sheet of the indicator for the current state and theme."""
        if self.current_state:
            return STYLE_ON
        return DARK_STYLE_OFF if dark else WHITE_STYLE_OFF