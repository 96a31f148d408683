"""Configuration of all logical and physical buttons, shifts and button timers."""

import time
from dataclasses import dataclass, field
from typing import Callable, MutableMapping, Optional, Sequence

from joyconf.buttons import (
    SHIFT_COUNT,
    ButtonFunction,
    ButtonSettings,
    LogicalButton,
    PhysicalButton,
)
from joyconf.debuglog import DebugLog
from joyconf.pinconfig import MAX_BUTTONS_NUM, Signal

AUTO_PHYS_BUTTON_KEY = "OtherSettings/AutoSetPhysButton"

SHIFT_REGISTERS = 5
PHYS_BUTTON_COLUMNS = 8
_BUTTON_DATA_BYTES = 16

# Function types limited to a maximum number of logical buttons.
_TYPE_LIMITS: tuple = (
    (ButtonFunction.ENCODER_INPUT_A, 15),
    (ButtonFunction.ENCODER_INPUT_B, 15),
)


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


@dataclass
class ButtonsDeviceConfig:
    """Device-side button settings: logical buttons, shifts and timers."""

    buttons: list = field(default_factory=lambda: [ButtonSettings() for _ in range(MAX_BUTTONS_NUM)])
    shift_config: list = field(default_factory=lambda: [-1] * SHIFT_REGISTERS)
    button_timer1_ms: int = 0
    button_timer2_ms: int = 0
    button_timer3_ms: int = 0
    button_debounce_ms: int = 0
    a2b_debounce_ms: int = 0
    encoder_press_time_ms: int = 0


class ButtonConfig:
    """All logical buttons, the physical button indicators and the shift buttons."""

    def __init__(self, settings: Optional[MutableMapping] = None,
                 debug_log: Optional[DebugLog] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.settings = settings if settings is not None else {}
        self._clock = clock
        self.encoder_input_changed = Signal()

        self.logical_buttons = [LogicalButton(i, debug_log, clock) for i in range(MAX_BUTTONS_NUM)]
        for button in self.logical_buttons:
            button.function_type_changed.connect(self.function_type_changed)
        self.physical_buttons: list[PhysicalButton] = []

        self.shift_buttons = [0] * SHIFT_REGISTERS
        self.shift_enabled = True
        self.shift_active = [False] * SHIFT_REGISTERS
        self._shifts_active = False

        self.button_timer1_ms = 0
        self.button_timer2_ms = 0
        self.button_timer3_ms = 0
        self.button_debounce_ms = 0
        self.a2b_debounce_ms = 0
        self.encoder_press_time_ms = 0

        self._limit_counts = [0] * len(_TYPE_LIMITS)
        self._limit_enabled = [False] * len(_TYPE_LIMITS)

        self.auto_phys_but_enabled = False
        self.set_auto_phys_button(_to_bool(self.settings.get(AUTO_PHYS_BUTTON_KEY, True)))

    @property
    def physical_positions(self) -> list[tuple[int, int]]:
        """Grid (row, column) of every physical button indicator."""
        return [divmod(i, PHYS_BUTTON_COLUMNS) for i in range(len(self.physical_buttons))]

    def set_auto_phys_button(self, checked: bool) -> None:
        """Switch assigning the pressed physical button to the focused logical one."""
        self.auto_phys_but_enabled = checked
        LogicalButton.auto_phys_but_enabled = checked
        self.settings[AUTO_PHYS_BUTTON_KEY] = checked

    def set_physic_button(self, button_index: int) -> None:
        """Give the focused logical button the physical button ``button_index``."""
        if not self.auto_phys_but_enabled:
            return
        focus = LogicalButton.current_focus
        if 0 <= focus < len(self.logical_buttons):
            self.logical_buttons[focus].set_physic_button(button_index)

    def _create_physical_buttons(self, count: int) -> None:
        self.physical_buttons = []
        for i in range(max(0, count)):
            button = PhysicalButton(i, self._clock)
            button.pressed.connect(self.set_physic_button)
            self.physical_buttons.append(button)

    def set_ui_on_off(self, value: int) -> None:
        """Adapt the editors to ``value`` physical buttons."""
        self.shift_enabled = value > 0
        for button in self.logical_buttons:
            button.set_spin_box_on_off(value)
            button.set_max_phys_buttons(value)
        self._create_physical_buttons(value)

    def function_type_changed(self, current: int, previous: int, button_index: int) -> None:
        """Report encoder inputs and enforce per-type limits after a function change."""
        number = button_index + 1
        if current == ButtonFunction.ENCODER_INPUT_A:
            self.encoder_input_changed.emit(number, 0)
        elif current == ButtonFunction.ENCODER_INPUT_B:
            self.encoder_input_changed.emit(0, number)

        if previous == ButtonFunction.ENCODER_INPUT_A:
            self.encoder_input_changed.emit(-number, 0)
        elif previous == ButtonFunction.ENCODER_INPUT_B:
            self.encoder_input_changed.emit(0, -number)

        self._type_limit(current, previous)

    def _type_limit(self, current: int, previous: int) -> None:
        for i, (button_type, max_count) in enumerate(_TYPE_LIMITS):
            if current == button_type:
                self._limit_counts[i] += 1
            if previous == button_type:
                self._limit_counts[i] -= 1

            if self._limit_counts[i] >= max_count and not self._limit_enabled[i]:
                self._limit_enabled[i] = True
                for button in self.logical_buttons:
                    if button.current_button_type() != current:
                        button.disable_button_type(current, True)

            if self._limit_enabled[i] and self._limit_counts[i] < max_count:
                self._limit_enabled[i] = False
                for button in self.logical_buttons:
                    button.disable_button_type(previous, False)

    def button_state_changed(self, log_button_data: Sequence[int],
                             phy_button_data: Sequence[int], shift_button_data: int) -> None:
        """Show the button and shift states reported by the device."""
        for buttons, data in ((self.logical_buttons, log_button_data),
                              (self.physical_buttons, phy_button_data)):
            for byte_index, byte in enumerate(list(data)[:_BUTTON_DATA_BYTES]):
                for bit in range(8):
                    number = bit + byte_index * 8
                    if number < len(buttons):
                        buttons[number].set_button_state(bool(byte & (1 << bit)))

        for i in range(SHIFT_COUNT):
            if shift_button_data & (1 << (i & 0x07)):
                self._shifts_active = True
                if i < SHIFT_REGISTERS and not self.shift_active[i]:
                    self.shift_active[i] = True
            elif self._shifts_active:
                if i == 0:
                    for k, active in enumerate(self.shift_active):
                        if active:
                            self.shift_active[k] = False
                            break
                if not any(self.shift_active):
                    self._shifts_active = False

    def read_from_config(self, config: ButtonsDeviceConfig) -> None:
        for button, settings in zip(self.logical_buttons, config.buttons):
            button.read_from_config(settings)
        self.shift_buttons = [button + 1 for button in list(config.shift_config)[:SHIFT_REGISTERS]]
        self.button_timer1_ms = config.button_timer1_ms
        self.button_timer2_ms = config.button_timer2_ms
        self.button_timer3_ms = config.button_timer3_ms
        self.button_debounce_ms = config.button_debounce_ms
        self.a2b_debounce_ms = config.a2b_debounce_ms
        self.encoder_press_time_ms = config.encoder_press_time_ms

    def write_to_config(self, config: ButtonsDeviceConfig) -> None:
        for k, value in enumerate(self.shift_buttons):
            config.shift_config[k] = value - 1
        config.button_timer1_ms = self.button_timer1_ms
        config.button_timer2_ms = self.button_timer2_ms
        config.button_timer3_ms = self.button_timer3_ms
        config.button_debounce_ms = self.button_debounce_ms
        config.a2b_debounce_ms = self.a2b_debounce_ms
        config.encoder_press_time_ms = self.encoder_press_time_ms
        for button, settings in zip(self.logical_buttons, config.buttons):
            button.write_to_config(settings)