"""Pin assignment for the whole board and the running totals it produces."""

from enum import IntEnum
from typing import Callable, MutableMapping, MutableSequence, Optional, Sequence

from joyconf.pins import PIN_LIST, PINS_COUNT, PinClass, PinRole, PinSelector

MAX_BUTTONS_NUM = 128
SELECTED_BOARD_KEY = "BoardSettings/SelectedBoard"
BOARDS = ("Blue Pill", "Controller Lite")

_UINT_MASK = 0xFFFFFFFF
_I2C_AXIS_SOURCE = -2
_SPI_ROLES = (PinRole.SPI_SCK, PinRole.SPI_MOSI, PinRole.SPI_MISO)


class Signal:
    """A list of callbacks invoked in connection order."""

    def __init__(self) -> None:
        self._slots: list[Callable] = []

    def connect(self, slot: Callable) -> None:
        self._slots.append(slot)

    def emit(self, *args) -> None:
        for slot in list(self._slots):
            slot(*args)


class SourceKind(IntEnum):
    """What a pin function contributes to the device totals."""

    AXIS_SOURCE = 0
    BUTTON_FROM_AXES = 1
    SINGLE_BUTTON = 2
    ROW_OF_BUTTONS = 3
    COLUMN_OF_BUTTONS = 4
    SINGLE_LED = 5
    ROW_OF_LED = 6
    COLUMN_OF_LED = 7


# Device value 678 marks buttons made from axes; no pin function carries it.
_SOURCES: tuple = (
    (SourceKind.AXIS_SOURCE, (
        PinRole.AXIS_ANALOG, PinRole.TLE5011_CS, PinRole.MCP3201_CS, PinRole.MCP3202_CS,
        PinRole.MCP3204_CS, PinRole.MCP3208_CS, PinRole.MLX90393_CS, PinRole.MLX90363_CS,
        PinRole.AS5048A_CS, PinRole.TLE5012_CS,
    )),
    (SourceKind.BUTTON_FROM_AXES, (678,)),
    (SourceKind.SINGLE_BUTTON, (PinRole.BUTTON_VCC, PinRole.BUTTON_GND)),
    (SourceKind.ROW_OF_BUTTONS, (PinRole.BUTTON_ROW,)),
    (SourceKind.COLUMN_OF_BUTTONS, (PinRole.BUTTON_COLUMN,)),
    (SourceKind.SINGLE_LED, (PinRole.LED_SINGLE,)),
    (SourceKind.ROW_OF_LED, (PinRole.LED_ROW,)),
    (SourceKind.COLUMN_OF_LED, (PinRole.LED_COLUMN,)),
)

_PIN_TYPE_LIMITS: tuple = (
    (PinRole.SHIFT_REG_LATCH, 4),
    (PinRole.SHIFT_REG_DATA, 4),
    (PinRole.SHIFT_REG_CLK, 4),
)


class ConfigSummary:
    """Counts of axis sources, buttons and LEDs produced by the pin choices."""

    def __init__(self, max_leds: int, max_buttons: int = MAX_BUTTONS_NUM):
        self.max_leds = max_leds
        self.max_buttons = max_buttons
        self.axis_sources = 0
        self.buttons_from_axes = 0
        self.buttons_from_shift_regs = 0
        self.single_buttons = 0
        self.rows_of_buttons = 0
        self.columns_of_buttons = 0
        self.single_leds = 0
        self.rows_of_leds = 0
        self.columns_of_leds = 0
        self.buttons_warning = False
        self.leds_warning = False
        self._limit = False
        self.total_leds_value_changed = Signal()
        self.total_buttons_value_changed = Signal()
        self.limit_reached = Signal()

    @property
    def buttons_from_matrix(self) -> int:
        return self.columns_of_buttons * self.rows_of_buttons

    @property
    def total_buttons(self) -> int:
        return (self.buttons_from_shift_regs + self.buttons_from_axes
                + self.single_buttons + self.buttons_from_matrix)

    @property
    def total_leds(self) -> int:
        return self.single_leds + self.rows_of_leds * self.columns_of_leds

    def set_config(self, source: int, delta: int) -> None:
        """Add ``delta`` to the count of one kind of source."""
        if source == SourceKind.AXIS_SOURCE:
            self.axis_sources += delta
        elif source == SourceKind.SINGLE_BUTTON:
            self.single_buttons += delta
            self.total_buttons_changed(self.total_buttons)
        elif source == SourceKind.ROW_OF_BUTTONS:
            self.rows_of_buttons += delta
            self.total_buttons_changed(self.total_buttons)
        elif source == SourceKind.COLUMN_OF_BUTTONS:
            self.columns_of_buttons += delta
            self.total_buttons_changed(self.total_buttons)
        elif source == SourceKind.SINGLE_LED:
            self.single_leds += delta
            self.total_leds_changed(self.total_leds)
        elif source == SourceKind.ROW_OF_LED:
            self.rows_of_leds += delta
            self.total_leds_changed(self.total_leds)
        elif source == SourceKind.COLUMN_OF_LED:
            self.columns_of_leds += delta
            self.total_leds_changed(self.total_leds)

    def a2b_count_changed(self, count: int) -> None:
        self.buttons_from_axes = count
        self.total_buttons_changed(self.total_buttons)

    def shift_reg_buttons_count_changed(self, count: int) -> None:
        self.buttons_from_shift_regs = count
        self.total_buttons_changed(self.total_buttons)

    def _set_limit(self, reached: bool) -> None:
        if self._limit != reached:
            self._limit = reached
            self.limit_reached.emit(reached)

    def total_buttons_changed(self, count: int) -> None:
        """Flag the button total when it exceeds the device maximum."""
        if count > self.max_buttons:
            self.buttons_warning = True
            self._set_limit(True)
        elif self.buttons_warning:
            self.buttons_warning = False
            self._set_limit(False)
        self.total_buttons_value_changed.emit(count)

    def total_leds_changed(self, count: int) -> None:
        """Flag the LED total when it exceeds the device maximum."""
        if count > self.max_leds:
            self.leds_warning = True
            self._set_limit(True)
        else:
            self.leds_warning = False
            self._set_limit(False)
        self.total_leds_value_changed.emit(count)

    def limit_is_reached(self) -> bool:
        return self._limit


def _board_from_settings(settings: MutableMapping) -> int:
    try:
        board = int(settings.get(SELECTED_BOARD_KEY, 0))
    except (TypeError, ValueError):
        board = 0
    return board if 0 <= board < len(BOARDS) else 0


class PinConfig:
    """Functions of all board pins and the effects one choice has on the others."""

    def __init__(self, max_leds: int, max_buttons: int = MAX_BUTTONS_NUM,
                 settings: Optional[MutableMapping] = None):
        self.settings = settings if settings is not None else {}
        self.board = _board_from_settings(self.settings)
        self.summary = ConfigSummary(max_leds, max_buttons)
        self.shift_latch_count = 0
        self.shift_data_count = 0
        self.shift_clk_count = 0
        self._limit_counts = [0] * len(_PIN_TYPE_LIMITS)
        self._limit_enabled = [False] * len(_PIN_TYPE_LIMITS)
        self._spi_count = 0

        self.total_buttons_value_changed = Signal()
        self.total_leds_value_changed = Signal()
        self.fast_encoder_selected = Signal()
        self.shift_reg_selected = Signal()
        self.axes_source_changed = Signal()
        self.limit_reached = Signal()

        self.selectors = [PinSelector(number) for number in range(1, PINS_COUNT + 1)]
        for selector in self.selectors:
            selector.on_interaction(self.pin_interaction)
            selector.on_current_index_changed(self.pin_index_changed)

        self.summary.total_buttons_value_changed.connect(self.total_buttons_value_changed.emit)
        self.summary.total_leds_value_changed.connect(self.total_leds_value_changed.emit)
        self.summary.limit_reached.connect(self.limit_reached.emit)

    @property
    def board_name(self) -> str:
        return BOARDS[self.board]

    def select_board(self, index: int) -> None:
        """Switch the pin layout to another board and remember it."""
        if index in (0, 1) and index != self.board:
            self.board = index
            self.settings[SELECTED_BOARD_KEY] = index

    def pin_interaction(self, index: int, sender_index: int, pin: int) -> None:
        """Force or release the function ``index`` on pins that offer it."""
        if index != PinRole.NOT_USED:
            for selector in self.selectors:
                for j, type_index in enumerate(selector.type_indices):
                    if type_index != index:
                        continue
                    if selector.interact_count == 0:
                        selector.interact_count = (selector.interact_count + pin) & _UINT_MASK
                        selector.set_index_interaction(j, sender_index)
                    elif selector.is_interacts:
                        selector.interact_count = (selector.interact_count + pin) & _UINT_MASK
        else:
            for selector in self.selectors:
                if not selector.is_interacts:
                    continue
                for type_index in list(selector.type_indices):
                    if type_index != sender_index:
                        continue
                    if selector.interact_count > 0:
                        selector.interact_count = (selector.interact_count - pin) & _UINT_MASK
                    if selector.interact_count <= 0:
                        selector.set_index_interaction(0, sender_index)

    def pin_index_changed(self, current: int, previous: int, pin_number: int, pin_name: str) -> None:
        """React to a pin changing from ``previous`` to ``current`` function."""
        self._signals_for_widgets(current, previous, pin_number, pin_name)
        self._pin_type_limit(current, previous)
        self._set_current_config(current, previous, pin_number, pin_name)
        self._block_pa8_pwm(current, previous)

    def _signals_for_widgets(self, current: int, previous: int, pin_number: int, pin_name: str) -> None:
        gui_name = PIN_LIST[pin_number - PinClass.PA_0].gui_name
        if current == PinRole.FAST_ENCODER:
            self.fast_encoder_selected.emit(gui_name, True)
        elif previous == PinRole.FAST_ENCODER:
            self.fast_encoder_selected.emit(gui_name, False)

        if current == PinRole.SHIFT_REG_LATCH:
            self.shift_latch_count += 1
            self.shift_reg_selected.emit(pin_number, 0, 0, gui_name)
        elif previous == PinRole.SHIFT_REG_LATCH:
            self.shift_latch_count -= 1
            self.shift_reg_selected.emit(-pin_number, 0, 0, gui_name)

        if current == PinRole.SHIFT_REG_CLK:
            self.shift_clk_count += 1
            self.shift_reg_selected.emit(0, pin_number, 0, gui_name)
        elif previous == PinRole.SHIFT_REG_CLK:
            self.shift_clk_count -= 1
            self.shift_reg_selected.emit(0, -pin_number, 0, gui_name)

        if current == PinRole.SHIFT_REG_DATA:
            self.shift_data_count += 1
            self.shift_reg_selected.emit(0, 0, pin_number, gui_name)
        elif previous == PinRole.SHIFT_REG_DATA:
            self.shift_data_count -= 1
            self.shift_reg_selected.emit(0, 0, -pin_number, gui_name)

        if current == PinRole.I2C_SCL:
            self.axes_source_changed.emit(_I2C_AXIS_SOURCE, pin_name, True)
        elif previous == PinRole.I2C_SCL:
            self.axes_source_changed.emit(_I2C_AXIS_SOURCE, pin_name, False)

    def _pin_type_limit(self, current: int, previous: int) -> None:
        for i, (role, max_count) in enumerate(_PIN_TYPE_LIMITS):
            if current == role:
                self._limit_counts[i] += 1
            if previous == role:
                self._limit_counts[i] -= 1

            if self._limit_counts[i] >= max_count and not self._limit_enabled[i]:
                self._limit_enabled[i] = True
                for selector in self.selectors:
                    for k, item_role in enumerate(selector.enum_index):
                        if item_role == role and selector.current_dev_enum != current:
                            selector.set_index_status(k, False)

            if self._limit_enabled[i] and self._limit_counts[i] < max_count:
                self._limit_enabled[i] = False
                for selector in self.selectors:
                    for k, item_role in enumerate(selector.enum_index):
                        if item_role == role:
                            selector.set_index_status(k, True)

    def _set_current_config(self, current: int, previous: int, pin_number: int, pin_name: str) -> None:
        for kind, roles in _SOURCES:
            for role in roles:
                if role != current and role != previous:
                    continue
                delta = 1 if role == current else -1
                if kind == SourceKind.AXIS_SOURCE:
                    self.axes_source_changed.emit(pin_number - 1, pin_name, delta > 0)
                self.summary.set_config(kind, delta)

    def _block_pa8_pwm(self, current: int, previous: int) -> None:
        """PA8 may drive a PWM LED only while no SPI pin is chosen."""
        if current in _SPI_ROLES:
            self._spi_count += 1
        elif previous in _SPI_ROLES:
            self._spi_count -= 1

        pa8 = self.selectors[PinClass.PA_8 - PinClass.PA_0]
        blocked = self._spi_count > 0
        if blocked and pa8.current_dev_enum == PinRole.LED_PWM:
            pa8.reset_pin()
        for i, role in enumerate(pa8.enum_index):
            if role == PinRole.LED_PWM:
                pa8.set_index_status(i, not blocked)
                break

    def a2b_count_changed(self, count: int) -> None:
        self.summary.a2b_count_changed(count)

    def shift_reg_buttons_count_changed(self, count: int) -> None:
        self.summary.shift_reg_buttons_count_changed(count)

    def limit_is_reached(self) -> bool:
        return self.summary.limit_is_reached()

    def reset_all_pins(self) -> None:
        for selector in self.selectors:
            selector.reset_pin()

    def read_from_config(self, pins: Sequence[int]) -> None:
        for selector in self.selectors:
            selector.read_from_config(pins)

    def write_to_config(self, pins: MutableSequence[int]) -> None:
        for selector in self.selectors:
            selector.write_to_config(pins)