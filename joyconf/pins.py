"""Pin function tables and the per-pin function selector."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, MutableSequence, Optional, Sequence

from joyconf.switch import Rgb

PINS_COUNT = 30
_SLOTS = 10


class PinClass(IntEnum):
    """Board pins and the pin classes used to decide which functions a pin offers."""

    PA_0 = 1
    PA_1 = 2
    PA_2 = 3
    PA_3 = 4
    PA_4 = 5
    PA_5 = 6
    PA_6 = 7
    PA_7 = 8
    PA_8 = 9
    PA_9 = 10
    PA_10 = 11
    PA_15 = 12
    PB_0 = 13
    PB_1 = 14
    PB_3 = 15
    PB_4 = 16
    PB_5 = 17
    PB_6 = 18
    PB_7 = 19
    PB_8 = 20
    PB_9 = 21
    PB_10 = 22
    PB_11 = 23
    PB_12 = 24
    PB_13 = 25
    PB_14 = 26
    PB_15 = 27
    PC_13 = 28
    PC_14 = 29
    PC_15 = 30
    ANALOG_IN = 31
    FAST_ENCODER_PIN = 32
    LED_PWM_PIN = 33
    I2C1_SDA = 34
    I2C1_SCL = 35
    I2C2_SDA = 36
    I2C2_SCL = 37
    SPI1_MOSI = 38
    SPI1_MISO = 39
    SPI1_SCK = 40
    SPI1_NSS = 41
    SPI2_MOSI = 42
    SPI2_MISO = 43
    SPI2_SCK = 44
    SPI2_NSS = 45
    ALL = 999


class PinRole(IntEnum):
    """Function a pin can be configured for on the device."""

    NOT_USED = 0
    BUTTON_GND = 1
    BUTTON_VCC = 2
    BUTTON_ROW = 3
    BUTTON_COLUMN = 4
    SHIFT_REG_LATCH = 5
    SHIFT_REG_DATA = 6
    SHIFT_REG_CLK = 7
    TLE5011_CS = 8
    TLE5012_CS = 9
    MCP3201_CS = 10
    MCP3202_CS = 11
    MCP3204_CS = 12
    MCP3208_CS = 13
    MLX90393_CS = 14
    MLX90363_CS = 15
    AS5048A_CS = 16
    LED_SINGLE = 17
    LED_ROW = 18
    LED_COLUMN = 19
    LED_PWM = 20
    AXIS_ANALOG = 21
    FAST_ENCODER = 22
    SPI_SCK = 23
    SPI_MOSI = 24
    SPI_MISO = 25
    TLE5011_GEN = 26
    I2C_SCL = 27
    I2C_SDA = 28


@dataclass(frozen=True)
class PinInfo:
    """A physical pin: its number, layout name, display name and classes."""

    pin: PinClass
    object_name: str
    gui_name: str
    classes: tuple = ()


@dataclass(frozen=True)
class PinTypeInfo:
    """A pin function: which pins offer it, which pins never do, and what it pulls in."""

    role: PinRole
    gui_name: str
    add_to: tuple = ()
    except_on: tuple = ()
    interaction: tuple = ()
    color: Optional[Rgb] = None


def _pin(pin: PinClass, name: str, *classes: PinClass) -> PinInfo:
    return PinInfo(pin, name, f"Pin {name}", tuple(classes))


C = PinClass
R = PinRole

PIN_LIST: tuple = (
    _pin(C.PA_0, "A0", C.ANALOG_IN),
    _pin(C.PA_1, "A1", C.ANALOG_IN),
    _pin(C.PA_2, "A2", C.ANALOG_IN),
    _pin(C.PA_3, "A3", C.ANALOG_IN),
    _pin(C.PA_4, "A4", C.ANALOG_IN),
    _pin(C.PA_5, "A5", C.ANALOG_IN),
    _pin(C.PA_6, "A6", C.ANALOG_IN),
    _pin(C.PA_7, "A7", C.ANALOG_IN),
    _pin(C.PA_8, "A8"),
    _pin(C.PA_9, "A9"),
    _pin(C.PA_10, "A10"),
    _pin(C.PA_15, "A15", C.SPI1_NSS),
    _pin(C.PB_0, "B0"),
    _pin(C.PB_1, "B1"),
    _pin(C.PB_3, "B3", C.SPI1_SCK),
    _pin(C.PB_4, "B4", C.SPI1_MISO),
    _pin(C.PB_5, "B5", C.SPI1_MOSI),
    _pin(C.PB_6, "B6"),
    _pin(C.PB_7, "B7"),
    _pin(C.PB_8, "B8", C.I2C1_SCL),
    _pin(C.PB_9, "B9", C.I2C1_SDA),
    _pin(C.PB_10, "B10", C.I2C2_SCL),
    _pin(C.PB_11, "B11", C.I2C2_SDA),
    _pin(C.PB_12, "B12"),
    _pin(C.PB_13, "B13"),
    _pin(C.PB_14, "B14"),
    _pin(C.PB_15, "B15"),
    _pin(C.PC_13, "C13"),
    _pin(C.PC_14, "C14"),
    _pin(C.PC_15, "C15"),
)

_SPI_GREEN = Rgb(53, 153, 120)
_SPI3 = (C.SPI1_SCK, C.SPI1_MOSI, C.SPI1_MISO)
_SPI3_ROLES = (R.SPI_SCK, R.SPI_MOSI, R.SPI_MISO)

PIN_TYPES: tuple = (
    PinTypeInfo(R.NOT_USED, "Not Used", (C.ALL,)),
    PinTypeInfo(R.BUTTON_GND, "Button Gnd", (C.ALL,), color=Rgb(25, 130, 240)),
    PinTypeInfo(R.BUTTON_VCC, "Button Vcc", (C.ALL,), color=Rgb(170, 170, 0)),
    PinTypeInfo(R.BUTTON_ROW, "Button Row", (C.ALL,), color=Rgb(120, 130, 250)),
    PinTypeInfo(R.BUTTON_COLUMN, "Button Column", (C.ALL,), color=Rgb(120, 130, 250)),
    PinTypeInfo(R.SHIFT_REG_LATCH, "ShiftReg LATCH", (C.ALL,), color=Rgb(105, 180, 55)),
    PinTypeInfo(R.SHIFT_REG_DATA, "ShiftReg DATA", (C.ALL,), color=Rgb(105, 180, 55)),
    PinTypeInfo(R.SHIFT_REG_CLK, "ShiftReg CLK", (C.ALL,), color=Rgb(105, 180, 55)),
    PinTypeInfo(R.TLE5011_CS, "TLE5011 CS", (C.ALL,), (C.SPI1_SCK, C.SPI1_MOSI),
                (R.SPI_SCK, R.SPI_MOSI, R.TLE5011_GEN), _SPI_GREEN),
    PinTypeInfo(R.TLE5012_CS, "TLE5012B CS", (C.ALL,), (C.SPI1_SCK, C.SPI1_MOSI),
                (R.SPI_SCK, R.SPI_MOSI, R.TLE5011_GEN), _SPI_GREEN),
    PinTypeInfo(R.MCP3201_CS, "MCP3201 CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.MCP3202_CS, "MCP3202 CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.MCP3204_CS, "MCP3204 CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.MCP3208_CS, "MCP3208 CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.MLX90393_CS, "MLX90393 CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.MLX90363_CS, "MLX90363 CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.AS5048A_CS, "AS5048A CS", (C.ALL,), _SPI3, _SPI3_ROLES, _SPI_GREEN),
    PinTypeInfo(R.LED_SINGLE, "LED Single", (C.ALL,), color=Rgb(200, 150, 70)),
    PinTypeInfo(R.LED_ROW, "LED Row", (C.ALL,), color=Rgb(200, 130, 70)),
    PinTypeInfo(R.LED_COLUMN, "LED Column", (C.ALL,), color=Rgb(200, 130, 70)),
    PinTypeInfo(R.LED_PWM, "LED PWM", (C.PA_8, C.PB_0, C.PB_1, C.PB_4), color=Rgb(200, 90, 70)),
    PinTypeInfo(R.AXIS_ANALOG, "Axis Analog", (C.ANALOG_IN,), color=Rgb(0, 160, 0)),
    PinTypeInfo(R.FAST_ENCODER, "Fast Encoder", (C.PA_8, C.PA_9), color=Rgb(55, 150, 25)),
    PinTypeInfo(R.SPI_SCK, "SPI SCK", (C.SPI1_SCK,), color=_SPI_GREEN),
    PinTypeInfo(R.SPI_MOSI, "SPI MOSI", (C.SPI1_MOSI,), color=_SPI_GREEN),
    PinTypeInfo(R.SPI_MISO, "SPI MISO", (C.SPI1_MISO,), color=_SPI_GREEN),
    PinTypeInfo(R.TLE5011_GEN, "TLE5011 GEN", (C.PB_6,), color=_SPI_GREEN),
    PinTypeInfo(R.I2C_SCL, "I2C SCL", (C.I2C2_SCL,), (), (R.I2C_SDA,), Rgb(90, 155, 140)),
    PinTypeInfo(R.I2C_SDA, "I2C SDA", (C.I2C2_SDA,), (), (R.I2C_SCL,), Rgb(90, 155, 140)),
)

PIN_TYPE_COUNT = len(PIN_TYPES)

del C, R


def _slot(values: tuple, position: int) -> int:
    """Value at ``position`` of a zero-padded fixed-size table row."""
    return int(values[position]) if position < len(values) else 0


def _check_pin(pin_number: int) -> None:
    if pin_number < 1 or pin_number > PINS_COUNT:
        raise ValueError(f"pin number must be between 1 and {PINS_COUNT}, got {pin_number}")


def pin_types_for(pin_number: int) -> list[int]:
    """Indices into ``PIN_TYPES`` of the functions offered on a pin, in display order."""
    _check_pin(pin_number)
    pin_classes = PIN_LIST[pin_number - 1].classes
    result: list[int] = []
    i = 0
    while i < PIN_TYPE_COUNT:
        skipped = False
        for c in range(_SLOTS):
            if i >= PIN_TYPE_COUNT:
                break
            excepted = _slot(PIN_TYPES[i].except_on, c)
            if excepted == 0:
                break
            if excepted == pin_number:
                i += 1
                skipped = True
                break
            for pin_class in pin_classes:
                if excepted == pin_class:
                    i += 1
                    skipped = True
                    break
        if skipped:
            i += 1
            continue
        for target in PIN_TYPES[i].add_to:
            if target == PinClass.ALL or target == pin_number:
                result.append(i)
                continue
            result.extend(i for pin_class in pin_classes if target == pin_class)
        i += 1
    return result


InteractionListener = Callable[[int, int, int], None]
IndexListener = Callable[[int, int, int, str], None]


class PinSelector:
    """The function chosen for one pin, with the interactions it triggers on other pins."""

    def __init__(self, pin_number: int):
        _check_pin(pin_number)
        self.pin_number = pin_number
        self.type_indices: list[int] = pin_types_for(pin_number)
        self.enum_index: list[PinRole] = [PIN_TYPES[i].role for i in self.type_indices]
        self.item_enabled: list[bool] = [True] * len(self.type_indices)
        self.current_index = 0
        self.current_dev_enum: int = PinRole.NOT_USED
        self.previous_index: int = PinRole.NOT_USED
        self.interact_count = 0
        self.is_interacts = False
        self.enabled = True
        self.text_color: Optional[Rgb] = None
        self._is_call_interaction = False
        self._call_interaction = 0
        self._interaction_listeners: list[InteractionListener] = []
        self._index_listeners: list[IndexListener] = []

    @property
    def pin_info(self) -> PinInfo:
        return PIN_LIST[self.pin_number - 1]

    @property
    def object_name(self) -> str:
        return self.pin_info.object_name

    @property
    def items(self) -> list[str]:
        return [PIN_TYPES[i].gui_name for i in self.type_indices]

    @property
    def current_text(self) -> str:
        return PIN_TYPES[self.type_indices[self.current_index]].gui_name

    def on_interaction(self, callback: InteractionListener) -> None:
        """Call ``callback(type_index, sender_type_index, pin)`` for pins this choice affects."""
        self._interaction_listeners.append(callback)

    def on_current_index_changed(self, callback: IndexListener) -> None:
        """Call ``callback(current, previous, pin_number, pin_name)`` after a new choice."""
        self._index_listeners.append(callback)

    def set_index_status(self, index: int, enabled: bool) -> None:
        """Enable or disable one entry of the function list."""
        self.item_enabled[index] = enabled

    def reset_pin(self) -> None:
        """Return the pin to "Not Used", releasing any interaction lock."""
        self._set_current_index(0)
        if self.is_interacts:
            self.enabled = True
            self.is_interacts = False

    def set_index_interaction(self, index: int, sender_index: int) -> None:
        """Apply or release a choice forced by another pin's function."""
        if not self.is_interacts and not self._is_call_interaction:
            if PIN_TYPES[self.type_indices[index]].role != PinRole.TLE5011_GEN:
                self.enabled = False
            self.text_color = PIN_TYPES[sender_index].color
            self.is_interacts = True
            self._set_current_index(index)
        elif self.is_interacts:
            self.enabled = True
            self.is_interacts = False
            self.text_color = None
            self._set_current_index(index)

    def select(self, index: int) -> None:
        """Choose the function at ``index`` of this pin's list."""
        self._set_current_index(index)

    def read_from_config(self, pins: Sequence[int]) -> None:
        """Select the function stored for this pin in a device pin table."""
        stored = pins[self.pin_number - 1]
        for index, role in enumerate(self.enum_index):
            if stored == role:
                self.select(index)
                break

    def write_to_config(self, pins: MutableSequence[int]) -> None:
        """Store this pin's function in a device pin table."""
        pins[self.pin_number - 1] = self.current_dev_enum

    def _set_current_index(self, index: int) -> None:
        if not 0 <= index < len(self.type_indices):
            raise IndexError(f"no entry {index} for pin {self.object_name}")
        if index == self.current_index:
            return
        self.current_index = index
        self._index_changed(index)

    def _emit_interaction(self, type_index: int, sender_index: int) -> None:
        for callback in list(self._interaction_listeners):
            callback(type_index, sender_index, self.pin_number)

    def _index_changed(self, index: int) -> None:
        if self.type_indices and not self.is_interacts:
            chosen = self.type_indices[index]
            self.text_color = None if index == 0 else PIN_TYPES[chosen].color
            interaction = PIN_TYPES[chosen].interaction
            added = 0
            for i in range(_SLOTS):
                if self._is_call_interaction and added == 0:
                    self._is_call_interaction = False
                    if _slot(interaction, i) > 0:
                        self._is_call_interaction = True
                        for t in range(_SLOTS):
                            wanted = _slot(interaction, t)
                            if wanted > 0:
                                for k, info in enumerate(PIN_TYPES):
                                    if info.role == wanted:
                                        self._emit_interaction(k, chosen)
                                        break
                    released = PIN_TYPES[self._call_interaction].interaction
                    for n in range(_SLOTS):
                        wanted = _slot(released, n)
                        if wanted <= 0:
                            break
                        for m, info in enumerate(PIN_TYPES):
                            if info.role == wanted:
                                self._emit_interaction(PinRole.NOT_USED, m)
                    self._call_interaction = chosen
                    break
                wanted = _slot(interaction, i)
                if wanted > 0:
                    self._is_call_interaction = True
                    for k, info in enumerate(PIN_TYPES):
                        if info.role == wanted:
                            self._call_interaction = chosen
                            self._emit_interaction(k, chosen)
                            added += 1
                            break

        if self.type_indices:
            current = self.enum_index[index]
            for callback in list(self._index_listeners):
                callback(current, self.previous_index, self.pin_number, self.current_text)
            self.previous_index = current
            self.current_dev_enum = current