"""Shift register inputs: pins per register and the buttons they provide."""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from joyconf.encoders import NOT_DEFINED
from joyconf.pinconfig import Signal


class ShiftRegisterType(IntEnum):
    """Shift register chip and input pull direction."""

    HC165_PULL_DOWN = 0
    CD4021_PULL_DOWN = 1
    HC165_PULL_UP = 2
    CD4021_PULL_UP = 3

    @property
    def gui_name(self) -> str:
        return _TYPE_NAMES[self]


_TYPE_NAMES = {
    ShiftRegisterType.HC165_PULL_DOWN: "HC165 Pull Down",
    ShiftRegisterType.CD4021_PULL_DOWN: "CD4021 Pull Down",
    ShiftRegisterType.HC165_PULL_UP: "HC165 Pull Up",
    ShiftRegisterType.CD4021_PULL_UP: "CD4021 Pull Up",
}


@dataclass
class ShiftRegisterSettings:
    """Device-side settings of one shift register chain."""

    type: ShiftRegisterType = ShiftRegisterType.HC165_PULL_DOWN
    button_cnt: int = 0


class ShiftRegister:
    """One shift register chain: its latch, clock and data pins and button count."""

    def __init__(self, number: int):
        self.number = number
        self.latch_pin = 0
        self.clk_pin = 0
        self.data_pin = 0
        self.latch_name = NOT_DEFINED
        self.clk_name = NOT_DEFINED
        self.data_name = NOT_DEFINED
        self.register_type = ShiftRegisterType.HC165_PULL_DOWN
        self.button_count = 0
        self.registers_count = 0
        self.enabled = True
        self._reported_count = 0
        self.button_count_changed = Signal()

    @property
    def label(self) -> int:
        return self.number + 1

    @property
    def default_text(self) -> str:
        return NOT_DEFINED

    def set_button_count(self, count: int) -> None:
        """Set the number of buttons read through this chain."""
        count = max(0, count)
        if count == self.button_count:
            return
        self.button_count = count
        self.registers_count = math.ceil(count / 8)
        if self.enabled:
            self.button_count_changed.emit(count, self._reported_count)
            self._reported_count = count

    def _update_enabled(self) -> None:
        if self.latch_pin > 0 and self.clk_pin > 0 and self.data_pin > 0:
            self.enabled = True
        else:
            self.set_button_count(0)
            self.enabled = False

    def set_latch_pin(self, latch_pin: int, pin_gui_name: str) -> None:
        self.latch_pin = latch_pin if latch_pin != 0 else 0
        self.latch_name = pin_gui_name if latch_pin != 0 else NOT_DEFINED
        self._update_enabled()

    def set_clk_pin(self, clk_pin: int, pin_gui_name: str) -> None:
        self.clk_pin = clk_pin if clk_pin != 0 else 0
        self.clk_name = pin_gui_name if clk_pin != 0 else NOT_DEFINED
        self._update_enabled()

    def set_data_pin(self, data_pin: int, pin_gui_name: str) -> None:
        self.data_pin = data_pin if data_pin != 0 else 0
        self.data_name = pin_gui_name if data_pin != 0 else NOT_DEFINED
        self._update_enabled()

    def read_from_config(self, settings: ShiftRegisterSettings) -> None:
        try:
            self.register_type = ShiftRegisterType(settings.type)
        except ValueError:
            pass
        self.set_button_count(settings.button_cnt)

    def write_to_config(self, settings: ShiftRegisterSettings) -> None:
        settings.type = self.register_type
        settings.button_cnt = self.button_count


@dataclass
class _PinSlot:
    pin_number: int = 0
    gui_name: str = ""


def _sort_null_last(slots: list) -> None:
    slots.sort(key=lambda slot: (slot.pin_number == 0, slot.pin_number))


class ShiftRegistersConfig:
    """All shift register chains and the pins shared out between them."""

    def __init__(self, max_shift_regs: int):
        self.registers = [ShiftRegister(i) for i in range(max_shift_regs)]
        self.shift_buttons_count = 0
        self.shift_reg_buttons_count_changed = Signal()
        self._latch = [_PinSlot() for _ in range(max_shift_regs + 1)]
        self._clk = [_PinSlot() for _ in range(max_shift_regs + 1)]
        self._data = [_PinSlot() for _ in range(max_shift_regs + 1)]
        for register in self.registers:
            register.button_count_changed.connect(self.shift_reg_buttons_calc)

    def shift_reg_buttons_calc(self, current_count: int, previous_count: int) -> None:
        """Update the total of shift register buttons after one chain changed."""
        self.shift_buttons_count += current_count - previous_count
        self.shift_reg_buttons_count_changed.emit(self.shift_buttons_count)

    @staticmethod
    def _place(pin: int, pin_gui_name: str, slots: list) -> None:
        if pin > 0:
            slots[-1] = _PinSlot(pin, pin_gui_name)
        else:
            pin = -pin
            for k, slot in enumerate(slots):
                if slot.pin_number == pin:
                    slots[k] = _PinSlot(0, NOT_DEFINED)
        _sort_null_last(slots)

    def _add_pin_and_sort(self, pin: int, pin_gui_name: str, slots: list) -> None:
        """Place a shared pin, then let chains without their own pin reuse the last one."""
        self._place(pin, pin_gui_name, slots)
        size = len(slots)
        for i in range(size - 1, -1, -1):
            if slots[i].pin_number <= 0:
                continue
            last = slots[-1]
            for k in range(size - 1):
                if slots[k].pin_number == slots[k + 1].pin_number and last.pin_number > 0:
                    for p in range(size - (k + 2)):
                        slots[k + p + 1] = _PinSlot(last.pin_number, last.gui_name)
                    break
            for j in range(size - 1, i, -1):
                slots[j] = _PinSlot(slots[i].pin_number, slots[i].gui_name)
            break

    def shift_reg_selected(self, latch_pin: int, clk_pin: int, data_pin: int,
                           pin_gui_name: str) -> None:
        """Add (positive) or remove (negative) a latch, clock or data pin."""
        if latch_pin != 0:
            self._add_pin_and_sort(latch_pin, pin_gui_name, self._latch)
            for register, slot in zip(self.registers, self._latch):
                register.set_latch_pin(slot.pin_number, slot.gui_name)
        elif clk_pin != 0:
            self._add_pin_and_sort(clk_pin, pin_gui_name, self._clk)
            for register, slot in zip(self.registers, self._clk):
                register.set_clk_pin(slot.pin_number, slot.gui_name)
        elif data_pin != 0:
            self._place(data_pin, pin_gui_name, self._data)
            for register, slot in zip(self.registers, self._data):
                register.set_data_pin(slot.pin_number, slot.gui_name)

    def read_from_config(self, registers: Sequence[ShiftRegisterSettings]) -> None:
        for register, settings in zip(self.registers, registers):
            register.read_from_config(settings)

    def write_to_config(self, registers: Sequence[ShiftRegisterSettings]) -> None:
        for register, settings in zip(self.registers, registers):
            register.write_to_config(settings)