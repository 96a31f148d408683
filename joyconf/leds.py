"""LED and PWM output settings."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

PWM_PINS = ("PA8", "PB0", "PB1", "PB4")


class LedFunction(IntEnum):
    NORMAL = 0
    INVERTED = 1

    @property
    def gui_name(self) -> str:
        return "Normal" if self is LedFunction.NORMAL else "Inverted"


@dataclass
class LedSettings:
    """Device-side settings of one LED."""

    input_num: int = -1
    type: LedFunction = LedFunction.NORMAL


@dataclass
class PwmSettings:
    """Device-side settings of one PWM LED channel."""

    duty_cycle: int = 0
    is_axis: bool = False
    axis_num: int = 0


class Led:
    """One LED row: the driving logical button and its function."""

    def __init__(self, number: int):
        self.number = number
        self.input_number = 0
        self.function = LedFunction.NORMAL
        self.state = False
        self.hidden = True

    @property
    def label(self) -> int:
        return self.number + 1

    @property
    def current_button_selected(self) -> int:
        """Zero-based logical button that drives this LED."""
        return self.input_number - 1

    def set_led_state(self, state: bool) -> None:
        if state != self.state:
            self.state = state

    def read_from_config(self, settings: LedSettings) -> None:
        self.input_number = settings.input_num + 1
        self.function = LedFunction(settings.type)

    def write_to_config(self, settings: LedSettings) -> None:
        settings.input_num = self.input_number - 1
        settings.type = self.function


class LedConfig:
    """All LEDs of a device together with its PWM channels."""

    def __init__(self, max_leds: int):
        self.max_leds = max_leds
        self.leds = [Led(i) for i in range(max_leds)]
        self.pwm: list[PwmSettings] = [PwmSettings() for _ in PWM_PINS]

    @property
    def visible_count(self) -> int:
        return sum(not led.hidden for led in self.leds)

    def spawn_leds(self, led_count: int) -> None:
        """Show the first ``led_count`` LEDs; counts above the maximum are ignored."""
        if led_count > self.max_leds:
            return
        for index, led in enumerate(self.leds):
            led.hidden = index >= led_count

    def set_leds_state(self, leds: Sequence[LedSettings], log_button_data: Sequence[int]) -> None:
        """Light each LED whose logical button bit is set."""
        for led, settings in zip(self.leds, leds):
            if settings.input_num <= -1:
                break
            if led.current_button_selected == settings.input_num:
                index, bit = divmod(settings.input_num, 8)
                led.set_led_state(bool(log_button_data[index] & (1 << bit)))

    def read_from_config(self, leds: Sequence[LedSettings], pwm: Sequence[PwmSettings]) -> None:
        self.pwm = [
            PwmSettings(src.duty_cycle, src.is_axis, src.axis_num)
            for src in list(pwm)[: len(PWM_PINS)]
        ]
        for led, settings in zip(self.leds, leds):
            led.read_from_config(settings)

    def write_to_config(self, leds: Sequence[LedSettings], pwm: Sequence[PwmSettings]) -> None:
        for own, target in zip(self.pwm, pwm):
            target.duty_cycle = own.duty_cycle
            target.is_axis = own.is_axis
            target.axis_num = own.axis_num
        for led, settings in zip(self.leds, leds):
            if led.hidden:
                break
            led.write_to_config(settings)