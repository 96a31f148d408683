from datetime import datetime

import pytest

from joyconf.buttonconfig import ButtonConfig
from joyconf.buttons import (
    DARK_STYLE_OFF,
    FOCUS_STYLE,
    STYLE_ON,
    WHITE_STYLE_OFF,
    ButtonFunction,
    ButtonSettings,
    ButtonTimer,
    LogicalButton,
    PhysicalButton,
)
from joyconf.debuglog import DebugLog


class FakeClock:
    def __init__(self):
        self.t = 100.0

    def __call__(self):
        return self.t

    def advance_ms(self, ms):
        self.t += ms / 1000.0


def _set_auto_phys(enabled):
    helper = ButtonConfig(clock=FakeClock())
    helper.set_auto_phys_button(enabled)
    return helper


def _reset_shared():
    helper = _set_auto_phys(True)
    helper.logical_buttons[0].focus_out()
    helper.set_auto_phys_button(False)


@pytest.fixture(autouse=True)
def reset_shared_state():
    _reset_shared()
    yield
    _reset_shared()


def test_function_names_and_timer_names():
    button = LogicalButton(0)
    button.read_from_config(ButtonSettings(
        type=ButtonFunction.ENCODER_INPUT_A,
        delay_timer=ButtonTimer.OFF,
        press_timer=ButtonTimer.TIMER_2,
    ))
    assert button.current_button_type().gui_name == "Encoder A"
    out = ButtonSettings()
    button.write_to_config(out)
    assert out.delay_timer.gui_name == "-"
    assert out.press_timer.gui_name == "Timer 2"


def test_set_function_emits_current_and_previous():
    button = LogicalButton(3)
    events = []
    button.function_type_changed.connect(lambda *a: events.append(a))
    button.set_function(button.functions.index(ButtonFunction.ENCODER_INPUT_A))
    button.set_function(button.functions.index(ButtonFunction.BUTTON_TOGGLE))
    assert events == [
        (ButtonFunction.ENCODER_INPUT_A, ButtonFunction.BUTTON_NORMAL, 3),
        (ButtonFunction.BUTTON_TOGGLE, ButtonFunction.ENCODER_INPUT_A, 3),
    ]
    assert button.current_button_type() is ButtonFunction.BUTTON_TOGGLE


def test_set_same_function_does_not_emit():
    button = LogicalButton(0)
    events = []
    button.function_type_changed.connect(lambda *a: events.append(a))
    button.set_function(0)
    assert events == []


def test_set_function_out_of_range():
    with pytest.raises(IndexError):
        LogicalButton(0).set_function(len(ButtonFunction))


def test_config_round_trip():
    source = ButtonSettings(
        physical_num=4, is_disabled=True, is_inverted=True,
        type=ButtonFunction.POV2_LEFT, shift_modificator=3,
        delay_timer=ButtonTimer.TIMER_1, press_timer=ButtonTimer.TIMER_3,
    )
    button = LogicalButton(0)
    button.read_from_config(source)
    target = ButtonSettings()
    button.write_to_config(target)
    assert target == source


def test_physical_number_is_offset_by_one():
    button = LogicalButton(0)
    button.set_physic_button(6)
    assert button.physical_number == 7
    settings = ButtonSettings()
    button.write_to_config(settings)
    assert settings.physical_num == 6


def test_max_phys_buttons_clamps_value():
    button = LogicalButton(0)
    button.set_physic_button(20)
    button.set_max_phys_buttons(5)
    assert button.physical_number == 5
    button.set_physic_button(50)
    assert button.physical_number == 5


def test_editing_requires_value_and_enabled_spin():
    button = LogicalButton(0)
    button.set_physic_button(2)
    assert button.editing_enabled is True
    button.set_physic_button(-1)
    assert button.editing_enabled is False
    button.set_spin_box_on_off(0)
    assert button.spin_enabled is False
    button.set_physic_button(1)
    assert button.editing_enabled is False


def test_release_held_until_expired():
    clock = FakeClock()
    button = LogicalButton(0, clock=clock)
    button.set_button_state(True)
    assert button.current_state is True
    clock.advance_ms(10)
    button.set_button_state(False)
    assert button.current_state is True
    clock.advance_ms(40)
    button.set_button_state(False)
    assert button.current_state is False


def test_debug_log_receives_real_state():
    clock = FakeClock()
    log = DebugLog(now=lambda: datetime(2024, 1, 2, 3, 4, 5))
    button = LogicalButton(3, debug_log=log, clock=clock)
    button.set_button_state(True)
    button.set_button_state(False)
    button.set_button_state(False)
    assert len(log.pressed_log) == 1
    assert len(log.unpressed_log) == 1
    assert log.pressed_log[0].endswith("Logical button 4 pressed\n")
    assert log.unpressed_log[0].endswith("Logical button 4 unpressed\n")


def test_disable_button_type_toggles_entry():
    button = LogicalButton(0)
    index = button.functions.index(ButtonFunction.ENCODER_INPUT_B)
    button.disable_button_type(ButtonFunction.ENCODER_INPUT_B, True)
    assert button.item_enabled[index] is False
    assert sum(button.item_enabled) == len(button.functions) - 1
    button.disable_button_type(ButtonFunction.ENCODER_INPUT_B, False)
    assert all(button.item_enabled)


def test_focus_tracked_only_when_auto_enabled():
    button = LogicalButton(5)
    button.focus_in()
    assert LogicalButton.current_focus == -1
    _set_auto_phys(True)
    button.focus_in()
    assert LogicalButton.current_focus == 5
    assert button.spin_style == FOCUS_STYLE
    button.focus_out()
    assert LogicalButton.current_focus == -1
    assert button.spin_style == ""


def test_physical_press_emits_index():
    clock = FakeClock()
    button = PhysicalButton(2, clock=clock)
    pressed = []
    button.pressed.connect(pressed.append)
    button.set_button_state(True)
    button.set_button_state(True)
    assert pressed == [2]
    assert button.label == 3


def test_physical_release_and_styles():
    clock = FakeClock()
    button = PhysicalButton(0, clock=clock)
    assert button.style(dark=True) == DARK_STYLE_OFF
    assert button.style(dark=False) == WHITE_STYLE_OFF
    button.set_button_state(True)
    assert button.style(dark=True) == STYLE_ON
    assert "rgb(0, 128, 0)" in STYLE_ON
    clock.advance_ms(5)
    button.set_button_state(False)
    assert button.current_state is True
    clock.advance_ms(100)
    button.set_button_state(False)
    assert button.style(dark=False) == WHITE_STYLE_OFF