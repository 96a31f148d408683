import pytest

from joyconf.pins import (
    PIN_LIST,
    PIN_TYPES,
    PINS_COUNT,
    PinClass,
    PinRole,
    PinSelector,
    pin_types_for,
)


def _type_index(role):
    return next(i for i, info in enumerate(PIN_TYPES) if info.role == role)


def _roles(pin_number):
    return {PIN_TYPES[i].role for i in pin_types_for(pin_number)}


def _pins_offering(role):
    return {n for n in range(1, PINS_COUNT + 1) if role in _roles(n)}


def test_pin_list_names_come_from_table():
    first = PinSelector(PinClass.PA_0)
    assert first.object_name == "A0"
    assert PIN_LIST[0].gui_name == "Pin A0"
    assert PinSelector(PinClass.PB_6).object_name == "B6"
    assert [PinSelector(n).object_name for n in range(1, PINS_COUNT + 1)] == [
        info.object_name for info in PIN_LIST
    ]


@pytest.mark.parametrize("pin_number", range(1, PINS_COUNT + 1))
def test_every_pin_starts_with_not_used(pin_number):
    indices = pin_types_for(pin_number)
    assert indices[0] == _type_index(PinRole.NOT_USED)
    assert PinRole.BUTTON_GND in _roles(pin_number)


@pytest.mark.parametrize("pin_number", [0, PINS_COUNT + 1, -3])
def test_invalid_pin_rejected(pin_number):
    with pytest.raises(ValueError):
        pin_types_for(pin_number)
    with pytest.raises(ValueError):
        PinSelector(pin_number)


def test_analog_axis_only_on_analog_pins():
    expected = {info.pin for info in PIN_LIST if PinClass.ANALOG_IN in info.classes}
    assert _pins_offering(PinRole.AXIS_ANALOG) == expected


def test_led_pwm_pins():
    assert _pins_offering(PinRole.LED_PWM) == {
        PinClass.PA_8, PinClass.PB_0, PinClass.PB_1, PinClass.PB_4
    }


def test_fast_encoder_and_generator_pins():
    assert _pins_offering(PinRole.FAST_ENCODER) == {PinClass.PA_8, PinClass.PA_9}
    assert _pins_offering(PinRole.TLE5011_GEN) == {PinClass.PB_6}


def test_spi_and_i2c_pins():
    assert _pins_offering(PinRole.SPI_SCK) == {PinClass.PB_3}
    assert _pins_offering(PinRole.SPI_MOSI) == {PinClass.PB_5}
    assert _pins_offering(PinRole.SPI_MISO) == {PinClass.PB_4}
    assert _pins_offering(PinRole.I2C_SCL) == {PinClass.PB_10}
    assert _pins_offering(PinRole.I2C_SDA) == {PinClass.PB_11}


def test_chip_selects_excepted_on_spi_pins():
    sck_roles = _roles(PinClass.PB_3)
    assert PinRole.TLE5011_CS not in sck_roles
    assert PinRole.MCP3201_CS not in sck_roles
    assert PinRole.TLE5011_CS in _roles(PinClass.PB_12)


def test_selector_lists_match_table():
    selector = PinSelector(PinClass.PA_0)
    assert selector.object_name == "A0"
    assert selector.type_indices == pin_types_for(PinClass.PA_0)
    assert selector.enum_index == [PIN_TYPES[i].role for i in selector.type_indices]
    assert selector.items[0] == "Not Used"
    assert selector.current_dev_enum == PinRole.NOT_USED


def test_select_emits_change_and_updates_state():
    selector = PinSelector(PinClass.PA_0)
    events = []
    selector.on_current_index_changed(lambda *args: events.append(args))
    axis = selector.enum_index.index(PinRole.AXIS_ANALOG)
    selector.select(axis)
    assert events == [(PinRole.AXIS_ANALOG, PinRole.NOT_USED, PinClass.PA_0, "Axis Analog")]
    assert selector.current_dev_enum == PinRole.AXIS_ANALOG
    assert selector.text_color == PIN_TYPES[_type_index(PinRole.AXIS_ANALOG)].color

    selector.select(0)
    assert events[-1] == (PinRole.NOT_USED, PinRole.AXIS_ANALOG, PinClass.PA_0, "Not Used")
    assert selector.text_color is None


def test_selecting_same_index_emits_nothing():
    selector = PinSelector(PinClass.PB_12)
    events = []
    selector.on_current_index_changed(lambda *args: events.append(args))
    selector.select(0)
    assert events == []


def test_select_out_of_range():
    selector = PinSelector(PinClass.PB_12)
    with pytest.raises(IndexError):
        selector.select(len(selector.type_indices))


def test_config_round_trip():
    pins = [0] * PINS_COUNT
    selector = PinSelector(PinClass.PB_0)
    selector.select(selector.enum_index.index(PinRole.LED_PWM))
    selector.write_to_config(pins)
    assert pins[PinClass.PB_0 - 1] == PinRole.LED_PWM

    other = PinSelector(PinClass.PB_0)
    other.read_from_config(pins)
    assert other.current_dev_enum == PinRole.LED_PWM
    assert other.current_index == selector.current_index


def test_read_unknown_value_keeps_selection():
    pins = [PinRole.AXIS_ANALOG] * PINS_COUNT
    selector = PinSelector(PinClass.PB_12)
    selector.read_from_config(pins)
    assert selector.current_index == 0
    assert selector.current_dev_enum == PinRole.NOT_USED


def test_i2c_interaction_added_and_released():
    selector = PinSelector(PinClass.PB_10)
    events = []
    selector.on_interaction(lambda *args: events.append(args))
    scl = _type_index(PinRole.I2C_SCL)
    sda = _type_index(PinRole.I2C_SDA)

    selector.select(selector.enum_index.index(PinRole.I2C_SCL))
    assert events == [(sda, scl, PinClass.PB_10)]

    selector.select(0)
    assert events[1:] == [(PinRole.NOT_USED, sda, PinClass.PB_10)]


def test_set_index_interaction_locks_and_releases():
    selector = PinSelector(PinClass.PB_11)
    sda_pos = selector.enum_index.index(PinRole.I2C_SDA)
    sender = _type_index(PinRole.I2C_SCL)

    selector.set_index_interaction(sda_pos, sender)
    assert selector.is_interacts
    assert not selector.enabled
    assert selector.current_dev_enum == PinRole.I2C_SDA
    assert selector.text_color == PIN_TYPES[sender].color

    selector.set_index_interaction(0, sender)
    assert not selector.is_interacts
    assert selector.enabled
    assert selector.text_color is None
    assert selector.current_dev_enum == PinRole.NOT_USED


def test_generator_pin_stays_enabled_when_forced():
    selector = PinSelector(PinClass.PB_6)
    gen_pos = selector.enum_index.index(PinRole.TLE5011_GEN)
    selector.set_index_interaction(gen_pos, _type_index(PinRole.TLE5011_CS))
    assert selector.is_interacts
    assert selector.enabled
    assert selector.current_dev_enum == PinRole.TLE5011_GEN


def test_reset_pin_releases_lock():
    selector = PinSelector(PinClass.PB_11)
    sda_pos = selector.enum_index.index(PinRole.I2C_SDA)
    selector.set_index_interaction(sda_pos, _type_index(PinRole.I2C_SCL))
    selector.reset_pin()
    assert selector.current_index == 0
    assert selector.enabled
    assert not selector.is_interacts


def test_set_index_status():
    selector = PinSelector(PinClass.PA_8)
    pwm = selector.enum_index.index(PinRole.LED_PWM)
    selector.set_index_status(pwm, False)
    assert selector.item_enabled[pwm] is False
    selector.set_index_status(pwm, True)
    assert all(selector.item_enabled)


def test_interact_count_is_stored():
    selector = PinSelector(PinClass.PB_5)
    selector.interact_count += PinClass.PB_3
    assert selector.interact_count == PinClass.PB_3