import pytest

from joyconf.encoders import NOT_DEFINED, Encoder, EncodersConfig, EncoderType

MAX_ENCODERS = 16


@pytest.mark.parametrize(
    "stored, expected",
    [(0, "Encoder 1x"), (1, "Encoder 2x"), (2, "Encoder 4x")],
)
def test_encoder_type_names(stored, expected):
    encoder = Encoder(0)
    encoder.read_from_config([0, stored])
    assert encoder.encoder_type.gui_name == expected


def test_encoder_number_skips_fast_slot():
    assert Encoder(0).number == 1


def test_set_input_labels_and_clear():
    encoder = Encoder(0)
    encoder.set_input_a(5)
    assert encoder.input_a == 5
    assert encoder.label_a == "Button № 5"
    encoder.set_input_a(0)
    assert encoder.input_a == 0
    assert encoder.label_a == NOT_DEFINED


def test_encoder_enabled_only_with_both_inputs():
    encoder = Encoder(2)
    encoder.set_input_a(3)
    assert encoder.enabled is False
    encoder.set_input_b(4)
    assert encoder.enabled is True
    encoder.set_input_b(0)
    assert encoder.enabled is False


def test_config_creates_all_but_fast_encoder():
    config = EncodersConfig(MAX_ENCODERS)
    assert len(config.encoders) == MAX_ENCODERS - 1


def test_inputs_kept_sorted():
    config = EncodersConfig(MAX_ENCODERS)
    for button in (9, 2, 5):
        config.encoder_input_changed(button, 0)
    assert [e.input_a for e in config.encoders[:4]] == [2, 5, 9, 0]
    assert config.input_a_count == 3


def test_remove_input_shifts_following_up():
    config = EncodersConfig(MAX_ENCODERS)
    for button in (9, 2, 5):
        config.encoder_input_changed(0, button)
    config.encoder_input_changed(0, -2)
    assert [e.input_b for e in config.encoders[:3]] == [5, 9, 0]
    assert config.input_b_count == 2


def test_both_inputs_enable_encoder():
    config = EncodersConfig(MAX_ENCODERS)
    config.encoder_input_changed(7, 8)
    first = config.encoders[0]
    assert (first.input_a, first.input_b) == (7, 8)
    assert first.enabled is True
    assert config.encoders[1].enabled is False


@pytest.mark.parametrize("buttons", [[1, 2, 3], [3, 2, 1], [10, 1, 7, 4]])
def test_add_then_remove_all_empties_list(buttons):
    config = EncodersConfig(MAX_ENCODERS)
    for button in buttons:
        config.encoder_input_changed(button, 0)
    assert [e.input_a for e in config.encoders[:len(buttons)]] == sorted(buttons)
    for button in buttons:
        config.encoder_input_changed(-button, 0)
    assert all(e.input_a == 0 for e in config.encoders)
    assert config.input_a_count == 0


def test_fast_encoder_selection():
    config = EncodersConfig(MAX_ENCODERS)
    config.fast_encoder_selected("Pin A8", True)
    assert config.fast_label_a == "Pin A8"
    assert config.fast_enabled is False
    config.fast_encoder_selected("Pin A9", True)
    assert config.fast_label_b == "Pin A9"
    assert config.fast_enabled is True
    config.fast_encoder_selected("Pin A8", False)
    assert config.fast_label_a == NOT_DEFINED
    assert config.fast_enabled is False


def test_config_round_trip():
    config = EncodersConfig(MAX_ENCODERS)
    stored = [2] + [i % 3 for i in range(MAX_ENCODERS - 1)]
    config.read_from_config(stored)
    assert config.fast_encoder_type == EncoderType.ENCODER_CONF_4X
    written = [0] * MAX_ENCODERS
    config.write_to_config(written)
    assert written == stored


def test_invalid_stored_type_keeps_previous():
    encoder = Encoder(0)
    encoder.read_from_config([0, 7])
    assert encoder.encoder_type == EncoderType.ENCODER_CONF_1X