"""Encoder inputs: the fast hardware encoder and encoders built from logical buttons."""

from enum import IntEnum
from typing import Callable, MutableSequence, Optional, Sequence

NOT_DEFINED = "Not defined"
FAST_ENCODER_COUNT = 1
_BUTTON_TEMPLATE = "Button № {}"


class EncoderType(IntEnum):
    """Counting mode of an encoder."""

    ENCODER_CONF_1X = 0
    ENCODER_CONF_2X = 1
    ENCODER_CONF_4X = 2

    @property
    def gui_name(self) -> str:
        return f"Encoder {2 ** int(self)}x"


# The fast encoder cannot count in 1x mode.
FAST_ENCODER_TYPES: tuple = (EncoderType.ENCODER_CONF_2X, EncoderType.ENCODER_CONF_4X)


def _encoder_type(value) -> Optional[EncoderType]:
    try:
        return EncoderType(value)
    except ValueError:
        return None


class Encoder:
    """An encoder fed by two logical buttons.

    Index 0 of the device encoder table belongs to the fast encoder, so the
    encoder created with ``encoders_number`` uses slot ``encoders_number + 1``.
    """

    def __init__(self, encoders_number: int):
        self.number = encoders_number + 1
        self.input_a = 0
        self.input_b = 0
        self.label_a = NOT_DEFINED
        self.label_b = NOT_DEFINED
        self.encoder_type = EncoderType.ENCODER_CONF_1X
        self.enabled = False

    def _update_enabled(self) -> None:
        self.enabled = self.input_a > 0 and self.input_b > 0

    def set_input_a(self, input_a: int) -> None:
        """Use logical button ``input_a`` (one-based) as input A; 0 clears it."""
        if input_a != 0:
            self.input_a = input_a
            self.label_a = _BUTTON_TEMPLATE.format(input_a)
        else:
            self.input_a = 0
            self.label_a = NOT_DEFINED
        self._update_enabled()

    def set_input_b(self, input_b: int) -> None:
        """Use logical button ``input_b`` (one-based) as input B; 0 clears it."""
        if input_b != 0:
            self.input_b = input_b
            self.label_b = _BUTTON_TEMPLATE.format(input_b)
        else:
            self.input_b = 0
            self.label_b = NOT_DEFINED
        self._update_enabled()

    def read_from_config(self, encoders: Sequence[int]) -> None:
        chosen = _encoder_type(encoders[self.number])
        if chosen is not None:
            self.encoder_type = chosen

    def write_to_config(self, encoders: MutableSequence[int]) -> None:
        encoders[self.number] = self.encoder_type


class EncodersConfig:
    """The fast encoder and the list of button encoders, kept in input order."""

    def __init__(self, max_encoders: int):
        self.encoders = [Encoder(i) for i in range(max_encoders - FAST_ENCODER_COUNT)]
        self.input_a_count = 0
        self.input_b_count = 0
        self.fast_encoder_type = EncoderType.ENCODER_CONF_2X
        self.fast_label_a = NOT_DEFINED
        self.fast_label_b = NOT_DEFINED
        self.fast_input_a = 0
        self.fast_input_b = 0
        self.fast_enabled = False

    def fast_encoder_selected(self, pin_gui_name: str, is_selected: bool) -> None:
        """Record a pin chosen for, or released from, the fast encoder."""
        if is_selected:
            if self.fast_label_a == NOT_DEFINED:
                self.fast_label_a = pin_gui_name
                self.fast_input_a += 1
            else:
                self.fast_label_b = pin_gui_name
                self.fast_input_b += 1
        elif self.fast_label_a == pin_gui_name:
            self.fast_label_a = NOT_DEFINED
            self.fast_input_a -= 1
        else:
            self.fast_label_b = NOT_DEFINED
            self.fast_input_b -= 1
        self.fast_enabled = self.fast_input_a > 0 and self.fast_input_b > 0

    def _shift_in(self, value: int, count: int,
                  get: Callable[[Encoder], int],
                  put: Callable[[Encoder, int], None]) -> int:
        if value > 0:
            count += 1
            for encoder in self.encoders[:max(count, 0)]:
                current = get(encoder)
                if current == 0 or value < current:
                    put(encoder, value)
                    if current != 0:
                        value = current
        elif value < 0:
            value = -value
            active = self.encoders[:max(count, 0)]
            for i, encoder in enumerate(active):
                if get(encoder) == value:
                    for j in range(i, len(active)):
                        following = get(self.encoders[j + 1]) if j + 1 < len(self.encoders) else 0
                        put(self.encoders[j], following)
                    break
            count -= 1
        return count

    def encoder_input_changed(self, encoder_a: int, encoder_b: int) -> None:
        """Add (positive) or remove (negative) a logical button as an encoder input.

        Inputs are kept in ascending order across the encoder list.
        """
        self.input_a_count = self._shift_in(
            encoder_a, self.input_a_count, lambda e: e.input_a, Encoder.set_input_a)
        self.input_b_count = self._shift_in(
            encoder_b, self.input_b_count, lambda e: e.input_b, Encoder.set_input_b)

    def read_from_config(self, encoders: Sequence[int]) -> None:
        chosen = _encoder_type(encoders[0])
        if chosen is not None:
            self.fast_encoder_type = chosen
        for encoder in self.encoders:
            encoder.read_from_config(encoders)

    def write_to_config(self, encoders: MutableSequence[int]) -> None:
        encoders[0] = self.fast_encoder_type
        for encoder in self.encoders:
            encoder.write_to_config(encoders)