# joyconf

A toolkit-independent model of a configurator for a USB joystick controller
board. It holds the state and the rules behind each configuration panel, so a
front end only has to display that state and pass user actions on to it.
It has no dependencies beyond the Python standard library.

## Modules

- `joyconf.pins`: the board's pin table (`PIN_LIST` of `PinInfo`), the pin
  functions (`PIN_TYPES` of `PinTypeInfo`, roles in `PinRole`) and
  `pin_types_for(pin_number)`, which lists the functions a pin offers.
  `PinSelector` holds the function chosen for one pin, and forces or releases
  linked pins (SPI clock/data lines for sensor chip selects, I2C SCL/SDA).
- `joyconf.pinconfig`: `PinConfig` joins all 30 pin selectors. It limits the
  number of shift register latch, data and clock pins, blocks PWM on PA8 while
  an SPI pin is in use, remembers the chosen board in a settings mapping and
  keeps a `ConfigSummary` of axis sources, buttons and LEDs, signalling when
  the button or LED total passes the device maximum.
- `joyconf.buttons`: `LogicalButton` (function, physical source, shift,
  delay and press timers, focus used for auto-assignment) and
  `PhysicalButton` (press indicator and its style sheet). Presses stay visible
  for at least 30 ms.
- `joyconf.buttonconfig`: `ButtonConfig` with all 128 logical buttons, the
  physical button indicators, shift buttons and button timers. It reports
  encoder inputs, limits Encoder A/B functions to 15 buttons each, and reads
  button and shift states from the device's bit fields. `ButtonsDeviceConfig`
  holds the device-side values.
- `joyconf.encoders`: `EncodersConfig` keeps button encoder inputs in
  ascending order across its `Encoder` list and tracks the two pins of the
  fast encoder.
- `joyconf.shiftregs`: `ShiftRegistersConfig` shares latch, clock and data
  pins out between `ShiftRegister` chains and totals the buttons they give.
- `joyconf.leds`: `Led`, `LedConfig`, `LedSettings` and `PwmSettings` for the
  LEDs and the four PWM channels.
- `joyconf.debuglog`: `DebugLog` for timestamped messages, optional appending
  to a log file, packet counters and the logical button press history.
- `joyconf.switch`: `SwitchButton`, the light/dark theme switch.
- `joyconf.folders`: `cfg_files_list` and `FolderSelection` for a folder of
  `.cfg` files.
- `joyconf.geometry`: label placement and aspect-ratio arithmetic.
- `joyconf.version`: `version_string` and `APP_VERSION`.

Changes between panels are passed through small `Signal` objects
(`connect`, `emit`) or `on_...` callback registration.

## Example

```python
from joyconf.folders import cfg_files_list
from joyconf.pinconfig import PinConfig
from joyconf.version import version_string

print(version_string(1, 7, 1, 5))          # "1.7.1b5"
print(cfg_files_list("/path/to/configs"))  # config names without ".cfg"

pins = PinConfig(max_leds=24)
pins.summary.total_buttons_value_changed.connect(print)
pa0 = pins.selectors[0]
print(pa0.items[:3])       # ['Not Used', 'Button Gnd', 'Button Vcc']
pa0.select(1)              # PA0 becomes a single button; prints 1
print(pins.summary.total_buttons)  # 1

table = [0] * 30
pins.write_to_config(table)        # device pin table, one role per pin
```

## What it does not do

The package is a model only. It draws no windows or widgets, does not talk
to the controller over USB, and does not encode or decode the device's
configuration reports or `.cfg` files: the `read_from_config` and
`write_to_config` methods work on plain Python lists and dataclasses that a
caller fills and stores. There is no command-line program.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```