"""Configuration model for a USB joystick controller board: pins, buttons, encoders, shift registers and LEDs."""

__version__ = "1.7.1"