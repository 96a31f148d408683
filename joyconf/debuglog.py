"""Debug message log, packet counters and button press history."""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, MutableMapping, Optional

LOG_ENABLED_KEY = "OtherSettings/LogEnabled"

_LABEL_REFRESH_MS = 100
_SPEED_WINDOW_MS = 5000

logger = logging.getLogger(__name__)


def format_log_line(msg: str, now: datetime) -> str:
    """A log line stamped with ``hh:mm:ss.zzz``."""
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}: {msg}\n"


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


class DebugLog:
    """Collects debug messages and statistics about received packets."""

    def __init__(
        self,
        settings: Optional[MutableMapping] = None,
        log_dir=None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings if settings is not None else {}
        self.log_dir = Path(log_dir) if log_dir is not None else Path("log")
        self.log_enabled = _to_bool(self.settings.get(LOG_ENABLED_KEY, False))
        self.write_to_file = False
        self.packets_count = 0
        self.packets_label = 0
        self.speed_text = "0 ms"
        self.messages: list[str] = []
        self.pressed_log: list[str] = []
        self.unpressed_log: list[str] = []
        self._clock = clock
        self._now = now
        self._speed_count = 0
        self._label_started: Optional[int] = None
        self._speed_started: Optional[int] = None

    def _ms(self) -> int:
        return int(self._clock() * 1000)

    def packet_received(self) -> None:
        """Count a packet and refresh the counter and average interval."""
        now_ms = self._ms()
        self.packets_count += 1
        if self._label_started is None or now_ms - self._label_started > _LABEL_REFRESH_MS:
            self.packets_label = self.packets_count
            self._label_started = now_ms

        if self._speed_started is not None and now_ms - self._speed_started > _SPEED_WINDOW_MS:
            elapsed = now_ms - self._speed_started
            self._speed_started = now_ms
            self.speed_text = f"{elapsed / self._speed_count:.3f} ms"
            self._speed_count = 0
        elif self._speed_started is None:
            self._speed_started = now_ms

        self._speed_count += 1

    def reset_packets_count(self) -> None:
        """Zero the packet counter and clear the button logs."""
        self.packets_count = 0
        self.packets_label = 0
        self._speed_started = None
        self.speed_text = "0 ms"
        self.pressed_log.clear()
        self.unpressed_log.clear()

    def print_msg(self, msg: str) -> str:
        """Record a message, appending it to the log file when enabled."""
        now = self._now()
        line = format_log_line(msg, now)
        self.messages.append(line)
        if self.write_to_file:
            date = f"YYYY-{now:%m}-DDT{now:%H}:{now:%m}"
            path = self.log_dir / f"FJLog{date}.txt"
            try:
                with open(path, "a", encoding="utf-8") as out:
                    out.write(line)
            except OSError:
                logger.warning("cant open file")
        return line

    def logical_button_state(self, button_number: int, state: bool) -> str:
        """Record a logical button press or release."""
        stamp = format_log_line("", self._now())[:-3]
        action = "pressed" if state else "unpressed"
        line = f"{stamp}: Logical button {button_number} {action}\n"
        (self.pressed_log if state else self.unpressed_log).append(line)
        return line

    def set_write_to_file(self, checked: bool) -> None:
        """Switch writing to the log file and remember the choice."""
        self.settings[LOG_ENABLED_KEY] = checked
        self.log_enabled = checked
        self.write_to_file = checked