from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PHONE_BREAKPOINT = 600


class DeviceClass(str, Enum):
    PHONE = "phone"
    NOT_PHONE = "not_phone"


@dataclass(frozen=True)
class WindowSize:
    width: int
    height: int


def classify(size: WindowSize) -> DeviceClass:
    # No hysteresis: the class may flip on every resize across the breakpoint.
    if size.width < PHONE_BREAKPOINT:
        return DeviceClass.PHONE
    return DeviceClass.NOT_PHONE
