"""Biometric sensor kinds reported by the device."""

from enum import Enum


class BiometricType(str, Enum):
    """Biometric sensor kind.

    NONE is reported when the device has no usable sensor.
    """

    TOUCH_ID = "touch_id"
    FACE_ID = "face_id"
    FINGERPRINT = "fingerprint"
    NONE = "none"
