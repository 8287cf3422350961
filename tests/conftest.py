"""Pytest configuration and fixtures."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from legion_kb_rgb.models import SUPPORTED_IDENTITIES


@pytest.fixture
def mock_device_info() -> dict:
    """Create mock device info dictionary for the 2021 keyboard (hidapi format)."""
    identity = SUPPORTED_IDENTITIES[0]
    return {
        "vendor_id": identity.vendor_id,
        "product_id": identity.product_id,
        "usage_page": identity.usage_page,
        "usage": identity.usage,
        "interface_number": 0,
        "path": b"/dev/hidraw3",
        "product_string": "ITE Device(8295)",
    }


@pytest.fixture
def other_device_info() -> dict:
    """Create mock device info for an unrelated interface from the same vendor."""
    return {
        "vendor_id": 0x048D,
        "product_id": 0x1234,
        "usage_page": 0x0001,
        "usage": 0x0006,
        "interface_number": 1,
        "path": b"/dev/hidraw1",
        "product_string": "Other",
    }


@pytest.fixture
def mock_hid_device() -> MagicMock:
    """Create a mock hid.device object."""
    device = MagicMock()
    device.open_path = MagicMock()
    device.close = MagicMock()
    device.send_feature_report = MagicMock(return_value=33)  # Any positive = success
    return device


@pytest.fixture
def decode_payload() -> Callable[[bytes], tuple[int, int, bytes]]:
    """Return a decoder reading speed, brightness and colors from a report."""

    def decode(payload: bytes) -> tuple[int, int, bytes]:
        return payload[3], payload[4], bytes(payload[5:17])

    return decode
