"""
Custom exception hierarchy for BatLights.

## Exception Hierarchy

```
BatLightsError (base)
├── AcquisitionError
│   ├── AdapterNotFoundError
│   ├── PeripheralNotFoundError
│   ├── CharacteristicNotFoundError
│   └── PeripheralConnectionError
├── TransmissionError
│   ├── FrameWriteError
│   └── PipelineClosedError
├── TeardownError
└── ConfigurationError
    ├── ConfigFileInvalidError
    ├── ConfigValidationError
    └── DeviceAddressMissingError
```

Acquisition errors abort the run before any frame is sent. Transmission
and teardown errors are contained by the dispatch pipeline and only logged.

All custom exceptions inherit from `BatLightsError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.
"""

from .acquisition import (
    AcquisitionError,
    AdapterNotFoundError,
    CharacteristicNotFoundError,
    PeripheralConnectionError,
    PeripheralNotFoundError,
)
from .base import BatLightsError
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    DeviceAddressMissingError,
)
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_ble_error,
    wrap_pydantic_error,
)
from .transmission import (
    FrameWriteError,
    PipelineClosedError,
    TeardownError,
    TransmissionError,
)

__all__ = [
    # Acquisition
    "AcquisitionError",
    "AdapterNotFoundError",
    "CharacteristicNotFoundError",
    "PeripheralConnectionError",
    "PeripheralNotFoundError",
    # Base
    "BatLightsError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DeviceAddressMissingError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "handle_errors",
    "wrap_ble_error",
    "wrap_pydantic_error",
    # Transmission
    "FrameWriteError",
    "PipelineClosedError",
    "TeardownError",
    "TransmissionError",
]
