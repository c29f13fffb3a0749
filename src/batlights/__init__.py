"""BatLights: controller for LEDDMX-00 Bluetooth LED strips."""

__version__ = "0.1.0"
