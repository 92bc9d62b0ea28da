"""Hook utilities that wrap lint/format commands around file-edit events."""

__version__ = "0.1.0"
