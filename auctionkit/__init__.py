"""Thread-based auction, disk lock, message-passing tasks, synchronization primitives and containers."""

__version__ = "0.1.0"
__all__ = ["auction", "disk", "sync", "nsystem", "pss", "kernel_queues", "demo"]