"""Presentation state, pin persistence and payload loaders."""
from dokdash.dashboard.loader import AggregatorLoader, HttpConfigLoader
from dokdash.dashboard.pins import JsonFileStorage, MemoryStorage, PinStore
from dokdash.dashboard.view import Dashboard

__all__ = [
    "Dashboard",
    "PinStore", "MemoryStorage", "JsonFileStorage",
    "HttpConfigLoader", "AggregatorLoader",
]
