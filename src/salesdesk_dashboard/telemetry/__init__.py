from .events import TelemetryEvent, build_event
from .logger import TelemetryLogger

__all__ = ["TelemetryEvent", "TelemetryLogger", "build_event"]
