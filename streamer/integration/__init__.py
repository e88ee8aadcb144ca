"""
Imperative shell: escrows, factory, clocks and stream definitions
"""

from .clock import ManualClock, system_clock
from .config_loader import ConfigLoadError, StreamDefinition, load_definition, parse_definition
from .factory import StreamerFactory, StreamTerms
from .simulate import run_simulation
from .streamer import Streamer

__all__ = [
    "ManualClock",
    "system_clock",
    "ConfigLoadError",
    "StreamDefinition",
    "load_definition",
    "parse_definition",
    "StreamerFactory",
    "StreamTerms",
    "run_simulation",
    "Streamer",
]
