from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    NONE = "none"


class VisibleState(Enum):
    ICON = "icon"
    DOT = "dot"
    HIDDEN = "hidden"


@dataclass
class Counters:
    received: int = 0
    transmitted: int = 0


@dataclass
class SamplerState:
    last_received_bytes: int = 0
    last_transmitted_bytes: int = 0
    last_sample_time_ms: int = 0
    autohide_threshold: int = 0
    hide_arrow: bool = False
    enabled: bool = False


@dataclass(frozen=True)
class SampleResult:
    text: str = ""
    direction: Direction = Direction.NONE
    visible: bool = False


@dataclass
class TrafficSettings:
    enabled: bool = True
    autohide_threshold: int = 0
    hide_arrow: bool = False
    interval: int = 1500
    interfaces: list[str] = field(default_factory=list)
    unit: str = "auto"
    debug: bool = False
