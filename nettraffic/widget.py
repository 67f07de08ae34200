import logging
from collections import OrderedDict
from collections.abc import Callable

from nettraffic import glyphs
from nettraffic.data.traffic import (
    Counters,
    Direction,
    SampleResult,
    TrafficSettings,
    VisibleState,
)
from nettraffic.traffic import HIDDEN, TrafficRateSampler
from nettraffic.util import conversion, network, wtime

logger = logging.getLogger(__name__)

ARROWS = {
    Direction.UP: glyphs.cod_arrow_small_up,
    Direction.DOWN: glyphs.cod_arrow_small_down,
    Direction.NONE: "",
}

CLASSES = {
    Direction.UP: "upload",
    Direction.DOWN: "download",
    Direction.NONE: "traffic",
}


class TrafficWidget:
    """
    Host side of the traffic sampler: tracks whether the module is attached,
    whether the screen is on and what the bar allows us to show, feeds the
    sampler from the OS counters and turns results into waybar records.

    attach(), detach(), screen_on(), screen_off() and set_visible_state() are
    the hooks a host calls on its own lifecycle events. The waybar script
    attaches on start, detaches on exit and maps screen on/off to SIGUSR1;
    waybar has no slot visibility of its own, so set_visible_state() is left
    to hosts that do.
    """

    def __init__(
        self,
        settings: TrafficSettings,
        counters: Callable[[list[str] | None], Counters] | None = None,
        connectivity: Callable[[list[str] | None], bool] | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.settings = settings
        self.sampler = TrafficRateSampler(interval=settings.interval)
        self._counters = counters or network.get_counters
        self._connectivity = connectivity or network.connectivity_available
        self._clock = clock or wtime.elapsed_realtime_ms

        self.attached = False
        self.connected: bool | None = None
        self.screen_is_on = True
        self.system_icon_visible = True
        self.traffic_visible = False
        self.visible_state: VisibleState | None = None
        self.last_counters = Counters()
        self.updated: str | None = None
        self._configure()

    @property
    def scheduling(self) -> bool:
        return self.attached and self.settings.enabled and self.screen_is_on

    @property
    def visible(self) -> bool:
        return (
            self.settings.enabled and self.traffic_visible and self.system_icon_visible
        )

    def _configure(self):
        self.sampler.interval = self.settings.interval
        self.sampler.configure(
            threshold=self.settings.autohide_threshold,
            hide_arrow=self.settings.hide_arrow,
            enabled=self.settings.enabled,
        )

    def _sample(self, forced: bool, connected: bool | None = None) -> SampleResult:
        interfaces = self.settings.interfaces or None
        if connected is None:
            connected = self._connectivity(interfaces)
        counters = self._counters(interfaces)
        result = self.sampler.sample(
            now_ms=self._clock(),
            rx_total=counters.received,
            tx_total=counters.transmitted,
            connectivity_available=connected,
            forced=forced,
        )
        self.connected = connected
        self.last_counters = counters
        self.traffic_visible = result.visible
        self.updated = wtime.get_human_timestamp()
        return result

    def attach(self) -> SampleResult:
        if not self.attached:
            logger.info("attached")
            self.attached = True
        return self.update_settings()

    def detach(self):
        if self.attached:
            logger.info("detached")
            self.attached = False

    def apply_settings(self, settings: TrafficSettings) -> SampleResult:
        logger.info(
            f"enabled={settings.enabled} threshold={settings.autohide_threshold}KB/s hide_arrow={settings.hide_arrow}"
        )
        self.settings = settings
        self._configure()
        return self.update_settings()

    def update_settings(self) -> SampleResult:
        """
        Re-baseline the counters and force one immediate sample when active,
        otherwise report the hidden result so the bar drops the last rate.
        """
        if not (self.settings.enabled and self.attached):
            self.traffic_visible = False
            return HIDDEN

        interfaces = self.settings.interfaces or None
        counters = self._counters(interfaces)
        self.sampler.reset(
            now_ms=self._clock(),
            rx_total=counters.received,
            tx_total=counters.transmitted,
        )
        return self._sample(forced=True)

    def screen_on(self) -> SampleResult:
        logger.debug("screen on, resuming")
        self.screen_is_on = True
        return self.update_settings()

    def screen_off(self):
        logger.debug("screen off, suspending")
        self.screen_is_on = False

    def connectivity_changed(self) -> SampleResult | None:
        if self.screen_is_on:
            return self.update_settings()
        return None

    def set_visible_state(self, state: VisibleState):
        if state == self.visible_state:
            return
        self.visible_state = state
        self.system_icon_visible = state == VisibleState.ICON

    def tick(self) -> SampleResult | None:
        """
        One periodic sample; a change in connectivity since the last sample
        is handled like a connectivity event and forces a fresh baseline.
        """
        if not self.scheduling:
            return None

        connected = self._connectivity(self.settings.interfaces or None)
        if self.connected is not None and connected != self.connected:
            logger.info(f"connectivity changed, connected={connected}")
            self.connected = connected
            return self.connectivity_changed()

        return self._sample(forced=False, connected=connected)

    def generate_tooltip(self) -> str:
        tooltip: list[str] = []
        tooltip_od: OrderedDict[str, str] = OrderedDict()
        interfaces = self.settings.interfaces or None
        connected = self._connectivity(interfaces)
        icon = network.get_icon(interfaces=interfaces, connected=connected)

        tooltip.append(f"{icon}{glyphs.icon_spacer}Network Traffic")
        tooltip_od["Interfaces"] = ", ".join(self.settings.interfaces) or "all"
        tooltip_od["Received"] = conversion.byte_converter(
            number=self.last_counters.received, unit=self.settings.unit
        )
        tooltip_od["Transmitted"] = conversion.byte_converter(
            number=self.last_counters.transmitted, unit=self.settings.unit
        )
        if self.settings.autohide_threshold > 0:
            tooltip_od["Auto-hide"] = f"below {self.settings.autohide_threshold}K/s"

        max_key_length = max(len(key) for key in tooltip_od.keys())
        for key, value in tooltip_od.items():
            tooltip.append(f"{key:{max_key_length}} : {value}")

        if self.updated:
            tooltip.append("")
            tooltip.append(f"Last updated {self.updated}")

        return "\n".join(tooltip)

    def render(self, result: SampleResult) -> dict[str, str]:
        if not (self.visible and result.visible):
            return {"text": "", "class": "hidden", "tooltip": ""}

        arrow = ARROWS[result.direction]
        text = f"{result.text} {arrow}" if arrow else result.text
        return {
            "text": text,
            "class": CLASSES[result.direction],
            "tooltip": self.generate_tooltip(),
        }
