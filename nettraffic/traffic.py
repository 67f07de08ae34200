import logging
import sys

from nettraffic.data.traffic import Direction, SampleResult, SamplerState
from nettraffic.util import conversion

INTERVAL = 1500  # ms
DEBOUNCE_FACTOR = 0.95

# Stands in for a zero time delta so the displayed rate is minimal
UNBOUNDED_TIME_DELTA = sys.maxsize

HIDDEN = SampleResult(text="", direction=Direction.NONE, visible=False)

logger = logging.getLogger(__name__)


class TrafficRateSampler:
    """
    Turns cumulative rx/tx byte counters into a display rate.

    The sampler never schedules itself. The host calls sample() every
    interval milliseconds, or immediately with forced=True after a
    settings, connectivity or visibility change.
    """

    def __init__(self, interval: int = INTERVAL):
        self.interval = interval
        self.state = SamplerState()
        self.last_result = HIDDEN

    def configure(self, threshold: int, hide_arrow: bool, enabled: bool):
        self.state.autohide_threshold = threshold
        self.state.hide_arrow = hide_arrow
        self.state.enabled = enabled

    def reset(self, now_ms: int, rx_total: int, tx_total: int):
        self.state.last_received_bytes = rx_total
        self.state.last_transmitted_bytes = tx_total
        self.state.last_sample_time_ms = now_ms

    def sample(
        self,
        now_ms: int,
        rx_total: int,
        tx_total: int,
        connectivity_available: bool,
        forced: bool = False,
    ) -> SampleResult:
        state = self.state
        time_delta = now_ms - state.last_sample_time_ms

        if time_delta < self.interval * DEBOUNCE_FACTOR and not forced:
            return self.last_result

        if time_delta < 1:
            time_delta = UNBOUNDED_TIME_DELTA

        rx_delta = max(0, rx_total - state.last_received_bytes)
        tx_delta = max(0, tx_total - state.last_transmitted_bytes)
        rx_rate = conversion.rate_kbps(rx_delta, time_delta)
        tx_rate = conversion.rate_kbps(tx_delta, time_delta)

        if (
            not state.enabled
            or not connectivity_available
            or (
                rx_rate < state.autohide_threshold
                and tx_rate < state.autohide_threshold
            )
        ):
            result = HIDDEN
        elif tx_rate > rx_rate:
            result = SampleResult(
                text=conversion.format_rate(tx_delta, time_delta),
                direction=Direction.NONE if state.hide_arrow else Direction.UP,
                visible=True,
            )
        else:
            result = SampleResult(
                text=conversion.format_rate(rx_delta, time_delta),
                direction=Direction.NONE if state.hide_arrow else Direction.DOWN,
                visible=True,
            )

        logger.debug(
            f"rx={rx_rate}KB/s tx={tx_rate}KB/s forced={forced} -> {result}"
        )

        state.last_received_bytes = rx_total
        state.last_transmitted_bytes = tx_total
        state.last_sample_time_ms = max(now_ms, state.last_sample_time_ms)
        self.last_result = result

        return result
