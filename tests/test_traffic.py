import pytest

from nettraffic.data.traffic import Direction, SampleResult
from nettraffic.traffic import HIDDEN, INTERVAL, TrafficRateSampler
from nettraffic.util.conversion import KB, MB


@pytest.fixture
def sampler() -> TrafficRateSampler:
    sampler = TrafficRateSampler(interval=1000)
    sampler.configure(threshold=0, hide_arrow=False, enabled=True)
    sampler.reset(now_ms=0, rx_total=0, tx_total=0)
    return sampler


def test_hidden_before_first_sample():
    assert TrafficRateSampler().last_result == HIDDEN


def test_download_is_shown(sampler):
    result = sampler.sample(1000, 2 * MB, 0, connectivity_available=True)
    assert result == SampleResult(text="2.00M/s", direction=Direction.DOWN, visible=True)


def test_upload_wins_when_faster(sampler):
    result = sampler.sample(1000, 0, 150_000, connectivity_available=True)
    assert result.text == "146K/s"
    assert result.direction == Direction.UP
    assert result.visible


def test_equal_rates_show_download(sampler):
    result = sampler.sample(1500, 3 * KB, 3 * KB, connectivity_available=True)
    assert result.direction == Direction.DOWN
    assert result.text == "2.00K/s"


def test_hide_arrow_drops_direction(sampler):
    sampler.configure(threshold=0, hide_arrow=True, enabled=True)
    result = sampler.sample(1000, 0, 150_000, connectivity_available=True)
    assert result.direction == Direction.NONE
    assert result.visible


def test_no_connectivity_hides_any_rate(sampler):
    result = sampler.sample(1000, 500 * MB, 500 * MB, connectivity_available=False)
    assert result == HIDDEN


def test_disabled_hides(sampler):
    sampler.configure(threshold=0, hide_arrow=False, enabled=False)
    assert sampler.sample(1000, 2 * MB, 0, connectivity_available=True) == HIDDEN


def test_low_traffic_below_threshold_is_hidden(sampler):
    sampler.configure(threshold=1, hide_arrow=False, enabled=True)
    result = sampler.sample(1000, 500, 500, connectivity_available=True)
    assert result.text == ""
    assert not result.visible
    assert result.direction == Direction.NONE


@pytest.mark.parametrize("received, visible", [(10 * KB, True), (10 * KB - 1, False)])
def test_threshold_boundary(sampler, received, visible):
    sampler.configure(threshold=10, hide_arrow=False, enabled=True)
    result = sampler.sample(1000, received, 0, connectivity_available=True)
    assert result.visible is visible


def test_debounce_returns_previous_result(sampler):
    first = sampler.sample(1500, 2 * MB, 0, connectivity_available=True)
    second = sampler.sample(2000, 900 * MB, 0, connectivity_available=True)
    assert second == first
    assert sampler.state.last_sample_time_ms == 1500
    assert sampler.state.last_received_bytes == 2 * MB


def test_debounce_window_edge_is_sampled(sampler):
    edge = int(sampler.interval * 0.95)
    result = sampler.sample(edge, 2 * MB, 0, connectivity_available=True)
    assert result.visible
    assert sampler.state.last_sample_time_ms == edge


def test_forced_sample_skips_debounce(sampler):
    result = sampler.sample(500, 2 * MB, 0, connectivity_available=True, forced=True)
    assert result.text == "4.00M/s"


def test_zero_time_delta_shows_minimal_rate(sampler):
    sampler.reset(now_ms=1000, rx_total=0, tx_total=0)
    result = sampler.sample(1000, 10**9, 0, connectivity_available=True, forced=True)
    assert result.text == "0.00K/s"
    assert result.visible


def test_counter_reset_is_clamped(sampler):
    sampler.reset(now_ms=0, rx_total=5000, tx_total=5000)
    result = sampler.sample(1500, 100, 100, connectivity_available=True)
    assert result.text == "0.00K/s"
    assert "-" not in result.text

    # the lower counters become the new baseline
    result = sampler.sample(3000, 100 + 3 * MB, 100, connectivity_available=True)
    assert result.text == "2.00M/s"


def test_timestamp_never_moves_backwards(sampler):
    sampler.sample(2000, 0, 0, connectivity_available=True)
    sampler.sample(1500, 0, 0, connectivity_available=True, forced=True)
    assert sampler.state.last_sample_time_ms == 2000


def test_configure_does_not_touch_counters(sampler):
    sampler.sample(1500, 1234, 4321, connectivity_available=True)
    sampler.configure(threshold=5, hide_arrow=True, enabled=True)
    assert sampler.state.last_received_bytes == 1234
    assert sampler.state.last_transmitted_bytes == 4321
    assert sampler.state.autohide_threshold == 5
    assert sampler.state.hide_arrow


def test_default_interval():
    assert TrafficRateSampler().interval == INTERVAL == 1500
