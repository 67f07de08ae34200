#!/usr/bin/env python3

import json
import logging
import signal
import sys
import threading
import time
from pathlib import Path

import click
from nettraffic import glyphs
from nettraffic.data.traffic import SampleResult, TrafficSettings
from nettraffic.traffic import HIDDEN
from nettraffic.util import config, conversion, log, system
from nettraffic.widget import TrafficWidget

sys.stdout.reconfigure(line_buffering=True)  # type: ignore


condition = threading.Condition()
context_settings = dict(help_option_names=["-h", "--help"])
logger = logging.getLogger("nettraffic.network-traffic")
needs_reload = False
needs_tick = False
toggle_arrow = False
toggle_screen = False


def refresh_handler(_signum: int, _frame: object | None):
    global needs_reload
    logger.info("received SIGHUP - reloading settings")
    with condition:
        needs_reload = True
        condition.notify()


def screen_handler(_signum: int, _frame: object | None):
    global toggle_screen
    logger.info("received SIGUSR1 - toggling suspend")
    with condition:
        toggle_screen = True
        condition.notify()


def terminate_handler(_signum: int, _frame: object | None):
    logger.info("received SIGTERM - exiting")
    sys.exit(0)


def arrow_handler(_signum: int, _frame: object | None):
    global toggle_arrow
    logger.info("received SIGUSR2 - toggling the direction arrow")
    with condition:
        toggle_arrow = True
        condition.notify()


def load_settings(config_file: Path, overrides: dict[str, object]) -> TrafficSettings:
    settings = config.load_settings(path=config_file)
    return config.apply_overrides(settings, **overrides)


def emit(widget: TrafficWidget, result: SampleResult | None):
    if result is None:
        return
    print(json.dumps(widget.render(result)))


def handle_events(
    widget: TrafficWidget, config_file: Path, overrides: dict[str, object]
):
    """
    Wait for the next signal or tick and act on it.
    """
    global needs_reload, needs_tick, toggle_arrow, toggle_screen

    with condition:
        while not (needs_reload or needs_tick or toggle_arrow or toggle_screen):
            _ = condition.wait()

        reload = needs_reload
        tick = needs_tick
        arrow = toggle_arrow
        screen = toggle_screen
        needs_reload = False
        needs_tick = False
        toggle_arrow = False
        toggle_screen = False

    if reload:
        try:
            settings = load_settings(config_file=config_file, overrides=overrides)
        except config.ConfigError as e:
            logger.error(f"keeping the previous settings: {e}")
        else:
            emit(widget, widget.apply_settings(settings))
            return

    if arrow:
        widget.settings.hide_arrow = not widget.settings.hide_arrow
        emit(widget, widget.apply_settings(widget.settings))
        return

    if screen:
        if widget.screen_is_on:
            widget.screen_off()
            emit(widget, HIDDEN)
        else:
            emit(widget, widget.screen_on())
        return

    if tick:
        emit(widget, widget.tick())


def worker(widget: TrafficWidget, config_file: Path, overrides: dict[str, object]):
    emit(widget, widget.attach())

    while True:
        handle_events(widget=widget, config_file=config_file, overrides=overrides)


def scheduler(widget: TrafficWidget):
    global needs_tick

    try:
        while True:
            time.sleep(widget.settings.interval / 1000)
            with condition:
                needs_tick = True
                condition.notify()
    finally:
        widget.detach()


@click.command(
    name="run",
    help="Show the network traffic rate via psutil",
    context_settings=context_settings,
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="An alternate settings file",
)
@click.option(
    "-i", "--interface", multiple=True, help="Only count this interface (repeatable)"
)
@click.option("--interval", type=int, default=None, help="The update interval (in ms)")
@click.option(
    "--threshold",
    type=int,
    default=None,
    help="Hide the module below this rate (in KB/s), 0 never hides",
)
@click.option(
    "--hide-arrow/--show-arrow",
    default=None,
    help="Suppress the direction arrow",
)
@click.option(
    "-u",
    "--unit",
    required=False,
    type=click.Choice(conversion.valid_storage_units()),
    help="The unit to use for the totals in the tooltip",
)
@click.option(
    "-t", "--test", default=False, is_flag=True, help="Print one sample and exit"
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(
    config_file: Path | None,
    interface: tuple[str, ...],
    interval: int | None,
    threshold: int | None,
    hide_arrow: bool | None,
    unit: str | None,
    test: bool,
    debug: bool,
):
    config_file = config_file or config.default_config_file()
    overrides: dict[str, object] = {
        "interfaces": list(interface),
        "interval": interval,
        "autohide_threshold": threshold,
        "hide_arrow": hide_arrow,
        "unit": unit,
        "debug": debug or None,
    }

    logfile = system.get_cache_directory() / "waybar-network-traffic.log"
    log.configure(debug=debug, logfile=logfile)

    try:
        settings = load_settings(config_file=config_file, overrides=overrides)
    except config.ConfigError as e:
        logger.error(e)
        system.error_exit(icon=glyphs.md_alert, message=str(e))
        sys.exit(1)

    if settings.debug:
        log.configure(debug=True, logfile=logfile)
    widget = TrafficWidget(settings=settings)

    if test:
        widget.attach()
        time.sleep(settings.interval / 1000)
        result = widget.tick()
        output = widget.render(result) if result else {}
        print(output.get("text", ""))
        print(output.get("class", "hidden"))
        print(output.get("tooltip", ""))
        return

    logger.info(f"entering with {settings}")

    _ = signal.signal(signal.SIGHUP, refresh_handler)
    _ = signal.signal(signal.SIGUSR1, screen_handler)
    _ = signal.signal(signal.SIGUSR2, arrow_handler)
    _ = signal.signal(signal.SIGTERM, terminate_handler)

    threading.Thread(
        target=worker, args=(widget, config_file, overrides), daemon=True
    ).start()

    scheduler(widget)


if __name__ == "__main__":
    main()
