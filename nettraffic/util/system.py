import json
import os
from pathlib import Path

from nettraffic import glyphs


def error_exit(icon: str, message: str):
    print(
        json.dumps(
            {
                "text": f"{icon}{glyphs.icon_spacer}{message}",
                "class": "error",
                "tooltip": message,
            }
        )
    )


def get_cache_directory() -> Path:
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "waybar"
    else:
        cache_dir = Path.home() / ".cache/waybar"

    if not cache_dir.exists():
        try:
            cache_dir.mkdir(mode=0o700, parents=True)
        except OSError:
            error_exit(icon=glyphs.md_alert, message=f'Couldn\'t create "{cache_dir}"')

    return cache_dir


def get_config_directory() -> Path:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "waybar"
    return Path.home() / ".config" / "waybar"
