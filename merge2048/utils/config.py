#!/usr/bin/env python3
"""
Configuration and tunable settings for merge2048.
Centralizes all setting definitions and provides functions for applying overrides.
"""

import json
import logging

logger = logging.getLogger(__name__)

# ---------------- CONFIGURATION PARAMETERS ----------------
# Board parameters
GRID_SIZE = 4                  # Playable side length (the border ring is added on top)
WIN_POWER = 11                 # 2**11 == 2048, display-only win banner
INITIAL_TILES = 2              # Tiles spawned before the first frame

# Spawn parameters
FOUR_TILE_ODDS = 4             # One spawn in FOUR_TILE_ODDS is a "4" tile

# Rendering parameters
FRAME_INTERVAL = 0.05          # Minimum seconds between two redraws

# Web interface parameters
WEB_PORT = 5000

# Input parameters
SHUTDOWN_BYTE = 0x03           # ETX, what a raw terminal sends for Ctrl-C
KEY_BINDINGS = {
    ord('w'): 'up',
    ord('a'): 'left',
    ord('s'): 'down',
    ord('d'): 'right',
}

# Settings that may be overridden, keyed by their lowercase name
_OVERRIDABLE = (
    'GRID_SIZE',
    'WIN_POWER',
    'INITIAL_TILES',
    'FOUR_TILE_ODDS',
    'FRAME_INTERVAL',
    'WEB_PORT',
)


def apply_settings(settings):
    """
    Apply settings to the global configuration.
    Takes a dictionary of setting names and values.
    Returns a list of applied settings.
    """
    if not settings:
        return []

    if settings.get('grid_size', GRID_SIZE) < 2:
        raise ValueError(f"grid_size must be at least 2, got {settings['grid_size']}")
    if settings.get('four_tile_odds', FOUR_TILE_ODDS) < 1:
        raise ValueError(f"four_tile_odds must be positive, got {settings['four_tile_odds']}")

    applied = []
    for name in _OVERRIDABLE:
        key = name.lower()
        if key in settings:
            globals()[name] = settings[key]
            applied.append(key)

    ignored = sorted(set(settings) - set(applied))
    if ignored:
        logger.warning("Ignoring unknown settings: %s", ", ".join(ignored))

    return applied


def load_settings(path):
    """Read a JSON settings file and apply it."""
    with open(path, encoding='utf-8') as f:
        settings = json.load(f)
    applied = apply_settings(settings)
    logger.debug("Applied settings from %s: %s", path, applied)
    return applied
