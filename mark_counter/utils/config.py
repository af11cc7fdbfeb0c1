"""
Runtime configuration.

Defaults live here; any entry can be overridden from the environment,
see :func:`mark_counter.utils.env.load_cfg_from_env`.
"""

import os
from typing import Dict, Optional

from easydict import EasyDict as edict

from .env import load_cfg_from_env

DEFAULT_COLORS = [
    ["red", "Red"],
    ["yellow", "Yellow"],
    ["lime", "Green"],
    ["cyan", "Cyan"],
    ["magenta", "Magenta"],
    ["white", "White"],
    ["black", "Black"],
]


def default_config() -> edict:
    cfg = edict()

    cfg.zoom = edict()
    cfg.zoom.initial = 1.0
    cfg.zoom.step = 0.1
    cfg.zoom.minimum = 0.2

    cfg.marks = edict()
    cfg.marks.radius = 7
    cfg.marks.border = 2

    cfg.report = edict()
    cfg.report.filename = "marks_report.csv"
    cfg.report.format = "general"
    cfg.report.escape = False

    cfg.colors = [list(pair) for pair in DEFAULT_COLORS]
    return cfg


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Build the default configuration and apply environment overrides."""
    if env is None:
        env = dict(os.environ)
    return load_cfg_from_env(default_config(), env)
