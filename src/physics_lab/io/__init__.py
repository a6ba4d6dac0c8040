# MIT License (see LICENSE)
"""
Input/Output utilities for panel setups.

This subpackage provides:
    - JSON serialization of configs, field-source layouts and histories.

Typical usage:
    from physics_lab.io import load_config, save_sources

    config = load_config("bungee.json")
    save_sources(collection, "layout.json")
"""
from .json_io import (
    load_raw,
    config_to_json,
    config_from_json,
    load_config,
    save_config,
    source_to_json,
    source_from_json,
    sources_to_json,
    sources_from_json,
    load_sources,
    save_sources,
    history_to_json,
    save_history,
)

__all__ = [
    "load_raw",
    # Configs
    "config_to_json",
    "config_from_json",
    "load_config",
    "save_config",
    # Sources
    "source_to_json",
    "source_from_json",
    "sources_to_json",
    "sources_from_json",
    "load_sources",
    "save_sources",
    # History
    "history_to_json",
    "save_history",
]
