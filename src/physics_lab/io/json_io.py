# MIT License (see LICENSE)
"""
JSON serialization and deserialization for panel setups.

Configs, field-source layouts and chart histories can be saved and loaded
as human-readable JSON.

JSON Schema Overview:
---------------------
Config file:
{
  "type": "projectile" | "spring" | "bungee" | "pulley" | "linked-masses"
          | "orbit" | "vertical-circle" | "conical-pendulum" | "collision",
  "<parameter>": float,            # Any field of the config; missing
  ...                              # fields take their defaults
}

Sources file:
{
  "sources": [
    {
      "kind": "point-charge" | "dipole" | "straight-wire" | "loop" | "solenoid",
      "position": [x, y],          # Default: [0.5, 0.5]
      "orientation": float,        # Radians, default: 0
      "strength": float,           # Default: 1
      "id": int                    # Informational; ids are reassigned on load
    }
  ]
}

History export:
[
  {"time": float, "<series>": float, ...},
  ...
]
"""
from __future__ import annotations
from dataclasses import fields
import json
from typing import Any, Iterable

import numpy as np

from ..config import SimulationConfig, config_type
from ..field.sources import FieldSource, SourceCollection, SourceKind
from ..history import HistoryBuffer


def load_raw(path: str) -> Any:
    """
    Load raw JSON data without object construction.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_raw(data: Any, path: str, indent: int) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


# =============================================================================
# Configs
# =============================================================================

def config_to_json(config: SimulationConfig) -> dict[str, Any]:
    """Serialize a config to a dict tagged with its type."""
    return {"type": config.KIND, **config.to_dict()}


def config_from_json(d: dict[str, Any]) -> SimulationConfig:
    """
    Build a config from its JSON form.

    Raises:
        ValueError: If the type is missing or unknown, or a key is not a
            parameter of that type.
        ConfigurationError: If a value is out of range (a ValueError too).
    """
    if "type" not in d:
        raise ValueError("Config definition missing required 'type' field.")
    cls = config_type(d["type"])
    names = {f.name for f in fields(cls)}
    params = {k: v for k, v in d.items() if k != "type"}
    unknown = sorted(set(params) - names)
    if unknown:
        raise ValueError(f"Unknown parameters for '{cls.KIND}': {unknown}")
    return cls(**params)


def load_config(path: str) -> SimulationConfig:
    """
    Load a config from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the content does not describe a valid config.
    """
    return config_from_json(load_raw(path))


def save_config(config: SimulationConfig, path: str, indent: int = 2) -> None:
    """Save a config to a JSON file on disk."""
    _save_raw(config_to_json(config), path, indent)


# =============================================================================
# Field sources
# =============================================================================

def source_to_json(source: FieldSource) -> dict[str, Any]:
    return {
        "kind": str(source.kind),
        "position": _to_list(source.position),
        "orientation": source.orientation,
        "strength": source.strength,
        "id": source.id,
    }


def source_from_json(d: dict[str, Any]) -> FieldSource:
    """
    Parse one source definition.

    Raises:
        ValueError: If the kind is missing or unknown.
    """
    kind = d.get("kind")
    if kind is None:
        raise ValueError("Source definition missing required 'kind' field.")
    try:
        kind = SourceKind(kind)
    except ValueError:
        raise ValueError(f"Unknown source kind: '{kind}'") from None
    return FieldSource(
        kind=kind,
        position=d.get("position", [0.5, 0.5]),
        orientation=float(d.get("orientation", 0.0)),
        strength=float(d.get("strength", 1.0)),
        id=int(d.get("id", 0)),
    )


def sources_to_json(sources: Iterable[FieldSource]) -> dict[str, Any]:
    return {"sources": [source_to_json(s) for s in tuple(sources)]}


def sources_from_json(data: dict[str, Any]) -> SourceCollection:
    """
    Rebuild a SourceCollection, in file order.

    The collection assigns fresh ids starting at 1; ids stored in the file
    are not reused.
    """
    collection = SourceCollection()
    for d in data.get("sources", []):
        s = source_from_json(d)
        collection.add(s.kind, s.position, orientation=s.orientation, strength=s.strength)
    return collection


def load_sources(path: str) -> SourceCollection:
    return sources_from_json(load_raw(path))


def save_sources(sources: Iterable[FieldSource], path: str, indent: int = 2) -> None:
    _save_raw(sources_to_json(sources), path, indent)


# =============================================================================
# History
# =============================================================================

def history_to_json(history: HistoryBuffer) -> list[dict[str, float]]:
    """Chart rows of a history buffer, oldest first."""
    return history.to_records()


def save_history(history: HistoryBuffer, path: str, indent: int = 2) -> None:
    _save_raw(history_to_json(history), path, indent)


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
