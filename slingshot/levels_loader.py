#!/usr/bin/env python3
"""
Level JSON loading utilities.

Extra levels live in levels/*.json next to the package and are played after the
built-in ones, in file-name order.

Schema
======
{
  "name": "Human-friendly level name",
  "craft": {"anchor": [0.0, 0.5], "offset": [100, 0]},
  "goal": {"anchor": [1.0, 0.5], "offset": [-100, 0], "radius": 30},
  "planets": [
    {"anchor": [0.5, 0.5], "offset": [0, 0], "radius": 40, "gravity": 5000, "influence": 300}
  ]
}

anchor is a fraction of the play area (0..1 on each axis), offset is in pixels and
both default to [0, 0]. Users can add their own JSON files into the folder and they'll
be picked up by the loader. Files that cannot be parsed are skipped with a warning;
geometry is only range-checked once a level is resolved against a play area.
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from .levels import BUILTIN_LEVELS, GoalSpec, LevelConfig, LevelConfigError, PlanetSpec, Placement

logger = logging.getLogger(__name__)

LEVELS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "levels")


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except (OSError, ValueError) as exc:
    logger.debug("Could not read level file %s: %s", path, exc)
    return None


def _pair(data: Dict[str, Any], key: str, where: str) -> Tuple[float, float]:
  raw = data.get(key, [0.0, 0.0])
  try:
    return (float(raw[0]), float(raw[1]))
  except (TypeError, ValueError, IndexError, KeyError):
    raise LevelConfigError(f"{where}.{key}", f"expected [x, y], got {raw!r}")


def _number(data: Dict[str, Any], key: str, where: str) -> float:
  if key not in data:
    raise LevelConfigError(f"{where}.{key}", "missing")
  try:
    return float(data[key])
  except (TypeError, ValueError):
    raise LevelConfigError(f"{where}.{key}", f"expected a number, got {data[key]!r}")


def _placement(data: Any, where: str) -> Placement:
  if not isinstance(data, dict):
    raise LevelConfigError(where, "expected an object")
  return Placement(_pair(data, "anchor", where), _pair(data, "offset", where))


def parse_level(data: Any, default_name: str = "Level") -> LevelConfig:
  """Build a LevelConfig from decoded JSON; raises LevelConfigError on bad structure."""
  if not isinstance(data, dict):
    raise LevelConfigError("level", "expected an object")
  if "craft" not in data:
    raise LevelConfigError("craft", "missing")
  goal = data.get("goal")
  if not isinstance(goal, dict):
    raise LevelConfigError("goal", "missing")
  planets_raw = data.get("planets", [])
  if not isinstance(planets_raw, list):
    raise LevelConfigError("planets", "expected a list")

  planets = []
  for i, p in enumerate(planets_raw):
    where = f"planets[{i}]"
    planets.append(PlanetSpec(
      placement=_placement(p, where),
      radius=_number(p, "radius", where),
      gravity=_number(p, "gravity", where),
      influence=_number(p, "influence", where),
    ))
  return LevelConfig(
    name=str(data.get("name") or default_name),
    craft=_placement(data["craft"], "craft"),
    goal=GoalSpec(_placement(goal, "goal"), _number(goal, "radius", "goal")),
    planets=tuple(planets),
  )


def list_level_files(levels_dir: str = LEVELS_DIR) -> List[str]:
  """JSON files available in the levels directory, sorted by name."""
  if not os.path.isdir(levels_dir):
    return []
  return sorted(fn for fn in os.listdir(levels_dir) if fn.lower().endswith(".json"))


def load_level_file(file_name: str, levels_dir: str = LEVELS_DIR) -> LevelConfig:
  """Load one level file; raises LevelConfigError if it is unreadable or malformed."""
  data = _read_json(os.path.join(levels_dir, file_name))
  if data is None:
    raise LevelConfigError(file_name, "unreadable level file")
  return parse_level(data, default_name=os.path.splitext(file_name)[0])


def load_all_levels(levels_dir: str = LEVELS_DIR) -> List[LevelConfig]:
  """Built-in levels followed by every loadable JSON level."""
  levels = list(BUILTIN_LEVELS)
  for fn in list_level_files(levels_dir):
    try:
      levels.append(load_level_file(fn, levels_dir))
    except LevelConfigError as exc:
      logger.warning("Skipping level file %s: %s", fn, exc)
  logger.debug("Loaded %d levels (%d built-in)", len(levels), len(BUILTIN_LEVELS))
  return levels
