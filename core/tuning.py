"""core/tuning.py — Data-driven tuning constants.

Every number an enemy designer wants to tweak lives in
``data/tuning.toml`` and is loaded once at startup.  Any system can
read a value with::

    from core.tuning import get
    force = get("enemy.death", "impulse_force", 20.0)

The default passed to ``get()`` is the shipped value, so the AI core
behaves identically when the file is missing (headless tests, tools).

Hot-reload: call ``reload()`` to re-read the file.  In the arena
sandbox, press F5.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    if path is None:
        root = Path(__file__).resolve().parent.parent
        path = root / "data" / "tuning.toml"
    else:
        path = Path(path)

    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"enemy.ai"`` looks up ``[enemy.ai]``.

    >>> get("enemy.ai", "no_such_key", 3.0)
    3.0
    """
    node = _table(section)
    if node is None:
        return default
    return node.get(key, default)


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _table(section_path)
    return dict(node) if node is not None else {}


def set_value(section_path: str, key: str, value) -> None:
    """Override one value in memory (tests, sandbox sliders)."""
    node = _data
    for part in section_path.split("."):
        node = node.setdefault(part, {})
    node[key] = value


def reset() -> None:
    """Forget every loaded value — ``get()`` falls back to defaults."""
    global _data
    _data = {}


def _table(section_path: str) -> dict | None:
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node if isinstance(node, dict) else None


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
