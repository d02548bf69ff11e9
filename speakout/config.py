"""Configuration loader and validator for speakout.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/speakout/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values, and
``OutputConfig``, the typed view the output factory consumes.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

OUTPUT_MODE_CLIPBOARD = 'clipboard'
OUTPUT_MODE_ACTIVE_WINDOW = 'active_window'
OUTPUT_MODE_COMBINED = 'combined'
OUTPUT_MODES = (OUTPUT_MODE_CLIPBOARD, OUTPUT_MODE_ACTIVE_WINDOW, OUTPUT_MODE_COMBINED)

AUTO = 'auto'

USER_CONFIG_PATH = '~/.config/speakout/config.json'

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'default_mode': OUTPUT_MODE_CLIPBOARD,
    'clipboard_tool': AUTO,
    'type_tool': AUTO,
    'allowed_commands': ['xsel', 'wl-copy', 'xdotool', 'wtype', 'ydotool'],
    'command_timeout': 5.0,
    'debug': False,
}


@dataclass(frozen=True)
class OutputConfig:
    """Output settings read by the tool selector and factory."""

    default_mode: str = OUTPUT_MODE_CLIPBOARD
    clipboard_tool: str = AUTO
    type_tool: str = AUTO
    command_timeout: float | None = DEFAULT_CONFIG['command_timeout']

    @classmethod
    def from_dict(cls, conf: dict) -> OutputConfig:
        return cls(
            default_mode=conf.get('default_mode', OUTPUT_MODE_CLIPBOARD),
            clipboard_tool=conf.get('clipboard_tool', AUTO),
            type_tool=conf.get('type_tool', AUTO),
            command_timeout=conf.get('command_timeout', DEFAULT_CONFIG['command_timeout']),
        )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments
    s = re.sub(r"^[ \t]*//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


def _tool_name(conf: dict, key: str, default: str) -> str:
    val = conf.get(key, default)
    if not isinstance(val, str) or not val.strip():
        raise ValueError(f"Invalid '{key}': must be a non-empty string")
    return val.strip()


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    defaults = dict(DEFAULT_CONFIG)
    out = dict(defaults)

    # default_mode: one of OUTPUT_MODES
    mode = conf.get('default_mode', defaults['default_mode'])
    if mode not in OUTPUT_MODES:
        raise ValueError(f"Invalid 'default_mode': {mode!r} (must be one of {', '.join(OUTPUT_MODES)})")
    out['default_mode'] = mode

    # clipboard_tool / type_tool: 'auto' or an executable name
    out['clipboard_tool'] = _tool_name(conf, 'clipboard_tool', defaults['clipboard_tool'])
    out['type_tool'] = _tool_name(conf, 'type_tool', defaults['type_tool'])

    # allowed_commands: list of strings; an explicit empty list is kept (nothing may run)
    allowed = conf.get('allowed_commands', defaults['allowed_commands'])
    if not isinstance(allowed, (list, tuple)) or not all(isinstance(c, str) and c for c in allowed):
        raise ValueError("Invalid 'allowed_commands': must be a list of non-empty strings")
    out['allowed_commands'] = list(allowed)

    # command_timeout: positive float, or null for no deadline
    ct = conf.get('command_timeout', defaults['command_timeout'])
    if ct is not None:
        if isinstance(ct, bool):
            raise ValueError(f"Invalid 'command_timeout': {ct}")
        try:
            ct = float(ct)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid 'command_timeout': {ct}")
        if ct <= 0:
            raise ValueError(f"Invalid 'command_timeout': {ct} (must be > 0)")
    out['command_timeout'] = ct

    # debug: boolean
    dbg = conf.get('debug', defaults['debug'])
    if not isinstance(dbg, bool):
        raise ValueError("Invalid 'debug' flag: must be boolean")
    out['debug'] = dbg

    return out


def _read_and_merge(path: str, target_config: dict) -> None:
    """Read a JSON file, validate, and merge into *target_config*.

    Raises ``ValueError`` for unparsable or invalid content.
    """
    with open(path, 'r', encoding='utf-8') as f:
        raw = f.read()

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            raise ValueError(f"JSON parse error in {path}: {exc}") from exc

    if not isinstance(cfg, dict):
        raise ValueError(f"Invalid config {path}: top level must be an object")

    validated = validate_config(cfg)
    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
        else:
            logger.warning("Unknown config key %r in %s ignored", k, path)


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/speakout/config.json``.

    Returns the effective configuration dict (always has all default keys).
    Raises ``ValueError`` when an existing file is malformed.
    """
    config = dict(DEFAULT_CONFIG)
    config['allowed_commands'] = list(DEFAULT_CONFIG['allowed_commands'])

    path = config_path if config_path is not None else os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(path):
        logger.debug("Loading config from %s", path)
        _read_and_merge(path, config)
    else:
        logger.debug("Config file %s not found, using defaults", path)

    return config
