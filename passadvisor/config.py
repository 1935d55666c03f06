# passadvisor/config.py
"""
Simple settings persistence for PassAdvisor.
Settings saved as JSON in %APPDATA%/PassAdvisor/config.json (Windows) or ~/.passadvisor/config.json (fallback)

Only personal hints are stored (name, birth year, ...), never passwords.
"""

import copy
import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONTEXT_KEYS = ("name", "birth_year", "mobile", "fav_word")

DEFAULTS: Dict[str, Any] = {
    "context": {key: None for key in CONTEXT_KEYS},
    "log_level": "WARNING",
    "clipboard_clear_seconds": 20,
    "generate_length": 16,
}

INT_KEYS = ("clipboard_clear_seconds", "generate_length")


def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        d = os.path.join(appdata, "PassAdvisor")
    else:
        d = os.path.join(os.path.expanduser("~"), ".passadvisor")
    os.makedirs(d, exist_ok=True)
    return d


def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")


def _defaults() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULTS)


def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return _defaults()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config %s: %s", p, e)
        return _defaults()
    if not isinstance(data, dict):
        logger.warning("ignoring malformed config %s", p)
        return _defaults()

    # merge defaults, including the nested context block
    out = _defaults()
    context = data.pop("context", None)
    out.update(data)
    if isinstance(context, dict):
        out["context"].update({k: v for k, v in context.items() if k in CONTEXT_KEYS})
    for key in INT_KEYS:
        try:
            out[key] = int(out[key])
        except (TypeError, ValueError):
            logger.warning("ignoring invalid %s=%r in config %s", key, out[key], p)
            out[key] = DEFAULTS[key]
    return out


def save_config(cfg: Dict[str, Any]) -> None:
    p = config_path()
    tmp = p + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
    os.replace(tmp, p)
    logger.debug("saved config to %s", p)
