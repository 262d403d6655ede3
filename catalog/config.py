from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .models import DEFAULT_GROUP, FALLBACK_GROUP

# Configuration utilisateur : fichier JSON (data/config.json) puis surcharges d'environnement.

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data/config.json")
ENV_TIMEOUT = "IPTV_CATALOG_TIMEOUT"
ENV_USER_AGENT = "IPTV_CATALOG_USER_AGENT"


@dataclass
class CatalogConfig:
    timeout_s: float = 10.0
    user_agent: str = "Mozilla/5.0"
    default_group: str = DEFAULT_GROUP
    fallback_group: str = FALLBACK_GROUP
    # Aplatit tout en TV quand aucun film/série n'est détecté.
    flatten_without_vod: bool = True
    # Locale de tri du repli (ex: "tr_TR"), vide = locale système.
    collation_locale: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> CatalogConfig:
        """Champs inconnus ignorés ; une valeur invalide garde la valeur par défaut."""
        defaults = cls()
        values = {}
        for f in fields(cls):
            if f.name not in (data or {}):
                continue
            default = getattr(defaults, f.name)
            values[f.name] = _coerce(f.name, data[f.name], default)
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce(name: str, value, default):
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    elif isinstance(default, float):
        if not isinstance(value, bool):
            try:
                return float(value)
            except (TypeError, ValueError):
                pass
    elif isinstance(default, str):
        if isinstance(value, str):
            return value
    log.warning("Config: %s ignoré (valeur invalide: %r)", name, value)
    return default


def _env_float(name: str, default: float) -> float:
    v = (os.environ.get(name) or "").strip()
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        log.warning("%s ignoré (valeur invalide: %r)", name, v)
        return default


def load_config(path: str | Path | None = None) -> CatalogConfig:
    """
    Lit le JSON utilisateur (clés inconnues ignorées). Fichier absent ou illisible => valeurs par défaut.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    data: dict = {}
    if config_path.exists():
        try:
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                data = loaded
            else:
                log.warning("Config %s ignorée : objet JSON attendu", config_path)
        except (OSError, ValueError) as e:
            log.warning("Config %s illisible (%s), valeurs par défaut", config_path, e)

    cfg = CatalogConfig.from_dict(data)
    cfg.timeout_s = _env_float(ENV_TIMEOUT, cfg.timeout_s)
    cfg.user_agent = (os.environ.get(ENV_USER_AGENT) or "").strip() or cfg.user_agent
    return cfg


def save_config(cfg: CatalogConfig, path: str | Path | None = None) -> Path:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")
    return config_path
