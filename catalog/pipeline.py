from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from .classifier import classify_entries
from .config import CatalogConfig
from .credentials import build_playlist_url
from .fetch import fetch_playlist_text
from .indexer import index
from .m3u import scan
from .models import Catalog, ClassifiedEntry
from .search import search

# Un appel = un passage complet texte -> scanner -> classifieur -> index. Rien n'est partagé entre appels.

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogResult:
    entries: tuple[ClassifiedEntry, ...]
    catalog: Catalog
    source: str = ""

    def search(self, query: str) -> list[ClassifiedEntry]:
        return search(query, self.entries)


def build_catalog(text: str, source: str = "", config: CatalogConfig | None = None) -> CatalogResult:
    cfg = config or CatalogConfig()
    raw = scan(text, default_group=cfg.default_group)
    entries = tuple(classify_entries(raw, cfg))
    catalog = index(entries)
    log.info(
        "Catalogue %s: %s",
        source or "(texte)",
        ", ".join(f"{k}={v}" for k, v in catalog.counts().items()),
    )
    return CatalogResult(entries=entries, catalog=catalog, source=source)


def load_catalog(
    url: str,
    config: CatalogConfig | None = None,
    session: requests.Session | None = None,
) -> CatalogResult:
    cfg = config or CatalogConfig()
    text = fetch_playlist_text(url, timeout=cfg.timeout_s, user_agent=cfg.user_agent, session=session)
    return build_catalog(text, source=url, config=cfg)


def load_catalog_from_credentials(
    username: str,
    password: str,
    server_address: str,
    config: CatalogConfig | None = None,
    session: requests.Session | None = None,
) -> CatalogResult:
    url = build_playlist_url(username, password, server_address)
    return load_catalog(url, config=config, session=session)
