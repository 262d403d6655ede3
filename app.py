from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from catalog.config import load_config
from catalog.errors import CatalogError
from catalog.pipeline import CatalogResult, build_catalog, load_catalog, load_catalog_from_credentials

# Point d'entrée ligne de commande : charge une playlist (URL, fichier ou identifiants panel)
# et affiche le catalogue, un résumé ou des résultats de recherche en JSON.

log = logging.getLogger("iptv_catalog")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Catalogue TV / Films / Séries depuis une playlist M3U")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--url", help="URL de la playlist .m3u/.m3u8")
    src.add_argument("--file", help="Fichier playlist local")
    src.add_argument("--server", help="Adresse du serveur (avec --username/--password)")
    ap.add_argument("--username", default="")
    ap.add_argument("--password", default="")
    ap.add_argument("--search", default=None, help="Recherche titre/groupe (insensible à la casse)")
    ap.add_argument("--summary", action="store_true", help="Nombre d'entrées par catégorie et sous-catégorie")
    ap.add_argument("--config", default=None, help="Fichier JSON de configuration (défaut: data/config.json)")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def summarize(result: CatalogResult) -> dict:
    return {
        category: {name: len(items) for name, items in groups}
        for category, groups in result.catalog.to_dict().items()
    }


def run(args: argparse.Namespace) -> CatalogResult:
    cfg = load_config(args.config)
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8", errors="replace")
        return build_catalog(text, source=Path(args.file).name, config=cfg)
    if args.server:
        return load_catalog_from_credentials(args.username, args.password, args.server, config=cfg)
    return load_catalog(args.url, config=cfg)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        result = run(args)
    except (CatalogError, OSError) as e:
        log.error("%s", e)
        return 1

    if args.search is not None:
        payload = [e.to_dict() for e in result.search(args.search)]
    elif args.summary:
        payload = summarize(result)
    else:
        payload = result.catalog.to_dict()

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
