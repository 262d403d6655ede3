from __future__ import annotations

import logging
from dataclasses import replace
from functools import cmp_to_key
from typing import Iterable

from PySide6 import QtCore

from .indexer import index
from .models import FALLBACK_GROUP, Catalog, ClassifiedEntry, MainCategory, RawEntry

# Classement heuristique TV / Films / Séries à partir du group-title et de l'extension de l'URL.

log = logging.getLogger(__name__)

# Seuls les fichiers vidéo peuvent être des films ou des épisodes.
VIDEO_FILE_SUFFIXES = (".mkv",)
SERIES_KEYWORDS = ("DIZI", "SERIES")
MOVIE_KEYWORDS = ("FILM", "MOVIE")


def is_video_file(url: str) -> bool:
    return (url or "").casefold().endswith(VIDEO_FILE_SUFFIXES)


def category_for(group_title: str, url: str) -> MainCategory:
    """Fonction pure de (group_title, extension de l'URL)."""
    if not is_video_file(url):
        return MainCategory.TV
    label = (group_title or "").upper()
    if any(kw in label for kw in SERIES_KEYWORDS):
        return MainCategory.SERIES
    if any(kw in label for kw in MOVIE_KEYWORDS):
        return MainCategory.MOVIES
    return MainCategory.TV


def classify_entry(raw: RawEntry) -> ClassifiedEntry:
    return ClassifiedEntry.from_raw(raw, category_for(raw.group_title, raw.url))


def make_collator(locale_name: str = "") -> QtCore.QCollator:
    """Collation insensible à la casse ; locale système par défaut, anglais si la locale est "C"."""
    loc = QtCore.QLocale(locale_name) if locale_name else QtCore.QLocale.system()
    if loc.language() == QtCore.QLocale.Language.C:
        loc = QtCore.QLocale(QtCore.QLocale.Language.English)
    collator = QtCore.QCollator(loc)
    collator.setCaseSensitivity(QtCore.Qt.CaseSensitivity.CaseInsensitive)
    return collator


def flatten_all(
    entries: Iterable[ClassifiedEntry],
    fallback_group: str = FALLBACK_GROUP,
    collation_locale: str = "",
) -> list[ClassifiedEntry]:
    """Tout en TV, une seule sous-catégorie, trié par titre selon la locale (tri stable)."""
    collator = make_collator(collation_locale)
    flat = [replace(e, main_category=MainCategory.TV, sub_category=fallback_group) for e in entries]
    flat.sort(key=cmp_to_key(lambda a, b: collator.compare(a.title, b.title)))
    return flat


def has_vod(entries: Iterable[ClassifiedEntry]) -> bool:
    return any(e.main_category is not MainCategory.TV for e in entries)


def classify_entries(entries: Iterable[RawEntry], config=None) -> list[ClassifiedEntry]:
    """
    Classe chaque entrée puis applique le repli global : si aucune entrée n'est
    un film ou une série, tout le catalogue est aplati dans une seule sous-catégorie TV.
    Le repli porte sur l'ensemble, pas sur chaque groupe.
    """
    classified = [classify_entry(e) for e in entries]

    flatten = True if config is None else config.flatten_without_vod
    fallback_group = FALLBACK_GROUP if config is None else config.fallback_group
    collation_locale = "" if config is None else config.collation_locale

    if flatten and classified and not has_vod(classified):
        log.debug("Aucun film/série détecté : repli sur '%s' (%d entrées)", fallback_group, len(classified))
        return flatten_all(classified, fallback_group, collation_locale)
    return classified


def classify(entries: Iterable[RawEntry], config=None) -> Catalog:
    """RawEntry -> Catalog (classement + repli + indexation)."""
    return index(classify_entries(entries, config))
