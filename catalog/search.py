from __future__ import annotations

from typing import Iterable

from .models import ClassifiedEntry


def matches(entry: ClassifiedEntry, needle: str) -> bool:
    """needle doit déjà être en minuscules."""
    return needle in entry.title.lower() or needle in entry.group_title.lower()


def search(query: str, entries: Iterable[ClassifiedEntry]) -> list[ClassifiedEntry]:
    """
    Recherche sous-chaîne insensible à la casse sur le titre ou le group-title.
    Requête vide => [] (recherche inactive). Ordre d'entrée conservé, pas de dédoublonnage.
    """
    if not query or not query.strip():
        return []
    needle = query.lower()
    return [e for e in entries if matches(e, needle)]
