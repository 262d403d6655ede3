from __future__ import annotations

from typing import Iterable, Sequence

from .models import Catalog, ClassifiedEntry, MainCategory, SubCategory

# Regroupement catégorie -> sous-catégorie -> entrées (ordre de première apparition).

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")


def resolve_group_logo(entries: Sequence[ClassifiedEntry]) -> str | None:
    """
    Logo représentatif d'une sous-catégorie :
      1. le premier tvg-logo explicite du groupe
      2. sinon la première entrée dont l'URL est une image (.png/.jpg/.jpeg)
      3. sinon aucun
    """
    for e in entries:
        if e.logo_url:
            return e.logo_url
    for e in entries:
        if e.url and e.url.lower().endswith(IMAGE_SUFFIXES):
            return e.url
    return None


def index(entries: Iterable[ClassifiedEntry]) -> Catalog:
    # dict conserve l'ordre d'insertion : ordre de première apparition des groupes.
    buckets: dict[MainCategory, dict[str, list[ClassifiedEntry]]] = {c: {} for c in MainCategory}
    for e in entries:
        buckets[e.main_category].setdefault(e.sub_category, []).append(e)

    def _groups(category: MainCategory) -> tuple[SubCategory, ...]:
        return tuple(
            SubCategory(name=name, entries=tuple(items), logo_url=resolve_group_logo(items))
            for name, items in buckets[category].items()
        )

    return Catalog(
        tv=_groups(MainCategory.TV),
        movies=_groups(MainCategory.MOVIES),
        series=_groups(MainCategory.SERIES),
    )
