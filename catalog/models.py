from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

# Structures de données partagées entre scanner, classifieur, index et recherche.

DEFAULT_GROUP = "Other"
FALLBACK_GROUP = "All Channels"


class MainCategory(str, Enum):
    """Onglet principal du catalogue."""
    TV = "tv"
    MOVIES = "movies"
    SERIES = "series"


# Ordre d'affichage des onglets
CATEGORY_ORDER = (MainCategory.TV, MainCategory.MOVIES, MainCategory.SERIES)


@dataclass(frozen=True)
class RawEntry:
    """Une paire `#EXTINF` + URL telle que lue dans la playlist."""
    title: str
    url: str
    group_title: str = DEFAULT_GROUP
    logo_url: str | None = None


@dataclass(frozen=True)
class ClassifiedEntry:
    """RawEntry + catégorie principale et sous-catégorie."""
    title: str
    url: str
    group_title: str
    logo_url: str | None
    main_category: MainCategory
    sub_category: str

    @classmethod
    def from_raw(cls, raw: RawEntry, main_category: MainCategory, sub_category: str | None = None) -> ClassifiedEntry:
        return cls(
            title=raw.title,
            url=raw.url,
            group_title=raw.group_title,
            logo_url=raw.logo_url,
            main_category=main_category,
            sub_category=raw.group_title if sub_category is None else sub_category,
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "logoUrl": self.logo_url,
            "groupTitle": self.group_title,
            "mainCategory": self.main_category.value,
            "subCategory": self.sub_category,
        }


@dataclass(frozen=True)
class SubCategory:
    name: str
    entries: tuple[ClassifiedEntry, ...] = ()
    logo_url: str | None = None

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Catalog:
    """
    Instantané immuable : catégorie principale -> sous-catégories ordonnées.
    Les trois catégories sont toujours présentes (éventuellement vides).
    """
    tv: tuple[SubCategory, ...] = ()
    movies: tuple[SubCategory, ...] = ()
    series: tuple[SubCategory, ...] = ()

    def groups(self, category: MainCategory) -> tuple[SubCategory, ...]:
        if category is MainCategory.TV:
            return self.tv
        if category is MainCategory.MOVIES:
            return self.movies
        if category is MainCategory.SERIES:
            return self.series
        raise ValueError(f"Catégorie inconnue: {category!r}")

    def group(self, category: MainCategory, name: str) -> SubCategory | None:
        for sub in self.groups(category):
            if sub.name == name:
                return sub
        return None

    def entries(self) -> Iterator[ClassifiedEntry]:
        """Toutes les entrées, dans l'ordre du catalogue."""
        for category in CATEGORY_ORDER:
            for sub in self.groups(category):
                yield from sub.entries

    def counts(self) -> dict[str, int]:
        return {c.value: sum(len(s) for s in self.groups(c)) for c in CATEGORY_ORDER}

    def is_empty(self) -> bool:
        return not (self.tv or self.movies or self.series)

    def to_dict(self) -> dict:
        """Forme JSON: {tv: [[sous_categorie, [entrée...]], ...], movies: [...], series: [...]}"""
        return {
            c.value: [[s.name, [e.to_dict() for e in s.entries]] for s in self.groups(c)]
            for c in CATEGORY_ORDER
        }
