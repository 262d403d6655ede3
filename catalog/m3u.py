from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from .errors import EmptyContentError, FormatError
from .models import DEFAULT_GROUP, RawEntry

# Lecture minimaliste des playlists Extended M3U (EXTINF + URL) vers des RawEntry.

log = logging.getLogger(__name__)

EXTM3U_MARKER = "#EXTM3U"
EXTINF_PREFIX = "#EXTINF:"
URL_SCHEMES = ("http://", "https://")
# Seuls attributs retenus, les autres sont ignorés.
KNOWN_ATTRS = ("group-title", "tvg-logo")


@dataclass(frozen=True)
class ExtInf:
    """Métadonnées d'une ligne #EXTINF valide (titre non vide)."""
    title: str
    group_title: str | None = None
    logo_url: str | None = None


def _last_top_level_comma(text: str) -> int:
    """Index de la dernière virgule hors guillemets, -1 si aucune."""
    pos = -1
    in_quotes = False
    for i, ch in enumerate(text):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            pos = i
    return pos


def _is_key_char(ch: str) -> bool:
    return ch.isalnum() or ch in "-_"


def iter_attributes(text: str) -> Iterator[tuple[str, str]]:
    """
    Parcourt les paires key="value" d'un en-tête EXTINF, dans l'ordre.
    Une valeur sans guillemet fermant termine le parcours.
    """
    i = 0
    n = len(text)
    while i < n:
        eq = text.find('="', i)
        if eq < 0:
            return
        start = eq
        while start > i and _is_key_char(text[start - 1]):
            start -= 1
        end = text.find('"', eq + 2)
        if end < 0:
            return
        key = text[start:eq]
        if key:
            yield key, text[eq + 2:end]
        i = end + 1


def parse_attributes(header: str) -> dict[str, str | None]:
    """
    Renvoie {group-title, tvg-logo} avec None pour un attribut absent ou vide ("").
    Clés sensibles à la casse, valeurs conservées telles quelles.
    En cas de doublon, la première occurrence gagne.
    """
    found: dict[str, str | None] = {k: None for k in KNOWN_ATTRS}
    for key, value in iter_attributes(header):
        if key in found and found[key] is None:
            found[key] = value or None
    return found


def parse_extinf(line: str) -> ExtInf | None:
    """
    Extrait titre + attributs connus d'une ligne #EXTINF.
    Renvoie None si la ligne est malformée (pas de virgule hors guillemets, titre vide).
    """
    body = line[len(EXTINF_PREFIX):] if line.startswith(EXTINF_PREFIX) else line
    comma = _last_top_level_comma(body)
    if comma < 0:
        return None
    title = body[comma + 1:].strip()
    if not title:
        return None
    attrs = parse_attributes(body[:comma])
    return ExtInf(title=title, group_title=attrs["group-title"], logo_url=attrs["tvg-logo"])


def is_stream_url(line: str) -> bool:
    return line[:8].lower().startswith(URL_SCHEMES)


def check_playlist(text: str) -> None:
    """Validation structurelle minimale : contenu non vide + en-tête #EXTM3U présent."""
    if text is None or not text.strip():
        raise EmptyContentError("Contenu de playlist vide.")
    if EXTM3U_MARKER not in text:
        raise FormatError("Playlist invalide : marqueur #EXTM3U absent.")


def scan(text: str, default_group: str = DEFAULT_GROUP) -> list[RawEntry]:
    """
    Convertit le texte M3U en RawEntry, dans l'ordre du fichier.

    Un seul slot "en attente" : chaque #EXTINF l'écrase, la ligne URL suivante le consomme.
    Un #EXTINF sans virgule vide le slot, une URL sans #EXTINF en attente est ignorée,
    et un #EXTINF resté en attente en fin de texte est abandonné.
    """
    check_playlist(text)

    out: list[RawEntry] = []
    pending: ExtInf | None = None
    malformed = 0
    stray_urls = 0
    orphans = 0

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(EXTINF_PREFIX):
            if pending is not None:
                orphans += 1
            pending = parse_extinf(line)
            if pending is None:
                malformed += 1
        elif is_stream_url(line):
            if pending is None:
                stray_urls += 1
                continue
            out.append(RawEntry(
                title=pending.title,
                url=line,
                group_title=pending.group_title or default_group,
                logo_url=pending.logo_url,
            ))
            pending = None

    if pending is not None:
        orphans += 1

    log.debug(
        "scan: %d entrées (%d EXTINF malformés, %d URL orphelines, %d EXTINF sans URL)",
        len(out), malformed, stray_urls, orphans,
    )
    return out
