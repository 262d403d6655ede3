from __future__ import annotations

import logging

import requests

from .errors import UpstreamError

# Téléchargement du texte de playlist. Toute erreur réseau/HTTP devient une UpstreamError opaque.

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0"


def fetch_playlist_text(
    url: str,
    timeout: float | None = None,
    user_agent: str | None = None,
    session: requests.Session | None = None,
) -> str:
    url = (url or "").strip()
    if not url:
        raise UpstreamError("URL de playlist manquante.")

    headers = {"Accept": "*/*", "User-Agent": user_agent or DEFAULT_USER_AGENT}
    http = session or requests.Session()
    log.info("Téléchargement: %s", url)
    try:
        r = http.get(url, headers=headers, timeout=timeout or DEFAULT_TIMEOUT_S)
        r.raise_for_status()
        text = r.text
    except requests.exceptions.Timeout as e:
        raise UpstreamError(f"Délai dépassé pour {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise UpstreamError(f"Erreur HTTP {status} pour {url}", status_code=status) from e
    except requests.exceptions.RequestException as e:
        raise UpstreamError(f"Échec du téléchargement ({type(e).__name__}): {e}") from e
    finally:
        if session is None:
            http.close()

    log.debug("Contenu reçu: %d caractères", len(text))
    return text
