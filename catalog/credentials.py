from __future__ import annotations

from .errors import MissingCredentialsError

# Construction de l'URL playlist d'un panel Xtream-like (get.php, m3u_plus, sortie ts).

PLAYLIST_URL_TEMPLATE = "{base}/get.php?username={username}&password={password}&type=m3u_plus&output=ts"


def normalize_server_address(server_address: str) -> str:
    base = server_address.strip()
    if not base.lower().startswith(("http://", "https://")):
        base = f"http://{base}"
    return base.rstrip("/")


def build_playlist_url(username: str, password: str, server_address: str) -> str:
    """Les trois champs sont obligatoires, une seule forme d'URL produite."""
    missing = [
        label
        for label, value in (("username", username), ("password", password), ("server_address", server_address))
        if not value or not str(value).strip()
    ]
    if missing:
        raise MissingCredentialsError(
            "Identifiant, mot de passe et adresse serveur requis (manquant: %s)." % ", ".join(missing)
        )
    return PLAYLIST_URL_TEMPLATE.format(
        base=normalize_server_address(server_address),
        username=username,
        password=password,
    )
