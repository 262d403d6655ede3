from __future__ import annotations

# Erreurs typées remontées à l'appelant (qui propose "Réessayer" ou "Retour").


class CatalogError(Exception):
    """Base de toutes les erreurs du pipeline playlist -> catalogue."""


class FormatError(CatalogError):
    """Le texte reçu n'est pas une playlist Extended M3U exploitable."""


class EmptyContentError(FormatError):
    """Contenu vide (ou uniquement des espaces)."""


class MissingCredentialsError(FormatError):
    """Identifiant, mot de passe ou adresse serveur manquant."""


class UpstreamError(CatalogError):
    """Échec de récupération du texte (réseau, statut HTTP, timeout)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
