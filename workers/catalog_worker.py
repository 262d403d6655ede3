from __future__ import annotations

import logging

import requests
from PySide6 import QtCore

from catalog.config import CatalogConfig
from catalog.errors import CatalogError
from catalog.pipeline import build_catalog, load_catalog

# Worker Qt: exécute le pipeline playlist -> catalogue hors du thread UI. L'appelant décide de réessayer.

log = logging.getLogger(__name__)


class CatalogWorker(QtCore.QObject):
    """Runs one catalog pipeline in a separate QThread, from a URL or already fetched text."""

    loaded = QtCore.Signal(object)  # CatalogResult
    failed = QtCore.Signal(str)
    finished = QtCore.Signal()

    def __init__(
        self,
        url: str = "",
        text: str | None = None,
        config: CatalogConfig | None = None,
        session: requests.Session | None = None,
    ):
        super().__init__()
        if not url and text is None:
            raise ValueError("url ou text requis")
        self.url = url
        self.text = text
        self.config = config or CatalogConfig()
        self.session = session
        self.attempts = 0
        self._stop = False

    def stop(self):
        self._stop = True

    def _build(self):
        if self.text is not None:
            return build_catalog(self.text, source=self.url, config=self.config)
        return load_catalog(self.url, config=self.config, session=self.session)

    @QtCore.Slot()
    def run(self):
        """Un passage complet ; le résultat n'est pas émis si stop() a été appelé entre-temps."""
        self.attempts += 1
        try:
            result = self._build()
        except CatalogError as e:
            log.warning("Chargement échoué (tentative %d): %s", self.attempts, e)
            if not self._stop:
                self.failed.emit(str(e))
        else:
            if not self._stop:
                self.loaded.emit(result)
        finally:
            self.finished.emit()

    @QtCore.Slot()
    def retry(self):
        self._stop = False
        self.run()
