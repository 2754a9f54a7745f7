"""
Picture URI composition for catalog items.

Catalog pictures are stored with a placeholder host (seed data) or as
relative paths. Orders keep the public absolute URI so the snapshot stays
valid regardless of where the catalog is served from later.
"""
from urllib.parse import urljoin

from app.core.interfaces import IUriComposer

# Placeholder host used by catalog seed data
CATALOG_BASE_URL_PLACEHOLDER = "http://catalogbaseurltobereplaced"


class UriComposer(IUriComposer):
    """
    Resolves raw catalog picture references against the catalog base URL.

    - "http://catalogbaseurltobereplaced/images/1.png" -> "{base}/images/1.png"
    - "images/1.png" or "/images/1.png" -> "{base}/images/1.png"
    - Absolute URIs on any other host are returned unchanged
    """

    def __init__(self, catalog_base_url: str):
        self._base_url = catalog_base_url.rstrip("/")

    def compose_picture_uri(self, raw_uri: str) -> str:
        if not raw_uri:
            return ""

        if raw_uri.startswith(CATALOG_BASE_URL_PLACEHOLDER):
            return raw_uri.replace(CATALOG_BASE_URL_PLACEHOLDER, self._base_url, 1)

        if raw_uri.startswith(("http://", "https://")):
            return raw_uri

        return urljoin(self._base_url + "/", raw_uri.lstrip("/"))
