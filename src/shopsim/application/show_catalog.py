"""Application service: Show Catalog use case (query)."""

from __future__ import annotations

from shopsim.application.dto import ProductDTO
from shopsim.domain.repository.catalog import Catalog


class ShowCatalogHandler:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def handle(self) -> list[ProductDTO]:
        return [ProductDTO.from_product(p) for p in self._catalog.list_products()]
