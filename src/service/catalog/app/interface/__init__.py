"""Catalog Application Interfaces"""

from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo

__all__ = ['ICatalogQueryRepo']
