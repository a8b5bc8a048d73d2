# core/catalog/__init__.py
from .google_books import GoogleBooksClient, CatalogSearchResult, map_volume, build_query_params

__all__ = ['GoogleBooksClient', 'CatalogSearchResult', 'map_volume', 'build_query_params']
