"""
Service layer: catalog query core, domain services and CMS content.

Import from the subpackages directly:
    from store_api.services.catalog import query_catalog
    from store_api.services.domain import ProductService
    from store_api.services.content import HomeContentService
"""
