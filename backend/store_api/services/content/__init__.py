"""
CMS-backed content: HTTP client and localized home content.
"""

from store_api.services.content.cms_client import CMSClient
from store_api.services.content.home_content import HomeContentService

__all__ = ["CMSClient", "HomeContentService"]
