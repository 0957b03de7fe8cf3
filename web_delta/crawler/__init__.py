"""web_delta.crawler: prefix-scoped site crawler and its data models."""
from web_delta.crawler.crawler import SiteCrawler
from web_delta.crawler.models import CrawlResult, CrawlSession, PageSnapshot

__all__ = ["SiteCrawler", "CrawlResult", "CrawlSession", "PageSnapshot"]
