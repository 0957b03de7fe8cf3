"""web_delta.parser: HTML parsing helpers (SEO fields, outbound links)."""
