"""twdocs: structured scraper for the twitterapi.io documentation site."""

__version__ = "2.1.0"
