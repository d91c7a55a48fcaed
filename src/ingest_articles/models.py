"""Data models for ingest_articles pipeline stage."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class RSSSource:
    """An RSS feed configured in a source list."""
    name: str
    url: str


@dataclass
class HTMLSource:
    """A web page scraped for article links with a CSS selector."""
    name: str
    url: str
    article_selector: str
    base_url: Optional[str] = None


@dataclass
class SourceList:
    """A named group of sources analysed together (e.g. one country's media)."""
    name: str
    rss_sources: list[RSSSource] = field(default_factory=list)
    html_sources: list[HTMLSource] = field(default_factory=list)
    force_reanalysis: bool = False


@dataclass
class RawArticle:
    """Article candidate yielded by a source fetcher."""
    source: str
    title: str
    link: str
    pub_date: Optional[str] = None
    description: str = ""


@dataclass
class SourceFetchResult:
    """Candidates from one source, or the error that degraded it to nothing."""
    source: str
    articles: list[RawArticle] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class ExtractionResult:
    """Result of full article text extraction."""
    text: Optional[str]
    method: Optional[str]
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        """Whether extraction was successful."""
        return self.text is not None


@dataclass
class Article:
    """Deduplicated article with full text, ready to be sectionized."""
    id: str
    index: int
    source: str
    title: str
    link: str
    pub_date: Optional[str]
    published_at: Optional[datetime]
    description: str
    text: str
    date: datetime


@dataclass(frozen=True)
class SectionMetadata:
    title: str
    source: str
    link: str
    pub_date: Optional[str]
    description: str
    date: datetime
    index: int


@dataclass(frozen=True)
class Section:
    """The analysis service's unit of submitted content, one per article."""
    id: str
    text: str
    index: int
    metadata: SectionMetadata

    def to_dict(self) -> dict:
        """Serialize to the analysis service's section schema."""
        return {
            "id": self.id,
            "text": self.text,
            "index": self.index,
            "metadata": {
                "title": self.metadata.title,
                "source": self.metadata.source,
                "link": self.metadata.link,
                "pubDate": self.metadata.pub_date,
                "description": self.metadata.description,
                "date": self.metadata.date.isoformat(),
                "index": self.metadata.index,
            },
        }
