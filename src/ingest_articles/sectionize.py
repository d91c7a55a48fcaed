"""Convert articles into the analysis service's section schema."""

from ingest_articles.models import Article, Section, SectionMetadata


def article_to_section(article: Article) -> Section:
    return Section(
        id=article.id,
        text=article.text,
        index=article.index,
        metadata=SectionMetadata(
            title=article.title,
            source=article.source,
            link=article.link,
            pub_date=article.pub_date,
            description=article.description or "",
            date=article.date,
            index=article.index,
        ),
    )


def articles_to_sections(articles: list[Article]) -> list[Section]:
    """Map articles 1:1 to sections, preserving order."""
    return [article_to_section(article) for article in articles]
