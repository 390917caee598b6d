"""Fixed sample content used by the mock store and the ``seed_content`` command."""

from datetime import datetime, timezone


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


SAMPLE_ARTICLES = [
    {
        "id": "1",
        "title": "Latest Advances in Lithium Battery Technology",
        "summary": (
            "An overview of recent progress in lithium batteries, covering high energy "
            "density materials, fast charging and safety improvements."
        ),
        "content": (
            "# Latest Advances in Lithium Battery Technology\n\n"
            "## High energy density materials\n\n"
            "Energy density has improved markedly in recent years, driven by new cathode materials.\n\n"
            "## Fast charging\n\n"
            "Fast charging lets a lithium battery fill up in minutes, a large gain for users.\n\n"
            "## Safety\n\n"
            "Better battery management systems and cell chemistry have made packs noticeably safer."
        ),
        "category": "article",
        "cover_image": "https://example.com/battery1.jpg",
        "author": "Editorial Team",
        "views": 1234,
        "created_at": _ts("2026-01-20T08:00:00"),
        "updated_at": _ts("2026-01-20T08:00:00"),
    },
    {
        "id": "2",
        "title": "Solid-State Batteries Move Toward Commercial Production",
        "summary": (
            "Solid-state batteries, the next generation of cell technology, are getting closer "
            "to market as several manufacturers start small-scale production."
        ),
        "content": (
            "# Solid-State Batteries Move Toward Commercial Production\n\n"
            "## Technical advantages\n\n"
            "Solid-state cells offer higher energy density and better safety than conventional lithium cells.\n\n"
            "## Industrial progress\n\n"
            "Toyota, Panasonic and others are investing in production lines, with volume output expected by 2027."
        ),
        "category": "news",
        "cover_image": "https://example.com/battery2.jpg",
        "author": "Editorial Team",
        "views": 892,
        "created_at": _ts("2026-01-19T09:30:00"),
        "updated_at": _ts("2026-01-19T09:30:00"),
    },
    {
        "id": "3",
        "title": "2026 Battery Industry Report",
        "summary": (
            "A full analysis of where the battery industry is heading in 2026: market size, "
            "technology roadmaps and the competitive landscape."
        ),
        "content": (
            "# 2026 Battery Industry Report\n\n"
            "## Market size\n\n"
            "The global battery market is expected to reach 1.2 trillion USD, growing over 20% a year.\n\n"
            "## Technology roadmap\n\n"
            "Lithium-ion remains dominant while solid-state and hydrogen fuel cells gain share."
        ),
        "category": "report",
        "cover_image": "https://example.com/battery3.jpg",
        "author": "Editorial Team",
        "views": 1567,
        "created_at": _ts("2026-01-18T10:15:00"),
        "updated_at": _ts("2026-01-18T10:15:00"),
    },
]

SAMPLE_COMMENTS = [
    {
        "id": "1",
        "article_id": "1",
        "nickname": "tech_fan",
        "content": "Great write-up, the analysis of lithium battery tech goes really deep.",
        "created_at": _ts("2026-01-20T10:00:00"),
        "updated_at": _ts("2026-01-20T10:00:00"),
    },
    {
        "id": "2",
        "article_id": "1",
        "nickname": "battery_engineer",
        "content": "Looking forward to more coverage of solid-state batteries.",
        "created_at": _ts("2026-01-20T11:30:00"),
        "updated_at": _ts("2026-01-20T11:30:00"),
    },
]


__all__ = ["SAMPLE_ARTICLES", "SAMPLE_COMMENTS"]
