"""Behaviour of the in-memory content store."""

from __future__ import annotations

from unittest import mock

from django.test import SimpleTestCase

from articles.exceptions import NotFound, ValidationFailure
from articles.records import UNKNOWN_ARTICLE_TITLE
from articles.serializers import DEFAULT_AUTHOR
from articles.stores.mock import MockContentStore
from authentication.providers import MockAuthProvider
from tests.utils import make_mock_store

NEW_ARTICLE = {
    "title": "Sodium-ion cells reach the grid",
    "summary": "A first utility-scale sodium-ion installation went live.",
    "content": "# Sodium-ion\n\nDetails.",
    "category": "news",
    "cover_image": "https://example.com/sodium.jpg",
    "author": "Newsroom",
}


class MockArticleTests(SimpleTestCase):
    """Article operations against a seeded store with no latency."""

    def setUp(self):
        self.store = make_mock_store()

    async def test_seed_covers_every_category(self):
        articles = await self.store.list_articles()

        self.assertEqual(len(articles), 3)
        self.assertEqual({a.category for a in articles}, {"news", "article", "report"})

    async def test_list_articles_newest_first(self):
        articles = await self.store.list_articles()
        created = [a.created_at for a in articles]

        self.assertEqual(created, sorted(created, reverse=True))
        self.assertEqual([a.id for a in articles], ["1", "2", "3"])

    async def test_list_articles_filters_by_category(self):
        reports = await self.store.list_articles("report")

        self.assertEqual([a.id for a in reports], ["3"])

    async def test_list_articles_rejects_unknown_category(self):
        with self.assertRaises(ValidationFailure) as ctx:
            await self.store.list_articles("podcast")
        self.assertIn("category", ctx.exception.errors)

    async def test_get_article_missing_returns_none(self):
        self.assertIsNone(await self.store.get_article("404"))

    async def test_create_article_starts_at_zero_views(self):
        article = await self.store.create_article(NEW_ARTICLE)

        self.assertEqual(article.views, 0)
        self.assertEqual(article.created_at, article.updated_at)
        self.assertEqual(article.id, "4")
        fetched = await self.store.get_article(article.id)
        self.assertEqual(fetched, article)

    async def test_create_article_trims_and_defaults(self):
        payload = {key: value for key, value in NEW_ARTICLE.items() if key not in ("author", "cover_image")}
        payload["title"] = "   Padded title   "
        payload["id"] = "999"
        payload["views"] = 50

        article = await self.store.create_article(payload)

        self.assertEqual(article.title, "Padded title")
        self.assertEqual(article.author, DEFAULT_AUTHOR)
        self.assertEqual(article.cover_image, "")
        self.assertEqual(article.views, 0)
        self.assertNotEqual(article.id, "999")

    async def test_create_article_rejects_blank_fields(self):
        payload = dict(NEW_ARTICLE, title="   ", summary="")

        with self.assertRaises(ValidationFailure) as ctx:
            await self.store.create_article(payload)

        self.assertIn("title", ctx.exception.errors)
        self.assertIn("summary", ctx.exception.errors)
        self.assertEqual(len(await self.store.list_articles()), 3)

    async def test_create_article_rejects_overlong_title(self):
        with self.assertRaises(ValidationFailure):
            await self.store.create_article(dict(NEW_ARTICLE, title="x" * 201))

    async def test_ids_are_not_reused_after_delete(self):
        first = await self.store.create_article(NEW_ARTICLE)
        await self.store.delete_article(first.id)
        second = await self.store.create_article(NEW_ARTICLE)

        self.assertNotEqual(first.id, second.id)

    async def test_update_article_refreshes_updated_at(self):
        before = await self.store.get_article("2")

        updated = await self.store.update_article("2", {"title": "Solid-state update"})

        self.assertEqual(updated.title, "Solid-state update")
        self.assertEqual(updated.summary, before.summary)
        self.assertEqual(updated.created_at, before.created_at)
        self.assertNotEqual(updated.updated_at, before.updated_at)

    async def test_update_missing_article_raises_not_found(self):
        with self.assertRaises(NotFound):
            await self.store.update_article("404", {"title": "Nope"})

    async def test_returned_records_are_copies(self):
        article = await self.store.get_article("1")
        article.views = 0

        self.assertEqual((await self.store.get_article("1")).views, 1234)

    async def test_delete_article_then_get_returns_none(self):
        await self.store.delete_article("1")

        self.assertIsNone(await self.store.get_article("1"))

    async def test_delete_article_cascades_comments(self):
        await self.store.delete_article("1")

        self.assertEqual(await self.store.list_comments("1"), [])
        self.assertEqual(await self.store.list_all_comments(), [])
        self.assertEqual((await self.store.get_statistics()).total_comments, 0)

    async def test_delete_missing_article_raises_not_found(self):
        with self.assertRaises(NotFound):
            await self.store.delete_article("404")

    async def test_increment_views_n_times(self):
        for _ in range(5):
            await self.store.increment_article_views("2")

        article = await self.store.get_article("2")
        self.assertEqual(article.views, 892 + 5)
        self.assertEqual(article.updated_at, article.created_at)

    async def test_increment_views_unknown_id_is_noop(self):
        before = await self.store.get_statistics()

        await self.store.increment_article_views("404")

        self.assertEqual(await self.store.get_statistics(), before)

    async def test_latest_articles_is_prefix_of_full_listing(self):
        await self.store.create_article(NEW_ARTICLE)
        full = await self.store.list_articles()

        for limit in (1, 2, 6):
            latest = await self.store.list_latest_articles(limit)
            self.assertLessEqual(len(latest), limit)
            self.assertEqual([a.id for a in latest], [a.id for a in full[:limit]])

    async def test_latest_articles_default_limit(self):
        for _ in range(5):
            await self.store.create_article(NEW_ARTICLE)

        self.assertEqual(len(await self.store.list_latest_articles()), 6)

    async def test_popular_articles_ordered_by_views(self):
        popular = await self.store.list_popular_articles(2)

        self.assertEqual([a.views for a in popular], [1567, 1234])

    async def test_popular_ties_break_newest_first(self):
        older = await self.store.create_article({**NEW_ARTICLE, "title": "Older"})
        newer = await self.store.create_article({**NEW_ARTICLE, "title": "Newer"})

        popular = await self.store.list_popular_articles(5)

        self.assertEqual([a.id for a in popular[-2:]], [newer.id, older.id])

    async def test_limit_must_be_a_whole_number(self):
        for limit in (2.9, True, "1.5"):
            with self.assertRaises(ValidationFailure):
                await self.store.list_latest_articles(limit)

        self.assertEqual(len(await self.store.list_latest_articles("2")), 2)

    async def test_limit_must_be_positive(self):
        with self.assertRaises(ValidationFailure):
            await self.store.list_popular_articles(0)
        with self.assertRaises(ValidationFailure):
            await self.store.list_latest_articles("many")


class MockCommentTests(SimpleTestCase):
    """Comment operations and statistics on the mock store."""

    def setUp(self):
        self.store = make_mock_store()

    async def test_list_comments_newest_first(self):
        comments = await self.store.list_comments("1")

        self.assertEqual([c.id for c in comments], ["2", "1"])

    async def test_add_comment_listed_exactly_once(self):
        comment = await self.store.add_comment("2", "  reader  ", "  Nice summary.  ")

        self.assertEqual(comment.nickname, "reader")
        self.assertEqual(comment.content, "Nice summary.")
        self.assertEqual(comment.created_at, comment.updated_at)
        listed = [c.id for c in await self.store.list_comments("2")]
        self.assertEqual(listed.count(comment.id), 1)

        await self.store.delete_comment(comment.id)
        self.assertNotIn(comment.id, [c.id for c in await self.store.list_comments("2")])

    async def test_add_comment_requires_nickname_and_content(self):
        with self.assertRaises(ValidationFailure) as ctx:
            await self.store.add_comment("1", "   ", "")

        self.assertEqual(set(ctx.exception.errors), {"nickname", "content"})
        self.assertEqual(len(await self.store.list_comments("1")), 2)

    async def test_add_comment_enforces_lengths(self):
        with self.assertRaises(ValidationFailure):
            await self.store.add_comment("1", "n" * 21, "ok")
        with self.assertRaises(ValidationFailure):
            await self.store.add_comment("1", "nick", "c" * 501)

    async def test_add_comment_to_missing_article(self):
        with self.assertRaises(NotFound):
            await self.store.add_comment("404", "nick", "hello")

    async def test_update_comment(self):
        updated = await self.store.update_comment("1", "Edited text")

        self.assertEqual(updated.content, "Edited text")
        self.assertNotEqual(updated.updated_at, updated.created_at)

    async def test_update_comment_rejects_blank_content(self):
        with self.assertRaises(ValidationFailure):
            await self.store.update_comment("1", "   ")

    async def test_update_and_delete_missing_comment(self):
        with self.assertRaises(NotFound):
            await self.store.update_comment("404", "text")
        with self.assertRaises(NotFound):
            await self.store.delete_comment("404")

    async def test_list_all_comments_joins_article_title(self):
        rows = await self.store.list_all_comments()
        article = await self.store.get_article("1")

        self.assertEqual(len(rows), 2)
        self.assertTrue(all(row.article_title == article.title for row in rows))

    async def test_list_all_comments_placeholder_for_missing_article(self):
        # Simulate a row left behind by an external writer.
        self.store._comments["2"].article_id = "gone"

        rows = {row.id: row for row in await self.store.list_all_comments()}

        self.assertEqual(rows["2"].article_title, UNKNOWN_ARTICLE_TITLE)

    async def test_statistics_track_mutations(self):
        stats = await self.store.get_statistics()
        self.assertEqual((stats.total_articles, stats.total_comments), (3, 2))
        self.assertEqual(stats.total_views, 1234 + 892 + 1567)

        await self.store.increment_article_views("3")
        await self.store.add_comment("3", "nick", "hello")
        await self.store.create_article(NEW_ARTICLE)

        stats = await self.store.get_statistics()
        articles = await self.store.list_articles()
        self.assertEqual(stats.total_articles, 4)
        self.assertEqual(stats.total_comments, 3)
        self.assertEqual(stats.total_views, sum(a.views for a in articles))

    async def test_stores_do_not_share_state(self):
        other = make_mock_store()
        await self.store.delete_article("1")

        self.assertIsNotNone(await other.get_article("1"))

    async def test_unseeded_store_is_empty(self):
        empty = make_mock_store(seed=False)

        self.assertEqual(await empty.list_articles(), [])
        stats = await empty.get_statistics()
        self.assertEqual((stats.total_articles, stats.total_comments, stats.total_views), (0, 0, 0))


class MockLatencyTests(SimpleTestCase):
    """Every store call waits ``MOCK_DELAY_MS`` before answering."""

    async def test_default_delay_is_300ms(self):
        store = MockContentStore()

        with mock.patch("articles.stores.mock.asyncio.sleep", new_callable=mock.AsyncMock) as sleep:
            await store.get_statistics()

        sleep.assert_awaited_once_with(0.3)

    async def test_delay_follows_settings(self):
        with self.settings(MOCK_DELAY_MS=50):
            store = MockContentStore()

        with mock.patch("articles.stores.mock.asyncio.sleep", new_callable=mock.AsyncMock) as sleep:
            await store.list_articles()
            await store.increment_article_views("1")

        self.assertEqual(sleep.await_args_list, [mock.call(0.05), mock.call(0.05)])

    async def test_explicit_delay_wins_over_settings(self):
        with self.settings(MOCK_DELAY_MS=50):
            store = MockContentStore(delay_ms=120)

        with mock.patch("articles.stores.mock.asyncio.sleep", new_callable=mock.AsyncMock) as sleep:
            await store.get_article("1")

        sleep.assert_awaited_once_with(0.12)

    async def test_auth_provider_shares_the_delay(self):
        with self.settings(MOCK_DELAY_MS=50):
            provider = MockAuthProvider()

        with mock.patch("authentication.providers.asyncio.sleep", new_callable=mock.AsyncMock) as sleep:
            await provider.authenticate("admin", "admin123")

        sleep.assert_awaited_once_with(0.05)
