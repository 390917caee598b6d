"""Seed the database with the sample articles, comments and admin profile."""

from django.conf import settings
from django.core.management.base import BaseCommand

from articles.models import Article, Comment
from articles.seed import SAMPLE_ARTICLES, SAMPLE_COMMENTS
from authentication.managers import UserManager
from authentication.models import User
from authentication.providers import MOCK_ADMIN_PASSWORD, MOCK_ADMIN_USERNAME


def create_admin_profile() -> User:
    """Create the ``admin`` account (role admin) if it does not exist yet."""

    admin, _ = User.objects.get_or_create(
        username=MOCK_ADMIN_USERNAME,
        defaults={
            "email": f"{MOCK_ADMIN_USERNAME}@{settings.AUTH_EMAIL_DOMAIN}",
            "role": User.Role.ADMIN,
            "password_hash": UserManager.hash_password(MOCK_ADMIN_PASSWORD),
        },
    )
    return admin


def create_sample_content() -> dict[str, Article]:
    """Insert the sample rows, keyed by their sample id.

    Sample ids are small integers; the table uses UUIDs, so the returned map
    is what ties the sample comments to their new article rows. Articles are
    matched on title to keep reruns idempotent.
    """

    articles: dict[str, Article] = {}
    for row in SAMPLE_ARTICLES:
        fields = {key: value for key, value in row.items() if key not in ("id", "title")}
        article, _ = Article.objects.get_or_create(title=row["title"], defaults=fields)
        articles[row["id"]] = article

    for row in SAMPLE_COMMENTS:
        fields = {key: value for key, value in row.items() if key not in ("id", "article_id", "content")}
        Comment.objects.get_or_create(
            article=articles[row["article_id"]],
            content=row["content"],
            defaults=fields,
        )
    return articles


class Command(BaseCommand):
    """Management command to seed sample content and the admin account."""

    help = (
        "Seed the sample articles, comments and the admin account. "
        "Use --reset to remove previously seeded rows first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the seeded articles (with their comments) and the admin account before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding content...")
        create_admin_profile()
        articles = create_sample_content()
        self.stdout.write(self.style.SUCCESS(f"Content seed completed ({len(articles)} articles)."))

    def _reset_seeded_data(self) -> None:
        """Remove the sample articles and the admin account.

        Only rows created by this command are touched; comments go with their
        articles through the cascading foreign key.
        """
        self.stdout.write("Resetting previously seeded content...")
        Article.objects.filter(title__in=[row["title"] for row in SAMPLE_ARTICLES]).delete()
        User.objects.filter(username=MOCK_ADMIN_USERNAME).delete()
        self.stdout.write(self.style.WARNING("Seeded content cleared."))
