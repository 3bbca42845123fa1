"""
Tests for the shortening service and redirect resolver, without HTTP.
"""
import pytest

from shortlink_app.exceptions import (
    CodeExhaustionError,
    ConflictError,
    InvalidURLError,
    MissingURLError,
    ShortCodeNotFoundError,
    StoreError,
)
from shortlink_app.models.url import URL
from shortlink_app.services.redirect_service import RedirectResolver
from shortlink_app.services.short_code_strategies import BASE62_CHARS, RandomShortCodeStrategy
from shortlink_app.services.url_service import URLService


class TestShorten:

    def test_creates_record(self, url_service, db_session):
        url, created = url_service.shorten("https://example.com/a")

        assert created is True
        assert url.original_url == "https://example.com/a"
        assert url.visits == 0
        assert len(url.short_code) == 7
        assert all(ch in BASE62_CHARS for ch in url.short_code)
        assert db_session.query(URL).count() == 1

    def test_original_url_stored_verbatim(self, url_service):
        """No normalisation: no trailing slash added, case kept"""
        url, _ = url_service.shorten("https://Example.com")

        assert url.original_url == "https://Example.com"

    def test_idempotent_per_url(self, url_service, db_session):
        first, first_created = url_service.shorten("https://example.com/a")
        second, second_created = url_service.shorten("https://example.com/a")

        assert first_created is True
        assert second_created is False
        assert second.short_code == first.short_code
        assert second.id == first.id
        assert db_session.query(URL).count() == 1

    def test_reshorten_has_no_visit_side_effect(self, url_service, resolver):
        url, _ = url_service.shorten("https://example.com/a")
        resolver.resolve(url.short_code)

        again, created = url_service.shorten("https://example.com/a")

        assert created is False
        assert again.visits == 1

    def test_different_urls_get_different_codes(self, url_service):
        a, _ = url_service.shorten("https://example.com/a")
        b, _ = url_service.shorten("https://example.com/b")

        assert a.short_code != b.short_code

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, url_service, db_session, value):
        with pytest.raises(MissingURLError):
            url_service.shorten(value)
        assert db_session.query(URL).count() == 0

    @pytest.mark.parametrize("value", ["not a url", "ftp://example.com", "example.com"])
    def test_invalid(self, url_service, db_session, value):
        with pytest.raises(InvalidURLError):
            url_service.shorten(value)
        assert db_session.query(URL).count() == 0

    def test_uses_configured_length(self, store):
        service = URLService(store, strategy=RandomShortCodeStrategy(length=10))
        url, _ = service.shorten("https://example.com/a")

        assert len(url.short_code) == 10


class TestCollisions:

    def test_retries_on_collision(self, store, fixed_strategy):
        store.insert("https://example.com/taken", "aaaaaaa")
        strategy = fixed_strategy("aaaaaaa", "aaaaaaa", "bbbbbbb")
        service = URLService(store, strategy=strategy)

        url, created = service.shorten("https://example.com/new")

        assert created is True
        assert url.short_code == "bbbbbbb"
        assert strategy.calls == 3

    def test_exhaustion_after_bound(self, store, db_session, fixed_strategy):
        store.insert("https://example.com/taken", "aaaaaaa")
        strategy = fixed_strategy("aaaaaaa")
        service = URLService(store, strategy=strategy, max_attempts=10)

        with pytest.raises(CodeExhaustionError) as exc_info:
            service.shorten("https://example.com/new")

        assert exc_info.value.attempts == 10
        assert strategy.calls == 10
        assert db_session.query(URL).count() == 1

    def test_default_bound_is_ten(self, url_service):
        assert url_service.max_attempts == 10


class RacingStore:
    """
    Wraps a store to simulate another request inserting between
    the duplicate check and our insert.
    """

    def __init__(self, store, winner_url=None, winner_code=None):
        self.store = store
        self.winner_url = winner_url
        self.winner_code = winner_code
        self.raced = False

    def _race(self):
        if not self.raced:
            self.raced = True
            self.store.insert(self.winner_url, self.winner_code)

    def find_by_original_url(self, original_url):
        return self.store.find_by_original_url(original_url)

    def find_by_code(self, short_code):
        result = self.store.find_by_code(short_code)
        self._race()
        return result

    def insert(self, original_url, short_code):
        return self.store.insert(original_url, short_code)

    def increment_visits(self, url_id):
        return self.store.increment_visits(url_id)

    def list_all(self):
        return self.store.list_all()


class TestReadAfterConflict:

    def test_same_url_inserted_concurrently(self, store, db_session, fixed_strategy):
        racing = RacingStore(store, winner_url="https://example.com/a", winner_code="winner1")
        service = URLService(racing, strategy=fixed_strategy("loser12"))

        url, created = service.shorten("https://example.com/a")

        assert created is False
        assert url.short_code == "winner1"
        assert db_session.query(URL).count() == 1

    def test_code_taken_concurrently_retries(self, store, db_session, fixed_strategy):
        racing = RacingStore(store, winner_url="https://example.com/other", winner_code="aaaaaaa")
        strategy = fixed_strategy("aaaaaaa", "bbbbbbb")
        service = URLService(racing, strategy=strategy)

        url, created = service.shorten("https://example.com/a")

        assert created is True
        assert url.short_code == "bbbbbbb"
        assert db_session.query(URL).count() == 2


class TestResolve:

    def test_round_trip(self, url_service, resolver):
        url, _ = url_service.shorten("https://example.com/some/path?x=1")

        assert resolver.resolve(url.short_code) == "https://example.com/some/path?x=1"

    def test_round_trip_very_long_url(self, url_service, resolver):
        long_url = "https://example.com/" + "a" * 3000
        url, created = url_service.shorten(long_url)

        assert created is True
        assert resolver.resolve(url.short_code) == long_url

    def test_unknown_code(self, resolver):
        with pytest.raises(ShortCodeNotFoundError) as exc_info:
            resolver.resolve("zzzzzzz")
        assert exc_info.value.short_code == "zzzzzzz"

    def test_each_resolve_counts_once(self, url_service, resolver, store):
        url, _ = url_service.shorten("https://example.com/a")
        code = url.short_code

        for _ in range(5):
            resolver.resolve(code)

        assert store.find_by_code(code).visits == 5

    def test_increment_failure_still_redirects(self, url_service, store, monkeypatch):
        url, _ = url_service.shorten("https://example.com/a")
        code = url.short_code

        def broken_increment(url_id):
            raise StoreError("increment_visits failed")

        monkeypatch.setattr(store, "increment_visits", broken_increment)
        resolver = RedirectResolver(store)

        assert resolver.resolve(code) == "https://example.com/a"

    def test_lookup_failure_propagates(self, store, monkeypatch):
        def broken_find(short_code):
            raise StoreError("find_by_code failed")

        monkeypatch.setattr(store, "find_by_code", broken_find)

        with pytest.raises(StoreError):
            RedirectResolver(store).resolve("abc1234")


class TestListUrls:

    def test_newest_first(self, url_service):
        url_service.shorten("https://example.com/a")
        url_service.shorten("https://example.com/b")

        urls = url_service.list_urls()

        assert [u.original_url for u in urls] == ["https://example.com/b", "https://example.com/a"]


def test_conflict_error_is_not_surfaced_as_store_error():
    assert not issubclass(ConflictError, StoreError)
