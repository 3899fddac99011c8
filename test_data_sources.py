import unittest
from datetime import datetime
from types import SimpleNamespace
from unittest import mock

import pytz
import requests
from github import GithubException

from config import GlobalConfig
from context import RunContext
from data_sources.factory import get_data_source
from data_sources.github_events import GitHubEventsSource
from data_sources.github_search import GitHubSearchSource
from errors import AuthenticationError, CollectionError, ConfigError


def utc(hour, day=1):
    return datetime(2024, 1, day, hour, 0, 0, tzinfo=pytz.utc)


def push_event(created_at, **payload):
    return SimpleNamespace(
        type="PushEvent",
        payload=payload,
        created_at=created_at,
        repo=SimpleNamespace(name="octocat/hello"),
    )


def search_result(date):
    return SimpleNamespace(sha="abc1234", commit=SimpleNamespace(author=SimpleNamespace(date=date)))


def paginated(pages):
    """模拟 PyGithub PaginatedList.get_page (页码从 0 开始)"""
    plist = mock.MagicMock()
    plist.get_page.side_effect = lambda i: pages[i] if i < len(pages) else []
    return plist


def make_context(username="", **config):
    cfg = GlobalConfig(GIST_TOKEN="tok", GIST_ID="gist", **config)
    return RunContext(username=username, dry_run=False, global_config=cfg)


def make_client(events_pages=None, login="octocat"):
    client = mock.MagicMock()
    auth_user = SimpleNamespace(login=login)
    named_user = mock.MagicMock()
    named_user.get_events.return_value = paginated(events_pages or [])

    def get_user(login=None):
        return auth_user if login is None else named_user

    client.get_user.side_effect = get_user
    client.named_user = named_user
    return client


class TestEventsSource(unittest.TestCase):

    def test_buckets_in_shanghai_time(self):
        # UTC 00/05/11/18 -> 北京时间 08/13/19/02
        pages = [
            [push_event(utc(0), commits=[{}, {}]), push_event(utc(5), size=3)],
            [push_event(utc(11)), push_event(utc(18), distinct_size=4)],
        ]
        client = make_client(pages)
        source = GitHubEventsSource(make_context(), client)
        stats = source.collect()

        self.assertEqual(
            (stats.morning, stats.daytime, stats.evening, stats.night), (2, 3, 1, 4)
        )
        self.assertEqual(stats.total, 10)
        self.assertEqual(source.push_event_count, 4)

    def test_stops_on_empty_page(self):
        client = make_client([[push_event(utc(1))]])
        source = GitHubEventsSource(make_context(MAX_PAGES=3), client)
        source.collect()
        events = client.named_user.get_events.return_value
        self.assertEqual(events.get_page.call_count, 2)

    def test_page_limit(self):
        pages = [[push_event(utc(1))] for _ in range(5)]
        client = make_client(pages)
        stats = GitHubEventsSource(make_context(MAX_PAGES=3), client).collect()
        self.assertEqual(stats.total, 3)

    def test_ignores_other_events_and_bad_timestamps(self):
        pages = [
            [
                SimpleNamespace(type="WatchEvent", payload={}, created_at=utc(1)),
                push_event(None, size=2),
                push_event("2024-01-01T23:30:00Z", size=2),
            ]
        ]
        stats = GitHubEventsSource(make_context(), make_client(pages)).collect()
        # 23:30 UTC -> 07:30 北京时间
        self.assertEqual(stats.morning, 2)
        self.assertEqual(stats.total, 2)

    def test_username_override(self):
        client = make_client([])
        source = GitHubEventsSource(make_context(username="torvalds"), client)
        source.collect()
        client.get_user.assert_any_call("torvalds")
        self.assertEqual(source.username, "torvalds")

    def test_defaults_to_authenticated_login(self):
        client = make_client([])
        source = GitHubEventsSource(make_context(), client)
        self.assertEqual(source.authenticate(), "octocat")

    def test_auth_failure_is_fatal(self):
        client = mock.MagicMock()
        client.get_user.side_effect = GithubException(401, {"message": "Bad credentials"}, None)
        with self.assertRaises(AuthenticationError):
            GitHubEventsSource(make_context(), client).collect()

    def test_forbidden_page_is_auth_failure(self):
        client = make_client()
        events = mock.MagicMock()
        events.get_page.side_effect = GithubException(403, {"message": "Forbidden"}, None)
        client.named_user.get_events.return_value = events
        with self.assertRaises(AuthenticationError):
            GitHubEventsSource(make_context(), client).collect()

    def test_api_failure_is_not_retried(self):
        client = make_client()
        events = mock.MagicMock()
        events.get_page.side_effect = GithubException(502, {"message": "Bad Gateway"}, None)
        client.named_user.get_events.return_value = events
        with self.assertRaises(CollectionError):
            GitHubEventsSource(make_context(), client).collect()
        self.assertEqual(events.get_page.call_count, 1)

    def test_connection_error_while_paging(self):
        client = make_client()
        events = mock.MagicMock()
        events.get_page.side_effect = requests.ConnectionError("connection reset")
        client.named_user.get_events.return_value = events
        with self.assertRaises(CollectionError):
            GitHubEventsSource(make_context(), client).collect()

    def test_timeout_while_authenticating(self):
        client = mock.MagicMock()
        client.get_user.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(CollectionError):
            GitHubEventsSource(make_context(), client).authenticate()

    def test_warns_when_nothing_fetched(self):
        with self.assertLogs("data_sources.base", level="WARNING") as logs:
            GitHubEventsSource(make_context(), make_client([])).collect()
        self.assertTrue(any("All repositories" in line for line in logs.output))


class TestSearchSource(unittest.TestCase):

    def make_client(self, pages):
        client = make_client()
        client.search_commits.return_value = paginated(pages)
        return client

    def test_each_result_counts_once(self):
        pages = [[search_result(utc(0)), search_result(utc(0))], [search_result(utc(12))]]
        client = self.make_client(pages)
        source = GitHubSearchSource(make_context(PER_PAGE=2), client)
        stats = source.collect()
        self.assertEqual(stats.morning, 2)
        self.assertEqual(stats.evening, 1)
        self.assertEqual(stats.total, 3)

    def test_short_page_ends_pagination(self):
        pages = [[search_result(utc(0))], [search_result(utc(0))]]
        client = self.make_client(pages)
        stats = GitHubSearchSource(make_context(PER_PAGE=2, MAX_PAGES=3), client).collect()
        self.assertEqual(stats.total, 1)
        self.assertEqual(client.search_commits.return_value.get_page.call_count, 1)

    def test_query(self):
        client = self.make_client([])
        now = datetime(2024, 3, 31, 20, 0, 0, tzinfo=pytz.utc)
        source = GitHubSearchSource(make_context(SEARCH_DAYS=90), client, now=now)
        source.collect()
        kwargs = client.search_commits.call_args.kwargs
        self.assertEqual(kwargs["query"], "author:octocat")
        self.assertEqual(kwargs["sort"], "committer-date")
        # 北京时间 2024-04-01 往前 90 天
        self.assertEqual(kwargs["committer-date"], ">=2024-01-02")

    def test_record_without_date_is_skipped(self):
        pages = [[SimpleNamespace(sha="x", commit=None), search_result(utc(20))]]
        stats = GitHubSearchSource(make_context(), self.make_client(pages)).collect()
        self.assertEqual(stats.night, 1)
        self.assertEqual(stats.total, 1)


class TestFactory(unittest.TestCase):

    def test_selects_source_by_config(self):
        client = mock.MagicMock()
        self.assertIsInstance(get_data_source(make_context(), client), GitHubEventsSource)
        self.assertIsInstance(
            get_data_source(make_context(COMMIT_SOURCE="search"), client), GitHubSearchSource
        )

    def test_unknown_source(self):
        with self.assertRaises(ConfigError):
            get_data_source(make_context(COMMIT_SOURCE="rss"), mock.MagicMock())


if __name__ == "__main__":
    unittest.main()
