"""
Shared fixtures and fakes.

No test touches the network: the YouTube client, the OpenAI client and
the pacing sleeps are all replaced by the fakes below.
"""

from types import SimpleNamespace

import pytest

import config
from models import BatchAnalysis, RiskEntry, VideoMetadata


def raw_item(i: int, **snippet_overrides) -> dict:
    """A search item shaped like the YouTube Data API v3 search.list response."""
    snippet = {
        "publishedAt": f"2024-02-{i % 28 + 1:02d}T10:00:00Z",
        "channelId": f"UC{i:022d}",
        "title": f"Artist - Song {i} (Official Lyrics)",
        "description": f"Upload number {i}",
        "thumbnails": {"default": {"url": f"https://i.ytimg.com/vi/vid{i}/default.jpg", "width": 120, "height": 90}},
        "channelTitle": f"Lyrics Channel {i}",
        "liveBroadcastContent": "none",
        "publishTime": f"2024-02-{i % 28 + 1:02d}T10:00:00Z",
    }
    snippet.update(snippet_overrides)
    return {
        "kind": "youtube#searchResult",
        "etag": f"etag{i}",
        "id": {"kind": "youtube#video", "videoId": f"vid{i}"},
        "snippet": snippet,
    }


def search_page(start: int, count: int, next_token: str | None = None) -> dict:
    page = {"kind": "youtube#searchListResponse", "items": [raw_item(i) for i in range(start, start + count)]}
    if next_token:
        page["nextPageToken"] = next_token
    return page


class FakeSearchClient:
    """Stands in for googleapiclient's youtube resource: search().list(...).execute()."""

    def __init__(self, pages):
        self.pages = list(pages)
        self.calls: list[dict] = []

    def search(self):
        return self

    def list(self, **kwargs):
        self.calls.append(kwargs)
        return self

    def execute(self):
        page = self.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page


class FakeClassifier:
    """Returns a canned analysis per batch, or raises the exception mapped to that batch."""

    def __init__(self, failures: dict | None = None):
        self.failures = failures or {}
        self.calls: list[tuple[int, int, list[str]]] = []

    def classify(self, batch, user_name, channel_name, batch_number=1, total_batches=1):
        self.calls.append((batch_number, total_batches, [v.video_id for v in batch]))
        if batch_number in self.failures:
            raise self.failures[batch_number]
        return make_batch(
            [(v.video_id, "High" if i == 0 else "Low") for i, v in enumerate(batch)],
            top_priority=[batch[0].video_id],
            checklist=[f"check batch {batch_number}"],
        )


class FakeOpenAI:
    """Minimal chat.completions.create() double returning fixed text or raising."""

    def __init__(self, content=None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.requests: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    def __call__(self, seconds):
        self.delays.append(seconds)


def make_video(i: int, **overrides) -> VideoMetadata:
    fields = {"video_id": f"vid{i}", "title": f"Video {i}", "channel_title": f"Channel {i}"}
    fields.update(overrides)
    return VideoMetadata(**fields)


def make_batch(entries, top_priority=(), checklist=None, next_actions=None, disclaimer="batch disclaimer"):
    """Build a successful BatchAnalysis from (video_id, risk) pairs."""
    return BatchAnalysis(
        summary="batch summary",
        ranked_list=[
            RiskEntry(video_id=video_id, title=f"Title {video_id}", channel="c", risk=risk, rationale=["r"])
            for video_id, risk in entries
        ],
        top_priority=list(top_priority),
        checklist=checklist if checklist is not None else ["check"],
        next_actions=next_actions if next_actions is not None else ["act"],
        disclaimer=disclaimer,
    )


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def no_credentials(monkeypatch):
    monkeypatch.setattr(config, "YOUTUBE_API_KEY", "")
    monkeypatch.setattr(config, "OPENAI_API_KEY", "")


@pytest.fixture
def with_credentials(monkeypatch):
    monkeypatch.setattr(config, "YOUTUBE_API_KEY", "yt-test-key")
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test-key")
