import logging
import time

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

import config
from errors import NoResultsError, UpstreamSearchError
from models import VideoMetadata

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (HttpError, HttpLib2Error, OSError)


def _build_client(api_key: str):
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


def _describe(error: Exception) -> str:
    return getattr(error, "reason", None) or str(error)


def normalize_item(item: dict) -> VideoMetadata | None:
    """Reshape one raw search item. Missing nested fields become empty values."""
    ident = item.get("id") or {}
    video_id = ident.get("videoId") if isinstance(ident, dict) else None
    if not video_id:
        return None

    snippet = item.get("snippet") or {}
    return VideoMetadata(
        video_id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        channel_title=snippet.get("channelTitle") or "",
        channel_id=snippet.get("channelId") or "",
        published_at=snippet.get("publishedAt") or "",
        thumbnails=snippet.get("thumbnails") or {},
        publish_time=snippet.get("publishTime") or "",
    )


class SearchFetcher:
    """Pages through YouTube search results until the target count or the last page."""

    def __init__(
        self,
        api_key: str = "",
        page_size: int = config.SEARCH_PAGE_SIZE,
        page_delay: float = config.SEARCH_PAGE_DELAY,
        target_results: int = config.TARGET_RESULTS,
        client=None,
        sleep=time.sleep,
    ):
        if not 0 < page_size <= config.MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {config.MAX_PAGE_SIZE}")
        self.api_key = api_key
        self.page_size = page_size
        self.page_delay = page_delay
        self.target_results = target_results
        self._client = client
        self._sleep = sleep

    @property
    def client(self):
        if self._client is None:
            self._client = _build_client(self.api_key)
        return self._client

    def _search_page(self, query: str, max_results: int, page_token: str | None) -> dict:
        return self.client.search().list(
            part="snippet",
            q=query,
            type="video",
            maxResults=max_results,
            pageToken=page_token,
        ).execute()

    def fetch(self, user_name: str, channel_name: str, target: int | None = None) -> list[VideoMetadata]:
        target = target or self.target_results
        query = f"{user_name} {channel_name}"
        videos: list[VideoMetadata] = []
        seen: set[str] = set()
        page_token = None
        page = 0

        logger.info("Searching YouTube for '%s' (target %d videos)", query, target)

        while len(videos) < target:
            if page:
                self._sleep(self.page_delay)
            page += 1

            try:
                response = self._search_page(query, min(self.page_size, target - len(videos)), page_token)
            except _TRANSPORT_ERRORS as e:
                if page == 1:
                    logger.error("YouTube API error: %s", _describe(e))
                    raise UpstreamSearchError(f"YouTube API error: {_describe(e)}") from e
                logger.warning(
                    "[PAGE %d] request failed, keeping %d videos already found: %s",
                    page, len(videos), _describe(e),
                )
                break

            retrieved = 0
            for item in response.get("items") or []:
                video = normalize_item(item)
                if video is None or video.video_id in seen:
                    continue
                seen.add(video.video_id)
                videos.append(video)
                retrieved += 1

            logger.info("[PAGE %d] Retrieved %d videos (Total: %d)", page, retrieved, len(videos))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        if not videos:
            logger.info("No videos found for '%s'", query)
            raise NoResultsError()

        logger.info("Retrieved %d videos across %d pages", len(videos), page)
        return videos[:target]
