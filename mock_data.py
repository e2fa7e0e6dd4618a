"""Synthetic reports for running without API credentials.

The mock builds one synthetic analysis per batch and hands them to the real
merger, so its report has exactly the shape of a live one.
"""

import logging
from datetime import datetime, timedelta, timezone

import config
from merger import merge_analyses
from models import BatchAnalysis, Report, RiskEntry, RiskLevel, VideoMetadata
from orchestrator import split_batches

logger = logging.getLogger(__name__)

MOCK_VIDEO_COUNT = 100
OFFICIAL_EVERY = 5
REFERENCE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

# Risk by position within a batch of 10; positions 5 and 10 are official uploads.
_BATCH_PATTERN = "HMMLLHMLLL"
_RISK_CODES = {"H": RiskLevel.HIGH, "M": RiskLevel.MEDIUM, "L": RiskLevel.LOW}

_RATIONALE = {
    RiskLevel.HIGH: ["Exact title match with original content", "Uploaded by unauthorized channel"],
    RiskLevel.MEDIUM: ["Possible infringement", "Requires manual verification"],
    RiskLevel.LOW: ["May be transformative content", "No strong reproduction signals"],
}
_OFFICIAL_RATIONALE = ["Official channel content", "No signs of infringement"]

MOCK_CHECKLIST = [
    "Open video and compare audio/duration",
    "Check description for rights statement",
    "Check channel About page",
    "Screenshot evidence",
    "Check YouTube Content ID/claims if visible",
]
MOCK_NEXT_ACTIONS = [
    "Contact rights owner",
    "Use YouTube Studio -> Copyright -> Submit takedown (if owner)",
    "Send polite removal request to uploader (template)",
]


def _timestamp(days_ago: int) -> str:
    return (REFERENCE_TIME - timedelta(days=days_ago)).strftime("%Y-%m-%dT%H:%M:%SZ")


def mock_videos(user_name: str, channel_name: str, count: int = MOCK_VIDEO_COUNT) -> list[VideoMetadata]:
    videos = []
    for i in range(1, count + 1):
        videos.append(VideoMetadata(
            video_id=f"mock_video_{i}",
            title=f"{user_name} - {channel_name} Content {i}",
            description=f"This is a description for {user_name} {channel_name} video {i}",
            channel_title=channel_name if i % OFFICIAL_EVERY == 0 else f"Other Channel {i}",
            channel_id=f"channel_{i}",
            published_at=_timestamp(i),
            thumbnails={
                "default": {
                    "url": f"https://via.placeholder.com/120x90.png?text=Thumbnail+{i}",
                    "width": 120,
                    "height": 90,
                }
            },
            publish_time=_timestamp(i),
        ))
    return videos


def _mock_entry(video: VideoMetadata, position: int, channel_name: str) -> RiskEntry:
    official = video.channel_title == channel_name
    risk = RiskLevel.LOW if official else _RISK_CODES[_BATCH_PATTERN[position % len(_BATCH_PATTERN)]]
    return RiskEntry(
        video_id=video.video_id,
        title=video.title,
        channel=video.channel_title,
        published_at=video.published_at,
        risk=risk,
        rationale=_OFFICIAL_RATIONALE if official else _RATIONALE[risk],
    )


def _mock_batch(batch: list[VideoMetadata], channel_name: str) -> BatchAnalysis:
    entries = [_mock_entry(video, pos, channel_name) for pos, video in enumerate(batch)]
    return BatchAnalysis(
        summary=f"Mock analysis of {len(batch)} videos.",
        ranked_list=entries,
        top_priority=[e.video_id for e in entries if e.risk is RiskLevel.HIGH],
        checklist=MOCK_CHECKLIST,
        next_actions=MOCK_NEXT_ACTIONS,
        disclaimer=config.DEFAULT_DISCLAIMER,
    )


def generate_mock_report(
    user_name: str,
    channel_name: str,
    batch_size: int = config.BATCH_SIZE,
) -> Report:
    logger.info("Generating mock results for '%s' / '%s'", user_name, channel_name)

    videos = mock_videos(user_name, channel_name)
    analyses = [_mock_batch(batch, channel_name) for batch in split_batches(videos, batch_size)]

    return Report(
        user_name=user_name,
        query=channel_name,
        total_videos_found=len(videos),
        batches_analyzed=len(analyses),
        batches_failed=0,
        failed_batch_details=[],
        search_results=videos,
        analysis=merge_analyses(analyses, len(videos)),
    )
