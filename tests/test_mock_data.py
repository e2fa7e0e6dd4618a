"""Tests for mock_data.py - the synthetic report used without API keys."""

from mock_data import MOCK_VIDEO_COUNT, generate_mock_report, mock_videos
from models import RiskLevel


def test_report_shape():
    report = generate_mock_report("Artist", "ArtistOfficial")

    assert report.user_name == "Artist"
    assert report.query == "ArtistOfficial"
    assert report.total_videos_found == MOCK_VIDEO_COUNT == 100
    assert report.batches_analyzed == 10
    assert report.batches_failed == 0
    assert report.failed_batch_details == []
    assert len(report.search_results) == 100
    assert report.analysis.batch_count == 10
    assert report.analysis.failed_batches == 0


def test_every_fifth_video_is_official():
    videos = mock_videos("Artist", "ArtistOfficial")

    official = [v.video_id for v in videos if v.channel_title == "ArtistOfficial"]

    assert official == [f"mock_video_{i}" for i in range(5, 101, 5)]


def test_official_uploads_are_low_risk():
    report = generate_mock_report("Artist", "ArtistOfficial")

    for entry in report.analysis.ranked_list:
        if entry.channel == "ArtistOfficial":
            assert entry.risk is RiskLevel.LOW


def test_analysis_invariants():
    report = generate_mock_report("Artist", "ArtistOfficial")
    analysis = report.analysis

    assert len(analysis.ranked_list) == 100
    assert all(e.risk in set(RiskLevel) for e in analysis.ranked_list)
    assert len(analysis.top_priority) <= 10
    assert len(set(analysis.top_priority)) == len(analysis.top_priority)
    assert analysis.checklist
    assert analysis.next_actions
    assert analysis.disclaimer


def test_deterministic():
    first = generate_mock_report("Artist", "ArtistOfficial").to_payload()
    second = generate_mock_report("Artist", "ArtistOfficial").to_payload()

    assert first == second


def test_payload_keys_match_live_reports():
    payload = generate_mock_report("Artist", "ArtistOfficial").to_payload()

    assert set(payload) == {
        "userName", "query", "totalVideosFound", "batchesAnalyzed",
        "batchesFailed", "failedBatchDetails", "searchResults", "analysis",
    }
    assert set(payload["analysis"]) == {
        "summary", "ranked_list", "top_priority", "checklist",
        "next_actions", "disclaimer", "batch_count", "failed_batches",
    }
    assert set(payload["analysis"]["ranked_list"][0]) == {
        "videoId", "title", "channel", "publishedAt", "risk", "rationale",
    }
