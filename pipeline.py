import logging

import config
from ai_analyzer import RiskClassifier
from errors import ValidationError
from merger import merge_analyses
from mock_data import generate_mock_report
from models import Report
from orchestrator import BatchOrchestrator, ProgressCallback
from youtube_api import SearchFetcher

logger = logging.getLogger(__name__)


def validate_request(data) -> tuple[str, str]:
    """Return (user_name, channel_name) from a request body, or raise ValidationError."""
    data = data if isinstance(data, dict) else {}
    user_name = data.get("userName")
    channel_name = data.get("channelName")
    if not isinstance(user_name, str) or not isinstance(channel_name, str):
        raise ValidationError("User name and channel name are required")
    user_name, channel_name = user_name.strip(), channel_name.strip()
    if not user_name or not channel_name:
        raise ValidationError("User name and channel name are required")
    return user_name, channel_name


class LivePipeline:
    """Search, classify in batches, merge."""

    def __init__(self, fetcher: SearchFetcher, orchestrator: BatchOrchestrator):
        self.fetcher = fetcher
        self.orchestrator = orchestrator

    def run(
        self,
        user_name: str,
        channel_name: str,
        on_progress: ProgressCallback | None = None,
    ) -> Report:
        videos = self.fetcher.fetch(user_name, channel_name)
        batch_run = self.orchestrator.run(videos, user_name, channel_name, on_progress=on_progress)
        analysis = merge_analyses(batch_run.analyses, len(videos))

        return Report(
            user_name=user_name,
            query=channel_name,
            total_videos_found=len(videos),
            batches_analyzed=len(batch_run.analyses),
            batches_failed=len(batch_run.failures),
            failed_batch_details=batch_run.failures,
            search_results=videos,
            analysis=analysis,
        )


class MockPipeline:
    """Synthetic data, same report shape as LivePipeline."""

    def __init__(self, batch_size: int = config.BATCH_SIZE):
        self.batch_size = batch_size

    def run(
        self,
        user_name: str,
        channel_name: str,
        on_progress: ProgressCallback | None = None,
    ) -> Report:
        return generate_mock_report(user_name, channel_name, batch_size=self.batch_size)


def build_live_pipeline(
    target_results: int = config.TARGET_RESULTS,
    batch_size: int = config.BATCH_SIZE,
) -> LivePipeline:
    fetcher = SearchFetcher(api_key=config.YOUTUBE_API_KEY, target_results=target_results)
    classifier = RiskClassifier(api_key=config.OPENAI_API_KEY)
    return LivePipeline(fetcher, BatchOrchestrator(classifier, batch_size=batch_size))


def select_pipeline(
    target_results: int = config.TARGET_RESULTS,
    batch_size: int = config.BATCH_SIZE,
    force_mock: bool = False,
) -> LivePipeline | MockPipeline:
    """Pick the pipeline for one request from the credentials currently configured."""
    if force_mock or not config.has_credentials():
        logger.info("Using mock data mode")
        return MockPipeline(batch_size=batch_size)
    return build_live_pipeline(target_results=target_results, batch_size=batch_size)
