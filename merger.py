import logging
from typing import Sequence

import config
from models import RISK_SEVERITY, BatchAnalysis, FinalAnalysis, RiskLevel

logger = logging.getLogger(__name__)

FLAGGED_QUALIFIER = "Immediate attention recommended for high-risk content."
CLEAR_QUALIFIER = "No immediate high-risk concerns detected."


def _unique(ids, limit: int) -> list[str]:
    seen: dict[str, None] = {}
    for video_id in ids:
        if len(seen) >= limit:
            break
        seen.setdefault(video_id, None)
    return list(seen)


def _summarize(flagged: int) -> str:
    qualifier = FLAGGED_QUALIFIER if flagged > 0 else CLEAR_QUALIFIER
    return f"We found {flagged} videos with possible infringement. {qualifier}"


def merge_analyses(
    analyses: Sequence[BatchAnalysis],
    total_videos: int,
    top_priority_limit: int = config.TOP_PRIORITY_LIMIT,
    default_disclaimer: str = config.DEFAULT_DISCLAIMER,
) -> FinalAnalysis:
    """Combine batch analyses into one report section. Pure and deterministic."""
    logger.info("Combining %d analyses for %d total videos", len(analyses), total_videos)

    entries = [entry for analysis in analyses for entry in analysis.ranked_list]
    # sorted() is stable, so equal risks keep their batch order
    ranked = sorted(entries, key=lambda entry: -RISK_SEVERITY[entry.risk])

    top_priority = _unique(
        (video_id for analysis in analyses for video_id in analysis.top_priority),
        top_priority_limit,
    )

    first_ok = next((a for a in analyses if not a.batch_failed), None)
    flagged = sum(1 for entry in ranked if entry.risk in (RiskLevel.HIGH, RiskLevel.MEDIUM))

    final = FinalAnalysis(
        summary=_summarize(flagged),
        ranked_list=ranked,
        top_priority=top_priority,
        checklist=list(first_ok.checklist) if first_ok else [],
        next_actions=list(first_ok.next_actions) if first_ok else [],
        disclaimer=(first_ok.disclaimer if first_ok else "") or default_disclaimer,
        batch_count=len(analyses),
        failed_batches=sum(1 for a in analyses if a.batch_failed),
    )

    logger.info(
        "Combined analysis: %d ranked items, %d top priority",
        len(final.ranked_list), len(final.top_priority),
    )
    return final
