from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

FAILED_BATCH_DISCLAIMER = "Analysis incomplete due to API error"


class _CamelModel(BaseModel):
    # Wire format is camelCase; Python code uses the snake_case names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RiskLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


RISK_SEVERITY: dict[RiskLevel, int] = {
    RiskLevel.HIGH: 3,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 1,
}


class VideoMetadata(_CamelModel):
    model_config = ConfigDict(frozen=True)

    video_id: str = Field(min_length=1)
    title: str = ""
    description: str = ""
    channel_title: str = ""
    channel_id: str = ""
    published_at: str = ""
    thumbnails: dict = {}
    publish_time: str = ""


class RiskEntry(_CamelModel):
    video_id: str = Field(min_length=1)
    title: str = ""
    channel: str = ""
    published_at: str = ""
    risk: RiskLevel
    rationale: list[str] = []

    @field_validator("risk", mode="before")
    @classmethod
    def _normalize_risk(cls, value):
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @field_validator("rationale", mode="before")
    @classmethod
    def _wrap_rationale(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class AnalysisBase(BaseModel):
    summary: str = ""
    ranked_list: list[RiskEntry] = []
    top_priority: list[str] = []
    checklist: list[str] = []
    next_actions: list[str] = []
    disclaimer: str = ""


class BatchAnalysis(AnalysisBase):
    batch_failed: bool = False
    batch_number: int | None = None

    @model_validator(mode="after")
    def _failed_batches_are_empty(self):
        if self.batch_failed and (
            self.ranked_list or self.top_priority or self.checklist or self.next_actions
        ):
            raise ValueError("a failed batch cannot carry analysis results")
        return self

    @classmethod
    def failed(cls, batch_number: int) -> "BatchAnalysis":
        return cls(
            summary=f"Analysis failed for batch {batch_number}",
            disclaimer=FAILED_BATCH_DISCLAIMER,
            batch_failed=True,
            batch_number=batch_number,
        )


class ClassifierOutput(BaseModel):
    """What the model must return for one batch; every key is required."""

    summary: str
    ranked_list: list[RiskEntry]
    top_priority: list[str]
    checklist: list[str]
    next_actions: list[str]
    disclaimer: str

    def to_batch(self) -> BatchAnalysis:
        return BatchAnalysis(**dict(self))


class FinalAnalysis(AnalysisBase):
    batch_count: int = 0
    failed_batches: int = 0


class FailedBatch(_CamelModel):
    batch_number: int
    error: str
    videos_in_batch: int


class Report(_CamelModel):
    user_name: str
    query: str
    total_videos_found: int
    batches_analyzed: int
    batches_failed: int = 0
    failed_batch_details: list[FailedBatch] = []
    search_results: list[VideoMetadata] = []
    analysis: FinalAnalysis

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
