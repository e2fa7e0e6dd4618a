import json
import logging
import re
from dataclasses import dataclass
from enum import Enum

import openai
from openai import OpenAI
from pydantic import ValidationError as SchemaError

import config
from errors import ClassifierOutputError, UpstreamClassifierError
from models import BatchAnalysis, ClassifierOutput, VideoMetadata

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a copyright expert analyzing YouTube videos for potential infringement issues."

RUBRIC = """You are an expert copyright-risk analyst for online video platforms. You do NOT make legal determinations. You score and prioritize videos for likely copyright infringement using explicit heuristics, and give practical verification steps and next actions for a rights holder or reviewer.

Original work:
  - original_title: "{original_title}"
  - original_channel_title: "{channel_name}"
  - original_channel_id: not provided
  - original_release_date: not provided

For each video assign a copyright infringement RISK LEVEL: "High", "Medium" or "Low", with a succinct rationale, and rank the videos by descending risk.

HEURISTICS (apply in order, combine into the final risk):
- Channel match: if channelId or channelTitle matches the original channel, the risk is Low (treat as official). Otherwise keep evaluating.
- Exact-title match: a title containing original_title (case-insensitive), or near-exact with the artist's name, adds high-risk weight.
- Reproduction keywords: "lyrics", "official lyrics", "full song", "full track", "official video", "audio" add high-risk weight.
- Transformative hints: "cover", "piano", "tutorial", "play-along", "remix", "inspired by", "shorts", "behind the scenes", "clip", "funny" lower the risk (still Medium if the original audio is likely included).
- Publish date: a non-owner upload close to the official release raises suspicion; very old uploads may be unrelated, treat cautiously.
- Channel type: lyric channels and "official" channels that are not the artist are higher risk; event or news channels are likely permitted (Medium or Low).
- Repetition: several non-owner channels with exact-title uploads raise priority.
- Ambiguity: with insufficient metadata use title and channel only, and mark Medium when unsure.

Do NOT assert that a video is definitely infringing; use "likely", "possible", "probable".

Respond with a single JSON object and nothing else, using exactly these keys:
{{
  "summary": "1-2 sentence overall assessment",
  "ranked_list": [
    {{"videoId": "...", "title": "...", "channel": "...", "publishedAt": "...", "risk": "High", "rationale": ["...", "..."]}}
  ],
  "top_priority": ["videoId1", "videoId2"],
  "checklist": ["Open video and compare audio/duration", "Check description for rights statement", "Check channel About page", "Screenshot evidence", "Check YouTube Content ID/claims if visible"],
  "next_actions": ["Contact rights owner", "Use YouTube Studio -> Copyright -> Submit takedown (if owner)", "Send polite removal request to uploader (template)"],
  "disclaimer": "{disclaimer}"
}}
Include no more than 6 top_priority items."""

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class ParseOutcome(str, Enum):
    DIRECT = "direct"
    EXTRACTED = "extracted"


@dataclass
class ParsedOutput:
    data: dict
    outcome: ParseOutcome


def _strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text.strip())


def _load_object(text: str) -> dict | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_model_output(text: str) -> ParsedOutput:
    """Parse model text as a JSON object.

    Tries the whole (fence-stripped) text first, then the outermost ``{...}``
    span. Raises ClassifierOutputError when neither yields an object.
    """
    cleaned = _strip_fences(text or "")

    data = _load_object(cleaned)
    if data is not None:
        return ParsedOutput(data, ParseOutcome.DIRECT)

    first, last = cleaned.find("{"), cleaned.rfind("}")
    if first != -1 and last > first:
        data = _load_object(cleaned[first:last + 1])
        if data is not None:
            return ParsedOutput(data, ParseOutcome.EXTRACTED)

    raise ClassifierOutputError("Model did not return valid JSON")


def build_prompt(
    batch: list[VideoMetadata],
    user_name: str,
    channel_name: str,
    batch_number: int = 1,
    total_batches: int = 1,
) -> str:
    rubric = RUBRIC.format(
        original_title=f"{user_name} Content",
        channel_name=channel_name,
        disclaimer=config.DEFAULT_DISCLAIMER,
    )
    videos = json.dumps([v.model_dump(by_alias=True) for v in batch], indent=2, ensure_ascii=False)
    return (
        f"{rubric}\n\n"
        f"Here are the search results to analyze (Batch {batch_number} of {total_batches}):\n"
        f"{videos}\n\n"
        "Please provide your analysis in the specified JSON format."
    )


def _build_client(api_key: str, base_url: str = "") -> OpenAI:
    if not base_url:
        return OpenAI(api_key=api_key)
    return OpenAI(
        api_key=api_key,
        base_url=base_url,
        default_headers={"HTTP-Referer": config.APP_URL, "X-Title": config.APP_TITLE},
    )


class RiskClassifier:
    """Classifies one batch of videos with a single chat completion call."""

    def __init__(
        self,
        api_key: str = "",
        model: str = config.OPENAI_MODEL,
        temperature: float = config.OPENAI_TEMPERATURE,
        max_tokens: int = config.OPENAI_MAX_TOKENS,
        base_url: str = config.OPENAI_BASE_URL,
        client: OpenAI | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or _build_client(api_key, base_url)

    def _complete(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.APIError as e:
            raise UpstreamClassifierError(f"OpenAI API error: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ClassifierOutputError("Model returned an empty response")
        return response.choices[0].message.content

    def classify(
        self,
        batch: list[VideoMetadata],
        user_name: str,
        channel_name: str,
        batch_number: int = 1,
        total_batches: int = 1,
    ) -> BatchAnalysis:
        content = self._complete(build_prompt(batch, user_name, channel_name, batch_number, total_batches))

        parsed = parse_model_output(content)
        if parsed.outcome is ParseOutcome.EXTRACTED:
            logger.warning("[BATCH %d/%d] JSON recovered from surrounding text", batch_number, total_batches)

        # Extra keys, including any failure markers the model invents, are dropped.
        try:
            output = ClassifierOutput.model_validate(parsed.data)
        except SchemaError as e:
            raise ClassifierOutputError(f"Model output does not match the analysis schema: {e}") from e
        return output.to_batch()
