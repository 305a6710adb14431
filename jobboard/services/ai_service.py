from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar
import json
import re
import logging

from openai import OpenAI, AzureOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from jobboard.models.job import Job
from jobboard.models.resume import Resume
from jobboard.schemas.ai import ResumeScore, JobMatchItem, SkillGap, ResumeImprovements
from jobboard.services import prompts
from jobboard.utils.config import Config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AIServiceError(Exception):
    """The completion service could not be reached or refused the request."""


class ModelOutputError(AIServiceError):
    """The model replied, but not with JSON of the expected shape."""


class CareerAIService:
    """Resume scoring, job matching, skill-gap and improvement advice backed by a chat model.

    One blocking completion call per operation. No retries: a failed call or an
    unusable reply is raised to the caller.
    """

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(CareerAIService, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        if self._initialized:
            return
        self.config = config or Config.AI_CONFIG
        self.model = self.config["model"]
        self._client = None
        self._initialized = True

    @property
    def client(self):
        # Built on first use so the app starts without AI credentials
        if self._client is None:
            try:
                if self.config.get("azure_endpoint"):
                    self._client = AzureOpenAI(
                        api_version=self.config["api_version"],
                        azure_endpoint=self.config["azure_endpoint"],
                        api_key=self.config["api_key"],
                    )
                else:
                    self._client = OpenAI(api_key=self.config["api_key"])
            except OpenAIError as e:
                logger.error(f"Failed to initialize AI client: {str(e)}")
                raise AIServiceError("AI service is not configured") from e
        return self._client

    def _call_model(self, system_role: str, prompt: str, temperature: float, max_tokens: int) -> str:
        messages = [
            {"role": "system", "content": system_role},
            {"role": "user", "content": prompt},
        ]
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"AI completion error: {str(e)}")
            raise AIServiceError(str(e)) from e

        content = response.choices[0].message.content
        if not content:
            raise ModelOutputError("Empty reply from model")
        return content

    @staticmethod
    def _extract_json(response: str) -> Any:
        text = response.strip()
        fenced = FENCE_PATTERN.match(text)
        if fenced:
            text = fenced.group(1)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"JSON parse error: {str(e)}")
            raise ModelOutputError("Reply is not valid JSON") from e

    @staticmethod
    def _validate(payload: Any, schema: Type[T]) -> T:
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected {schema.__name__} shape: {e.errors()[:3]}")
            raise ModelOutputError(f"Reply does not match {schema.__name__}") from e

    def _ask(self, schema: Type[T], system_role: str, prompt: str, temperature: float, max_tokens: int) -> T:
        reply = self._call_model(system_role, prompt, temperature, max_tokens)
        return self._validate(self._extract_json(reply), schema)

    def score_resume(self, resume: Resume) -> ResumeScore:
        return self._ask(
            ResumeScore,
            prompts.RESUME_ANALYST_ROLE,
            prompts.resume_score_prompt(resume),
            temperature=0.7,
            max_tokens=1000,
        )

    def match_jobs(self, resume: Resume, jobs: List[Job], limit: int = 10) -> List[Tuple[Job, JobMatchItem]]:
        """Rank ``jobs`` for ``resume``; the model refers to jobs by 1-based position in the prompt."""
        if not jobs:
            return []

        reply = self._call_model(
            prompts.JOB_MATCHER_ROLE,
            prompts.job_match_prompt(resume, jobs, limit),
            temperature=0.3,
            max_tokens=2000,
        )
        payload = self._extract_json(reply)
        if isinstance(payload, dict) and isinstance(payload.get("matches"), list):
            payload = payload["matches"]
        if not isinstance(payload, list):
            raise ModelOutputError("Reply is not a list of matches")

        matches = []
        for raw in payload:
            item = self._validate(raw, JobMatchItem)
            if not 1 <= item.job_index <= len(jobs):
                logger.warning(f"Dropping match for unknown job index {item.job_index}")
                continue
            matches.append((jobs[item.job_index - 1], item))
        return matches[:limit]

    def analyze_skill_gap(self, resume: Resume, target_role: str, target_industry: Optional[str] = None) -> SkillGap:
        return self._ask(
            SkillGap,
            prompts.CAREER_COACH_ROLE,
            prompts.skill_gap_prompt(resume, target_role, target_industry),
            temperature=0.5,
            max_tokens=1500,
        )

    def suggest_improvements(self, resume: Resume, target_role: Optional[str] = None) -> ResumeImprovements:
        return self._ask(
            ResumeImprovements,
            prompts.RESUME_WRITER_ROLE,
            prompts.improvement_prompt(resume, target_role),
            temperature=0.6,
            max_tokens=2000,
        )


def get_ai_service() -> CareerAIService:
    return CareerAIService()
