"""
Lesson Provider Module

Builds the lesson shown on the teaching screen. The template provider returns a
fixed three-step lesson; the Gemini provider asks a Google Generative AI model
for a lesson and falls back to the template whenever the model misbehaves.
"""

import json
import logging
import re
from typing import Dict, List, Optional, Protocol
from dataclasses import dataclass, field

import google.generativeai as genai
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from student_profile import StudentRecord

logger = logging.getLogger(__name__)

LESSON_STEP_COUNT = 3


@dataclass(frozen=True)
class LessonStep:
    """One unit of a lesson"""
    id: int
    title: str
    explanation: str
    example: Optional[str] = None
    quick_check: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Lesson:
    """A lesson with its objectives and ordered steps"""
    title: str
    objectives: List[str]
    steps: List[LessonStep]


class LessonProvider(Protocol):
    def build_lesson(self, record: StudentRecord) -> Lesson:
        ...


class TemplateLessonProvider:
    """Deterministic lesson built from a fixed template"""

    def build_lesson(self, record: StudentRecord) -> Lesson:
        """Build the three-step template lesson for the student's topic"""
        topic = record.topic
        return Lesson(
            title=f"Understanding {topic}",
            objectives=[
                f"Define and explain {topic}",
                "Apply concepts through practical examples",
                "Solve related problems step by step",
            ],
            steps=[
                LessonStep(
                    id=1,
                    title="Introduction to the Concept",
                    explanation=(
                        f"Let me explain {topic} in simple terms that are perfect "
                        f"for {record.class_level} level."
                    ),
                    example="Here's a real-world example that will help you understand better...",
                    quick_check=[
                        "What does this concept mean in your own words?",
                        "Can you think of an example from daily life?",
                        "Why is this important to learn?",
                    ],
                ),
                LessonStep(
                    id=2,
                    title="Step-by-Step Breakdown",
                    explanation="Now let's break down the concept into smaller, manageable parts.",
                    example="Follow along as I demonstrate each step...",
                    quick_check=[
                        "What is the first step in solving this?",
                        "Why do we do this step?",
                        "What happens if we skip this step?",
                    ],
                ),
                LessonStep(
                    id=3,
                    title="Practice Together",
                    explanation="Let's work through some examples together to reinforce your understanding.",
                    example="Try this problem with me...",
                    quick_check=[
                        "Can you solve this similar problem?",
                        "What strategy would you use here?",
                        "How confident do you feel about this topic now?",
                    ],
                ),
            ],
        )


class LessonFormatError(ValueError):
    """Raised when model output cannot be turned into a lesson"""


class StepPayload(BaseModel):
    """Schema for one step of a model-generated lesson"""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    explanation: str = Field(min_length=1)
    example: Optional[str] = None
    quick_check: List[str] = Field(default_factory=list)


class LessonPayload(BaseModel):
    """Schema for a model-generated lesson"""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = None
    objectives: List[str] = Field(default_factory=list)
    steps: List[StepPayload] = Field(min_length=LESSON_STEP_COUNT, max_length=LESSON_STEP_COUNT)


FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$")


def _extract_json(text: str) -> Dict:
    """Pull the first JSON object out of a model reply"""
    text = FENCE_PATTERN.sub("", text.strip())

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            raise LessonFormatError("No JSON object in model output")
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise LessonFormatError(f"Invalid JSON in model output: {e}") from e


def parse_lesson(payload: Dict, topic: str) -> Lesson:
    """Validate a lesson payload and convert it into a Lesson.

    Raises pydantic.ValidationError when the payload does not match
    LessonPayload, including any step count other than LESSON_STEP_COUNT.
    """
    parsed = LessonPayload.model_validate(payload)
    return Lesson(
        title=parsed.title or f"Understanding {topic}",
        objectives=[o for o in parsed.objectives if o],
        steps=[
            LessonStep(
                id=idx,
                title=step.title,
                explanation=step.explanation,
                example=step.example or None,
                quick_check=[c for c in step.quick_check if c],
            )
            for idx, step in enumerate(parsed.steps, start=1)
        ],
    )


class GeminiLessonProvider:
    """Lesson provider backed by a Google Generative AI model"""

    STEP_COUNT = LESSON_STEP_COUNT

    def __init__(self, genai_model, fallback: Optional[LessonProvider] = None):
        self.genai_model = genai_model
        self.fallback = fallback or TemplateLessonProvider()

    def _build_prompt(self, record: StudentRecord) -> str:
        return f"""You are Mr. Matthew Olushola, a patient Nigerian classroom teacher.
Prepare a short lesson for a {record.class_label} student on the topic "{record.topic}" in {record.subject}.
Write every field in {record.language}.

Return ONLY a JSON object with this shape:
{{
  "title": "lesson title",
  "objectives": ["three learning objectives"],
  "steps": [
    {{"title": "step title", "explanation": "plain explanation", "example": "worked example", "quick_check": ["three short questions"]}}
  ]
}}
Use exactly {self.STEP_COUNT} steps: introduce the concept, break it down step by step, then practise together."""

    def build_lesson(self, record: StudentRecord) -> Lesson:
        """Ask the model for a lesson, falling back to the template on failure"""
        try:
            response = self.genai_model.generate_content(self._build_prompt(record))
            model_text = getattr(response, "text", None) or str(response)
        except Exception as e:
            logger.warning(f"Lesson generation failed, using template lesson: {e}")
            return self.fallback.build_lesson(record)

        try:
            lesson = parse_lesson(_extract_json(model_text), record.topic)
        except (LessonFormatError, ValidationError) as e:
            logger.warning(f"Unusable lesson from model, using template lesson: {e}")
            return self.fallback.build_lesson(record)

        logger.info(f"Generated lesson '{lesson.title}' with {len(lesson.steps)} steps")
        return lesson


def build_lesson_provider(settings) -> LessonProvider:
    """Select the lesson provider for the current settings"""
    if settings.use_ai_lessons and settings.google_ai_api_key:
        genai.configure(api_key=settings.google_ai_api_key)
        logger.info(f"Using Gemini lesson provider ({settings.gemini_model})")
        return GeminiLessonProvider(genai.GenerativeModel(settings.gemini_model))

    if settings.use_ai_lessons:
        logger.warning("USE_AI_LESSONS is set but GOOGLE_AI_API_KEY is missing; using template lessons")
    return TemplateLessonProvider()
