#!/usr/bin/env python3
"""
Tests for the template and Gemini lesson providers
"""

import json

import pytest
from pydantic import ValidationError

from config import AppSettings
from student_profile import StudentRecord
from lesson_provider import (
    GeminiLessonProvider,
    LESSON_STEP_COUNT,
    LessonFormatError,
    TemplateLessonProvider,
    build_lesson_provider,
    _extract_json,
    parse_lesson,
)

RECORD = StudentRecord("Ada", "jss-1", "Mathematics", "Fractions", "English")


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Stands in for genai.GenerativeModel"""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return FakeResponse(self.reply)


def make_step(n, **overrides):
    step = {
        "title": f"Step {n}",
        "explanation": f"Explanation {n}.",
        "example": f"Example {n}",
        "quick_check": [f"Question {n}?"],
    }
    step.update(overrides)
    return step


def make_payload(step_count=LESSON_STEP_COUNT, **overrides):
    payload = {
        "title": "Fractions Made Easy",
        "objectives": ["Name the parts of a fraction", "Compare fractions"],
        "steps": [make_step(n) for n in range(1, step_count + 1)],
    }
    payload.update(overrides)
    return payload


GOOD_PAYLOAD = make_payload()


def test_template_lesson_scenario():
    lesson = TemplateLessonProvider().build_lesson(RECORD)

    assert lesson.title == "Understanding Fractions"
    assert len(lesson.steps) == 3
    assert [s.id for s in lesson.steps] == [1, 2, 3]
    assert lesson.steps[0].title == "Introduction to the Concept"
    assert lesson.steps[1].title == "Step-by-Step Breakdown"
    assert lesson.steps[2].title == "Practice Together"
    assert "Fractions" in lesson.steps[0].explanation
    assert "jss-1" in lesson.steps[0].explanation
    assert lesson.objectives[0] == "Define and explain Fractions"
    assert all(len(s.quick_check) == 3 for s in lesson.steps)


def test_template_lesson_is_deterministic():
    provider = TemplateLessonProvider()
    assert provider.build_lesson(RECORD) == provider.build_lesson(RECORD)


def test_parse_lesson_numbers_steps():
    payload = make_payload()
    payload["steps"][1] = make_step(2, example=None, quick_check=[])
    lesson = parse_lesson(payload, "Fractions")

    assert lesson.title == "Fractions Made Easy"
    assert [s.id for s in lesson.steps] == [1, 2, 3]
    assert lesson.steps[0].example == "Example 1"
    assert lesson.steps[1].example is None
    assert lesson.steps[1].quick_check == []


def test_parse_lesson_defaults_title_to_topic():
    lesson = parse_lesson(make_payload(title=None), "Fractions")
    assert lesson.title == "Understanding Fractions"


@pytest.mark.parametrize("payload", [
    {},
    make_payload(step_count=0),
    make_payload(step_count=1),
    make_payload(step_count=5),
    make_payload(steps=[make_step(1, explanation=None), make_step(2), make_step(3)]),
    make_payload(steps=[make_step(1, title="   "), make_step(2), make_step(3)]),
    make_payload(steps=[make_step(1, quick_check="not a list"), make_step(2), make_step(3)]),
])
def test_parse_lesson_rejects_bad_payloads(payload):
    with pytest.raises(ValidationError):
        parse_lesson(payload, "Fractions")


def test_extract_json_failures():
    with pytest.raises(LessonFormatError):
        _extract_json("I cannot help with that.")
    with pytest.raises(LessonFormatError):
        _extract_json("{not json at all}")


@pytest.mark.parametrize("reply", [
    "```json\n" + json.dumps(GOOD_PAYLOAD) + "\n```",
    "```json\n" + json.dumps(GOOD_PAYLOAD),
    "```\n" + json.dumps(GOOD_PAYLOAD) + "\n```",
    json.dumps(GOOD_PAYLOAD),
])
def test_extract_json_handles_fences(reply):
    assert _extract_json(reply) == GOOD_PAYLOAD


def test_gemini_provider_uses_model_output():
    model = FakeModel(reply="```json\n" + json.dumps(GOOD_PAYLOAD) + "\n```")
    lesson = GeminiLessonProvider(model).build_lesson(RECORD)

    assert lesson.title == "Fractions Made Easy"
    assert len(lesson.steps) == LESSON_STEP_COUNT
    assert "Fractions" in model.prompts[0]
    assert "JSS 1" in model.prompts[0]


def test_gemini_provider_extracts_embedded_json():
    model = FakeModel(reply="Here is your lesson: " + json.dumps(GOOD_PAYLOAD) + " Enjoy!")
    lesson = GeminiLessonProvider(model).build_lesson(RECORD)

    assert [s.title for s in lesson.steps] == ["Step 1", "Step 2", "Step 3"]


def test_gemini_provider_accepts_unclosed_fence():
    model = FakeModel(reply="```json\n" + json.dumps(GOOD_PAYLOAD))
    lesson = GeminiLessonProvider(model).build_lesson(RECORD)

    assert lesson.title == "Fractions Made Easy"


@pytest.mark.parametrize("model", [
    FakeModel(error=RuntimeError("quota exceeded")),
    FakeModel(reply="I cannot help with that."),
    FakeModel(reply='{"title": "Broken", "steps": []}'),
    FakeModel(reply=json.dumps(make_payload(step_count=1))),
    FakeModel(reply=json.dumps(make_payload(step_count=5))),
])
def test_gemini_provider_falls_back_to_template(model):
    lesson = GeminiLessonProvider(model).build_lesson(RECORD)

    assert lesson == TemplateLessonProvider().build_lesson(RECORD)
    assert len(lesson.steps) == LESSON_STEP_COUNT


def test_build_lesson_provider_defaults_to_template():
    assert isinstance(build_lesson_provider(AppSettings()), TemplateLessonProvider)


def test_build_lesson_provider_needs_api_key():
    settings = AppSettings(use_ai_lessons=True, google_ai_api_key="")
    assert isinstance(build_lesson_provider(settings), TemplateLessonProvider)
