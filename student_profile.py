"""
Student Profile Module

Handles the student intake form: class levels, supported languages, the draft
form state and the submitted student record for the Classroom Agent.
"""

import logging
from typing import Callable, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# (value, label) pairs in display order
CLASS_LEVELS = [
    ("primary-1", "Primary 1"),
    ("primary-2", "Primary 2"),
    ("primary-3", "Primary 3"),
    ("primary-4", "Primary 4"),
    ("primary-5", "Primary 5"),
    ("primary-6", "Primary 6"),
    ("jss-1", "JSS 1"),
    ("jss-2", "JSS 2"),
    ("jss-3", "JSS 3"),
    ("ss-1", "SS 1"),
    ("ss-2", "SS 2"),
    ("ss-3", "SS 3"),
    ("waec", "WAEC Preparation"),
]

LANGUAGES = [
    ("English", "English"),
    ("French", "Français"),
    ("Yoruba", "Yorùbá"),
    ("Igbo", "Igbo"),
    ("Hausa", "Hausa"),
]

DEFAULT_LANGUAGE = "English"

REQUIRED_FIELDS = ("name", "class_level", "subject", "topic")


def class_level_label(value: str) -> str:
    """Get the display label for a class level value"""
    return dict(CLASS_LEVELS).get(value, value)


def language_label(value: str) -> str:
    """Get the native display label for a language value"""
    return dict(LANGUAGES).get(value, value)


@dataclass(frozen=True)
class StudentRecord:
    """Snapshot of a submitted intake form"""
    name: str
    class_level: str
    subject: str
    topic: str
    language: str = DEFAULT_LANGUAGE

    @property
    def class_label(self) -> str:
        return class_level_label(self.class_level)

    @property
    def language_label(self) -> str:
        return language_label(self.language)


@dataclass
class IntakeForm:
    """Mutable draft of the student intake form"""
    name: str = ""
    class_level: str = ""
    subject: str = ""
    topic: str = ""
    language: str = DEFAULT_LANGUAGE
    is_listening: bool = False

    def missing_fields(self) -> List[str]:
        """Required fields that are still empty, in form order"""
        return [f for f in REQUIRED_FIELDS if not (getattr(self, f) or "").strip()]

    def is_complete(self) -> bool:
        """Check whether every required field has a value"""
        return not self.missing_fields()

    def to_record(self) -> StudentRecord:
        """Build an immutable record from the current draft"""
        return StudentRecord(
            name=self.name.strip(),
            class_level=self.class_level,
            subject=self.subject.strip(),
            topic=self.topic.strip(),
            language=self.language or DEFAULT_LANGUAGE,
        )

    def submit(self, on_submit: Callable[[StudentRecord], None]) -> Optional[StudentRecord]:
        """Emit a record to the callback if the form is complete.

        An incomplete form is ignored silently; the UI keeps the submit
        button disabled in that case.
        """
        if not self.is_complete():
            logger.info(f"Intake submit ignored, missing: {self.missing_fields()}")
            return None

        record = self.to_record()
        on_submit(record)
        return record

    def toggle_voice_input(self):
        """Toggle the microphone indicator. No audio is captured."""
        self.is_listening = not self.is_listening

    def upload_file(self):
        """File upload placeholder"""
        return None
