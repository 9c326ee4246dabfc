"""
View Controller Module

Top-level screen state for the Classroom Agent: which screen is visible, the
submitted student record and the lesson being taught.
"""

import logging
from enum import Enum
from typing import Optional

from student_profile import StudentRecord
from lesson_provider import Lesson, LessonProvider, TemplateLessonProvider
from lesson_tracker import LessonTracker
from screen_share import ScreenShareSession

logger = logging.getLogger(__name__)


class View(str, Enum):
    INTAKE = "intake"
    TEACHING = "teaching"


class ViewController:
    """Switches between the intake and teaching screens"""

    def __init__(self, lesson_provider: Optional[LessonProvider] = None, screen_share_factory=ScreenShareSession):
        self.lesson_provider = lesson_provider or TemplateLessonProvider()
        self.screen_share_factory = screen_share_factory
        self.view = View.INTAKE
        self.record: Optional[StudentRecord] = None
        self.lesson: Optional[Lesson] = None
        self.tracker: Optional[LessonTracker] = None
        self.screen_share: Optional[ScreenShareSession] = None

    @property
    def is_teaching(self) -> bool:
        return self.view == View.TEACHING

    def on_intake_submit(self, record: StudentRecord):
        """Enter the teaching screen with a freshly built lesson"""
        self.record = record
        self.lesson = self.lesson_provider.build_lesson(record)
        self.tracker = LessonTracker(self.lesson)
        self.screen_share = self.screen_share_factory()
        self.view = View.TEACHING
        logger.info(
            f"Teaching {record.subject} / '{record.topic}' to {record.name} "
            f"({record.class_level}, {record.language})"
        )

    def on_back(self):
        """Return to the intake screen and drop the lesson state"""
        self.view = View.INTAKE
        self.record = None
        self.lesson = None
        self.tracker = None
        self.screen_share = None
        logger.info("Returned to student intake")
