"""
Lesson Tracker Module

Tracks the current step and completed steps of the lesson on the teaching screen.
"""

import logging
from typing import Optional, Set

from lesson_provider import Lesson, LessonStep

logger = logging.getLogger(__name__)


class LessonTracker:
    """Tracks the current step index and the set of completed step ids"""

    def __init__(self, lesson: Lesson):
        self.lesson = lesson
        self.current_step = 0
        self.completed_steps: Set[int] = set()
        self.lesson_complete = False

    @property
    def step_count(self) -> int:
        return len(self.lesson.steps)

    def current(self) -> LessonStep:
        """Get the step currently on screen"""
        return self.lesson.steps[self.current_step]

    def is_last_step(self) -> bool:
        return self.current_step == self.step_count - 1

    def can_go_back(self) -> bool:
        return self.current_step > 0

    def select_step(self, index: int):
        """Jump to any step, completed or not"""
        if not 0 <= index < self.step_count:
            raise IndexError(f"Step index {index} out of range (0-{self.step_count - 1})")
        self.current_step = index

    def complete_current(self) -> bool:
        """Mark the current step complete and move to the next one.

        On the last step the index stays put and the lesson is marked complete.
        Returns True only for the call that finishes the lesson.
        """
        step = self.current()
        self.completed_steps.add(step.id)

        if not self.is_last_step():
            self.current_step += 1
            return False

        if self.lesson_complete:
            return False

        self.lesson_complete = True
        logger.info(f"Lesson '{self.lesson.title}' completed")
        return True

    def previous_step(self):
        """Go back one step; no-op on the first step"""
        if self.can_go_back():
            self.current_step -= 1

    def status(self, index: int) -> str:
        """Progress status of a step: current, completed or pending"""
        if index == self.current_step:
            return "current"
        if self.lesson.steps[index].id in self.completed_steps:
            return "completed"
        return "pending"

    def is_completed(self, index: int) -> bool:
        return self.lesson.steps[index].id in self.completed_steps

    def progress(self) -> float:
        """Fraction of steps completed"""
        if not self.step_count:
            return 0.0
        return len(self.completed_steps) / self.step_count

    def reset(self, lesson: Optional[Lesson] = None):
        """Reset step tracking, optionally for a new lesson"""
        if lesson is not None:
            self.lesson = lesson
        self.current_step = 0
        self.completed_steps = set()
        self.lesson_complete = False
