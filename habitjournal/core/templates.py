# core/templates.py

from typing import Dict, List

from habitjournal.core.errors import UnknownTemplateError
from habitjournal.core.models import Task, WeekRecord

HABIT_TEMPLATES: Dict[str, List[str]] = {
    "Morning Routine": [
        "Wake up early", "Drink water", "Stretch / Exercise",
        "Healthy breakfast", "Journal / Gratitude",
    ],
    "Fitness Week": [
        "Cardio session", "Strength training", "Yoga / Flexibility",
        "Walk 10k steps", "Meal prep",
    ],
    "Study Plan": [
        "Read 30 min", "Review notes", "Practice problems",
        "Flashcards", "Summarize lesson",
    ],
    "Self Care": [
        "Skincare routine", "Meditate 10 min", "Social time",
        "No screens 1hr before bed", "Creative hobby",
    ],
}


def template_names() -> List[str]:
    return list(HABIT_TEMPLATES)


def apply_template(record: WeekRecord, name: str) -> List[Task]:
    """Append the template's tasks to ``record`` and return the new tasks"""
    if name not in HABIT_TEMPLATES:
        raise UnknownTemplateError(f"Unknown habit template: {name}")

    added = [Task(text=text) for text in HABIT_TEMPLATES[name]]
    record.tasks.extend(added)
    return added
