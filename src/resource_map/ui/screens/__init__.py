"""
Screen implementations for the resource map wizard.

Each screen is a self-contained UI component for one step of the session.
"""

from .base import WizardStep
from .welcome_step import WelcomeStep
from .resource_steps import CategoryStep, PeopleStep, PlacesStep, QualitiesStep, MemoriesStep
from .result_step import ResultStep

__all__ = [
    "WizardStep",
    "WelcomeStep",
    "CategoryStep",
    "PeopleStep",
    "PlacesStep",
    "QualitiesStep",
    "MemoriesStep",
    "ResultStep",
]
