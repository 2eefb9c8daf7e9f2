# Re-export all models for convenient imports
from stride.models.academic import Branch, Semester, Subject, EvaluationComponent
from stride.models.holiday import Holiday
from stride.models.resource import Resource, Contribution, ResourceType, ContributionStatus

__all__ = [
    # Academic catalogue
    "Branch",
    "Semester",
    "Subject",
    "EvaluationComponent",
    # Calendar
    "Holiday",
    # Shared material
    "Resource",
    "Contribution",
    "ResourceType",
    "ContributionStatus",
]
