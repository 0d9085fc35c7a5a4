"""Value types passed between the recommendation stages."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class GradedAttempt:
    """A graded quiz answer. Attempts without a category are ignored."""

    is_correct: bool
    category: Optional[str] = None


@dataclass(frozen=True)
class InterestAnswer:
    """A questionnaire answer keyed by question id."""

    question_id: int
    response: str


@dataclass
class CategoryStats:
    correct: int = 0
    total: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.total


CategoryPerformance = Dict[str, CategoryStats]
AffinityVector = Dict[str, float]


@dataclass(frozen=True)
class CareerPathRecord:
    """Catalog entry owned by the surrounding application."""

    id: str
    name: str
    description: str = ""


@dataclass
class CareerPathCandidate:
    path_key: str
    raw_score: float
    probability: float = 0.0
    performance_score: float = 0.0
    interest_score: float = 0.0
    career_path_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "career_path_id": self.career_path_id,
            "probability": self.probability,
            "score": self.raw_score,
        }


@dataclass
class Recommendation:
    recommended_path_id: str
    probabilities: List[CareerPathCandidate] = field(default_factory=list)
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommended_path_id": self.recommended_path_id,
            "probabilities": [c.to_dict() for c in self.probabilities],
            "confidence": self.confidence,
        }
