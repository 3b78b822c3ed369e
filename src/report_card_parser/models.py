from __future__ import annotations

from dataclasses import dataclass, field

# Weighting tiers
AP = "AP"
HONORS = "Honors"
ADVANCED = "Advanced"
CP = "CP"


@dataclass(frozen=True)
class Fragment:
    """One positioned text run. ``y`` grows upward (PDF user space)."""

    text: str
    x: int
    y: int
    width: float = 0.0


@dataclass
class Row:
    y: int
    frags: list[Fragment] = field(default_factory=list)

    def texts(self) -> list[str]:
        return [f.text for f in self.frags]

    def text(self) -> str:
        return " ".join(self.texts())


@dataclass(frozen=True)
class CourseRecord:
    id: str
    name: str
    grade: str
    level: str
    credits: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "grade": self.grade,
            "level": self.level,
            "credits": self.credits,
        }


@dataclass(frozen=True)
class ImportResult:
    year_label: str
    courses: tuple[CourseRecord, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "yearLabel": self.year_label,
            "courses": [c.to_dict() for c in self.courses],
        }
