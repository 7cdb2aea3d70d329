"""Corporate wellness programs and challenges."""

from dataclasses import dataclass, field
from datetime import date, datetime


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class CorporateWellnessProgram:
    """A company-run wellness program grouping challenges."""

    company_id: str
    name: str
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    goals: list[str] = field(default_factory=list)
    participants_count: int = 0
    is_active: bool = True
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "company_id": self.company_id,
            "name": self.name,
            "description": self.description,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "goals": self.goals,
            "participants_count": self.participants_count,
            "is_active": self.is_active,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "companyId": self.company_id,
            "name": self.name,
            "description": self.description,
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "goals": self.goals,
            "participantsCount": self.participants_count,
            "isActive": self.is_active,
            "createdAt": _iso(self.created_at),
        }

    @classmethod
    def from_dict(
        cls, data: dict, id: int | None = None, created_at: datetime | None = None
    ) -> "CorporateWellnessProgram":
        """Create from dictionary."""
        return cls(
            id=id,
            company_id=data["company_id"],
            name=data["name"],
            description=data.get("description", ""),
            start_date=_parse_date(data.get("start_date")),
            end_date=_parse_date(data.get("end_date")),
            goals=data.get("goals", []),
            participants_count=data.get("participants_count", 0),
            is_active=bool(data.get("is_active", True)),
            created_at=created_at,
        )


@dataclass
class CorporateChallenge:
    """A measurable challenge inside a program (e.g. 200k steps)."""

    program_id: int
    title: str
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    challenge_type: str = "steps"
    target_value: float | None = None
    reward: str | None = None
    is_active: bool = True
    id: int | None = None

    def is_met_by(self, value: float) -> bool:
        """A challenge without a target can never be completed."""
        if not self.target_value:
            return False
        return value >= self.target_value

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "program_id": self.program_id,
            "title": self.title,
            "description": self.description,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "challenge_type": self.challenge_type,
            "target_value": self.target_value,
            "reward": self.reward,
            "is_active": self.is_active,
        }

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "programId": self.program_id,
            "title": self.title,
            "description": self.description,
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "challengeType": self.challenge_type,
            "targetValue": self.target_value,
            "reward": self.reward,
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "CorporateChallenge":
        """Create from dictionary."""
        return cls(
            id=id,
            program_id=data["program_id"],
            title=data["title"],
            description=data.get("description", ""),
            start_date=_parse_date(data.get("start_date")),
            end_date=_parse_date(data.get("end_date")),
            challenge_type=data.get("challenge_type", "steps"),
            target_value=data.get("target_value"),
            reward=data.get("reward"),
            is_active=bool(data.get("is_active", True)),
        )


@dataclass
class ChallengeParticipant:
    """A user's enrolment in a challenge.

    ``anonymous_id`` is what leaderboards and company reports show.
    """

    challenge_id: int
    user_id: str
    anonymous_id: str
    current_value: float = 0.0
    completed: bool = False
    id: int | None = None
    joined_at: datetime | None = None

    def to_view(self, include_user: bool = True) -> dict:
        view = {
            "id": self.id,
            "challengeId": self.challenge_id,
            "anonymousId": self.anonymous_id,
            "currentValue": self.current_value,
            "completed": self.completed,
            "joinedAt": _iso(self.joined_at),
        }
        if include_user:
            view["userId"] = self.user_id
        return view
