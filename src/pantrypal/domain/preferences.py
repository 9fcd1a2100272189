"""Domain models for user preferences collected during onboarding."""

from dataclasses import dataclass, field
from typing import Literal

GroupType = Literal["create", "join"]

ALLERGIES = ("dairy-free", "egg-free", "gluten-free")
FOODS_TO_AVOID = ("alcohol", "pork", "fish")
FAMILY_MEMBERS = ("adults", "teenagers", "children", "infants")
MIN_AGE = 13
MAX_AGE = 100


@dataclass
class FamilySize:
    """Household headcount by age bracket."""

    adults: int = 0
    teenagers: int = 0
    children: int = 0
    infants: int = 0

    @property
    def total(self) -> int:
        """Return the number of people in the household."""
        return self.adults + self.teenagers + self.children + self.infants

    def to_dict(self) -> dict[str, int]:
        return {member: getattr(self, member) for member in FAMILY_MEMBERS}


@dataclass
class PersonName:
    """First and last name of the account holder."""

    first: str = ""
    last: str = ""


@dataclass(frozen=True)
class PreferencesRecord:
    """A ``user_preferences`` row as persisted remotely."""

    user_id: str
    first_name: str
    last_name: str
    age: int
    location: str | dict[str, float]
    family_size: dict[str, int]
    allergies: list[str]
    foods_to_avoid: list[str]
    onboarding_completed: bool

    def to_payload(self) -> dict[str, object]:
        """Serialize for an insert or update."""
        return {
            "user_id": self.user_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "age": self.age,
            "location": self.location,
            "family_size": dict(self.family_size),
            "allergies": list(self.allergies),
            "foods_to_avoid": list(self.foods_to_avoid),
            "onboarding_completed": self.onboarding_completed,
        }

    @classmethod
    def placeholder(cls, user_id: str) -> "PreferencesRecord":
        """Row created before onboarding so group rows can reference the user."""
        return cls(
            user_id=user_id,
            first_name="Temp",
            last_name="User",
            age=0,
            location="",
            family_size=FamilySize().to_dict(),
            allergies=[],
            foods_to_avoid=[],
            onboarding_completed=False,
        )


@dataclass
class UserPreferences:
    """Onboarding draft, mutated step by step and persisted once."""

    group_type: GroupType = "create"
    group_name: str = ""
    location: str | dict[str, float] = ""
    name: PersonName = field(default_factory=PersonName)
    family_size: FamilySize = field(default_factory=FamilySize)
    age: int = 0
    allergies: list[str] = field(default_factory=list)
    foods_to_avoid: list[str] = field(default_factory=list)
    onboarding_completed: bool = False

    @property
    def full_name(self) -> str:
        first = self.name.first.strip()
        last = self.name.last.strip()
        return " ".join(part for part in (first, last) if part)

    @property
    def total_family_size(self) -> int:
        return self.family_size.total

    def update_name(self, first: str, last: str) -> None:
        self.name = PersonName(first=first, last=last)

    def update_family_size(self, member: str, count: int) -> None:
        """Set the headcount for one age bracket."""
        if member not in FAMILY_MEMBERS:
            raise ValueError(f"Unknown family member type: {member}")
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError("Family size counts must be whole numbers")
        if count < 0:
            raise ValueError("Family size counts must be non-negative")
        setattr(self.family_size, member, count)

    def set_location(self, location: str | dict[str, float]) -> None:
        self.location = location

    def set_age(self, age: float) -> None:
        self.age = round(age)

    def add_allergy(self, allergy: str) -> None:
        _add_unique(self.allergies, allergy, ALLERGIES)

    def remove_allergy(self, allergy: str) -> None:
        _remove_present(self.allergies, allergy)

    def toggle_allergy(self, allergy: str) -> None:
        if allergy in self.allergies:
            self.remove_allergy(allergy)
        else:
            self.add_allergy(allergy)

    def add_food_to_avoid(self, food: str) -> None:
        _add_unique(self.foods_to_avoid, food, FOODS_TO_AVOID)

    def remove_food_to_avoid(self, food: str) -> None:
        _remove_present(self.foods_to_avoid, food)

    def toggle_food_to_avoid(self, food: str) -> None:
        if food in self.foods_to_avoid:
            self.remove_food_to_avoid(food)
        else:
            self.add_food_to_avoid(food)

    def complete_onboarding(self) -> None:
        self.onboarding_completed = True

    def reset_onboarding(self) -> None:
        self.onboarding_completed = False

    def to_record(self, user_id: str, *, completed: bool) -> PreferencesRecord:
        """Build the full row persisted when onboarding finishes."""
        return PreferencesRecord(
            user_id=user_id,
            first_name=self.name.first,
            last_name=self.name.last,
            age=self.age,
            location=self.location,
            family_size=self.family_size.to_dict(),
            allergies=list(self.allergies),
            foods_to_avoid=list(self.foods_to_avoid),
            onboarding_completed=completed,
        )

    def apply_record(self, record: PreferencesRecord) -> None:
        """Hydrate the draft from a previously saved row."""
        self.name = PersonName(first=record.first_name, last=record.last_name)
        self.age = record.age
        self.location = record.location
        self.family_size = FamilySize(
            **{
                member: int(record.family_size.get(member, 0))
                for member in FAMILY_MEMBERS
            }
        )
        self.allergies = [a for a in dict.fromkeys(record.allergies) if a in ALLERGIES]
        self.foods_to_avoid = [
            f for f in dict.fromkeys(record.foods_to_avoid) if f in FOODS_TO_AVOID
        ]
        self.onboarding_completed = record.onboarding_completed


def _add_unique(values: list[str], value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValueError(f"Unsupported value: {value}")
    if value not in values:
        values.append(value)


def _remove_present(values: list[str], value: str) -> None:
    if value in values:
        values.remove(value)
