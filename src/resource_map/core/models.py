"""
Data models for the resource map.

Contains the dataclasses for the four resource categories and the UserData
aggregate that the wizard builds. Every category holds a fixed number of
slots; index 0 is the primary entry used for gating and condensed exports.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Tuple, Type

from .exceptions import InvalidRecordError


@dataclass(frozen=True)
class Person:
    """Someone the user feels safe with."""
    name: str = ""
    feeling: str = ""  # What the user feels around them


@dataclass(frozen=True)
class Place:
    """A real or imagined place where the user feels at peace."""
    name: str = ""
    details: str = ""  # Colors, smells, sounds...


@dataclass(frozen=True)
class Quality:
    """A personal strength and a moment it was shown."""
    name: str = ""
    example: str = ""


@dataclass(frozen=True)
class Memory:
    """A moment where the user proved they could cope."""
    description: str = ""
    qualities: str = ""  # Qualities used in that moment


@dataclass(frozen=True)
class CategorySpec:
    """Static description of one resource category."""
    key: str
    slot_type: Type
    count: int
    primary_field: str


# Ordered: this is also the order of the wizard steps and export sections
CATEGORIES: Dict[str, CategorySpec] = {
    "people": CategorySpec("people", Person, 3, "name"),
    "places": CategorySpec("places", Place, 2, "name"),
    "qualities": CategorySpec("qualities", Quality, 3, "name"),
    "memories": CategorySpec("memories", Memory, 2, "description"),
}


def get_category(category: str) -> CategorySpec:
    """Look up a category spec, raising KeyError for unknown names."""
    try:
        return CATEGORIES[category]
    except KeyError:
        raise KeyError(
            f"Unknown category '{category}'. "
            f"Must be one of: {', '.join(CATEGORIES)}"
        ) from None


def _empty_slots(category: str) -> tuple:
    spec = CATEGORIES[category]
    return tuple(spec.slot_type() for _ in range(spec.count))


@dataclass(frozen=True)
class UserData:
    """
    The aggregate record built by the wizard.

    Immutable: edits return a new UserData sharing no mutable state with the
    previous one, so a snapshot handed to an export can never change under it.
    """

    user_name: str = ""
    people: Tuple[Person, ...] = field(default_factory=lambda: _empty_slots("people"))
    places: Tuple[Place, ...] = field(default_factory=lambda: _empty_slots("places"))
    qualities: Tuple[Quality, ...] = field(default_factory=lambda: _empty_slots("qualities"))
    memories: Tuple[Memory, ...] = field(default_factory=lambda: _empty_slots("memories"))

    def __post_init__(self) -> None:
        for key, spec in CATEGORIES.items():
            slots = getattr(self, key)
            if not isinstance(slots, tuple) or len(slots) != spec.count:
                raise InvalidRecordError(
                    f"'{key}' must hold exactly {spec.count} slots"
                )
            for slot in slots:
                if not isinstance(slot, spec.slot_type):
                    raise InvalidRecordError(
                        f"'{key}' slots must be {spec.slot_type.__name__}"
                    )

    @classmethod
    def empty(cls) -> "UserData":
        """The all-empty template a fresh session starts from."""
        return cls()

    # --- Queries ---

    def slots(self, category: str) -> tuple:
        """All slots of a category, in order."""
        return getattr(self, get_category(category).key)

    def primary(self, category: str) -> str:
        """Primary field of the category's first slot."""
        spec = get_category(category)
        return getattr(self.slots(category)[0], spec.primary_field)

    def filled(self, category: str) -> List[Any]:
        """Slots whose primary field is non-empty, order preserved."""
        spec = get_category(category)
        return [s for s in self.slots(category) if getattr(s, spec.primary_field)]

    def has_meaningful_content(self) -> bool:
        """True when a stored copy is worth offering to resume."""
        return bool(self.user_name or self.people[0].name)

    # --- Edits (return new instances) ---

    def with_field(self, category: str, index: int, field_name: str, value: str) -> "UserData":
        """
        Return a copy with one slot field replaced.

        Raises:
            KeyError: Unknown category or field name.
            IndexError: Slot index outside the category's fixed range.
        """
        spec = get_category(category)
        slots = list(self.slots(category))
        if not 0 <= index < spec.count:
            raise IndexError(
                f"Slot {index} out of range for '{category}' (0-{spec.count - 1})"
            )
        if field_name not in {f.name for f in fields(spec.slot_type)}:
            raise KeyError(f"'{category}' slots have no field '{field_name}'")

        slots[index] = replace(slots[index], **{field_name: value})
        return replace(self, **{category: tuple(slots)})

    def with_user_name(self, value: str) -> "UserData":
        """Return a copy with the user name replaced."""
        return replace(self, user_name=value)

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored JSON shape (camelCase userName)."""
        data: Dict[str, Any] = {"userName": self.user_name}
        for key in CATEGORIES:
            data[key] = [
                {f.name: getattr(slot, f.name) for f in fields(slot)}
                for slot in getattr(self, key)
            ]
        return data

    @classmethod
    def from_dict(cls, raw: Any) -> "UserData":
        """
        Build UserData from the stored JSON shape.

        Extra keys are ignored. Anything missing, mistyped or with the
        wrong slot count is rejected.

        Raises:
            InvalidRecordError: If the record does not conform.
        """
        if not isinstance(raw, dict):
            raise InvalidRecordError("Record must be a JSON object")

        user_name = raw.get("userName")
        if not isinstance(user_name, str):
            raise InvalidRecordError("'userName' must be a string")

        kwargs: Dict[str, Any] = {"user_name": user_name}
        for key, spec in CATEGORIES.items():
            items = raw.get(key)
            if not isinstance(items, list) or len(items) != spec.count:
                raise InvalidRecordError(
                    f"'{key}' must be a list of {spec.count} entries"
                )
            slots = []
            for item in items:
                if not isinstance(item, dict):
                    raise InvalidRecordError(f"'{key}' entries must be objects")
                values = {}
                for f in fields(spec.slot_type):
                    value = item.get(f.name)
                    if not isinstance(value, str):
                        raise InvalidRecordError(
                            f"'{key}.{f.name}' must be a string"
                        )
                    values[f.name] = value
                slots.append(spec.slot_type(**values))
            kwargs[key] = tuple(slots)

        return cls(**kwargs)
