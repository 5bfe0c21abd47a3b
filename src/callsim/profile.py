"""Restaurant business profile and the store the operator edits.

Profiles are immutable; every edit produces a new ``BusinessProfile``. A
running call keeps the profile it started with, so edits made mid-call apply
to the next call.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)

# Keys used by the original web console's profile JSON.
CAMEL_CASE_KEYS = {
    "cuisineType": "cuisine_type",
    "phoneNumber": "phone_number",
    "openingHours": "opening_hours",
    "closedDays": "closed_days",
    "takeawayAvailable": "takeaway_available",
    "takeawayMethods": "takeaway_methods",
    "popularDishes": "popular_dishes",
}


@dataclass(frozen=True)
class MenuItem:
    id: str
    name: str
    description: str = ""
    price: str = ""
    allergens: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "MenuItem":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            price=str(data.get("price", "")),
            allergens=str(data.get("allergens", "")),
            tags=tuple(data.get("tags") or ()),
        )

    def has_tag(self, tag: str) -> bool:
        return tag.lower() in (t.lower() for t in self.tags)


@dataclass(frozen=True)
class BusinessProfile:
    name: str = ""
    cuisine_type: str = ""
    address: str = ""
    phone_number: str = ""
    opening_hours: str = ""
    closed_days: str = ""
    takeaway_available: bool = False
    takeaway_methods: str = ""
    popular_dishes: tuple[MenuItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers but store a tuple so the profile stays hashable.
        if not isinstance(self.popular_dishes, tuple):
            object.__setattr__(self, "popular_dishes", tuple(self.popular_dishes))
        seen = set()
        for item in self.popular_dishes:
            if item.id in seen:
                raise ValueError(f"Duplicate menu item id: {item.id!r}")
            seen.add(item.id)

    @classmethod
    def from_dict(cls, data: dict) -> "BusinessProfile":
        values = {}
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            name = CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown profile field: {key!r}")
            values[name] = value
        if "popular_dishes" in values:
            values["popular_dishes"] = tuple(
                item if isinstance(item, MenuItem) else MenuItem.from_dict(item)
                for item in values["popular_dishes"]
            )
        if "takeaway_available" in values:
            values["takeaway_available"] = bool(values["takeaway_available"])
        return cls(**values)

    def to_dict(self) -> dict:
        data = asdict(self)
        for item in data["popular_dishes"]:
            item["tags"] = list(item["tags"])
        return data

    def items_tagged(self, tag: str) -> list[MenuItem]:
        return [item for item in self.popular_dishes if item.has_tag(tag)]


DEFAULT_PROFILE = BusinessProfile(
    name="Harbor Lights Bistro",
    cuisine_type="Coastal Mediterranean",
    address="128 Seaside Avenue, Monterey, CA",
    phone_number="(831) 555-0194",
    opening_hours="Monday through Sunday from 11:30 AM to 10:00 PM",
    closed_days="We close early at 4:00 PM on Sundays.",
    takeaway_available=True,
    takeaway_methods=(
        "Please call us directly or order through our partner app for delivery. "
        "Takeaway orders are typically ready in 25 minutes."
    ),
    popular_dishes=(
        MenuItem(
            id="grilled-octopus",
            name="Charred Citrus Octopus",
            description="Grilled octopus with preserved lemon, smoked paprika, and saffron aioli.",
            price="$24",
            allergens="Shellfish",
            tags=("gluten-free",),
        ),
        MenuItem(
            id="garden-paella",
            name="Coastal Garden Paella",
            description="Saffron rice with seasonal vegetables, roasted tomato sofrito, and herb oil.",
            price="$28",
            allergens="Nightshades",
            tags=("vegetarian", "gluten-free"),
        ),
        MenuItem(
            id="citrus-halibut",
            name="Citrus Roasted Halibut",
            description="Pan-seared halibut with fennel confit, blood orange beurre blanc, and crispy capers.",
            price="$32",
            allergens="Fish, Dairy",
        ),
        MenuItem(
            id="olive-oil-cake",
            name="Meyer Lemon Olive Oil Cake",
            description="Light olive oil sponge with mascarpone mousse and candied citrus.",
            price="$10",
            allergens="Gluten, Dairy, Eggs",
            tags=("vegetarian",),
        ),
    ),
)


def load_profile(path: str | Path) -> BusinessProfile:
    """Read a profile from a JSON file (snake_case or camelCase keys)."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Profile file {path} must contain a JSON object")
    profile = BusinessProfile.from_dict(data)
    logger.info("Loaded profile %r from %s (%d dishes)", profile.name, path, len(profile.popular_dishes))
    return profile


def summary_lines(profile: BusinessProfile) -> list[str]:
    """Quick-reference lines shown next to the call console."""
    return [
        profile.name,
        profile.cuisine_type,
        profile.address,
        f"Phone: {profile.phone_number}",
        profile.opening_hours,
        profile.closed_days,
    ]


class ProfileStore:
    """Holds the operator's current profile. Pure data, no call behavior."""

    def __init__(self, profile: BusinessProfile = DEFAULT_PROFILE):
        self._profile = profile

    @property
    def profile(self) -> BusinessProfile:
        return self._profile

    def update(self, **changes) -> BusinessProfile:
        if not changes:
            return self._profile
        data = {CAMEL_CASE_KEYS.get(k, k): v for k, v in changes.items()}
        known = {f.name for f in fields(BusinessProfile)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown profile field(s): {', '.join(unknown)}")
        if "popular_dishes" in data:
            data["popular_dishes"] = BusinessProfile.from_dict(
                {"popular_dishes": data["popular_dishes"]}
            ).popular_dishes
        self._profile = replace(self._profile, **data)
        logger.debug("Profile updated: %s", ", ".join(sorted(data)))
        return self._profile
