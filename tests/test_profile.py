import json

import pytest
from callsim.profile import (
    DEFAULT_PROFILE,
    BusinessProfile,
    MenuItem,
    ProfileStore,
    load_profile,
    summary_lines,
)


class TestBusinessProfile:
    def test_default_profile_has_four_dishes(self):
        assert [i.id for i in DEFAULT_PROFILE.popular_dishes] == [
            "grilled-octopus", "garden-paella", "citrus-halibut", "olive-oil-cake",
        ]

    def test_duplicate_menu_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate menu item id"):
            BusinessProfile(popular_dishes=(MenuItem(id="a", name="A"), MenuItem(id="a", name="B")))

    def test_list_of_dishes_stored_as_tuple(self):
        profile = BusinessProfile(popular_dishes=[MenuItem(id="a", name="A")])
        assert isinstance(profile.popular_dishes, tuple)

    def test_profile_is_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_PROFILE.name = "Other"

    def test_from_dict_accepts_camel_case(self):
        profile = BusinessProfile.from_dict({
            "name": "Noodle Bar",
            "cuisineType": "Japanese",
            "phoneNumber": "555-0100",
            "takeawayAvailable": True,
            "popularDishes": [{"id": "ramen", "name": "Tonkotsu Ramen", "price": "$16", "tags": ["spicy"]}],
        })
        assert profile.cuisine_type == "Japanese"
        assert profile.phone_number == "555-0100"
        assert profile.takeaway_available is True
        assert profile.popular_dishes[0].tags == ("spicy",)

    def test_from_dict_rejects_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown profile field"):
            BusinessProfile.from_dict({"seats": 40})

    def test_round_trip_through_dict(self):
        assert BusinessProfile.from_dict(DEFAULT_PROFILE.to_dict()) == DEFAULT_PROFILE

    def test_items_tagged(self):
        names = [i.name for i in DEFAULT_PROFILE.items_tagged("Gluten-Free")]
        assert names == ["Charred Citrus Octopus", "Coastal Garden Paella"]


class TestSummaryLines:
    def test_summary(self):
        lines = summary_lines(DEFAULT_PROFILE)
        assert lines[0] == "Harbor Lights Bistro"
        assert lines[3] == "Phone: (831) 555-0194"
        assert len(lines) == 6


class TestProfileStore:
    def test_update_replaces_fields(self):
        store = ProfileStore()
        old = store.profile
        new = store.update(name="Harbor Lights", takeaway_available=False)
        assert new.name == "Harbor Lights"
        assert new.takeaway_available is False
        assert old.name == "Harbor Lights Bistro"
        assert store.profile is new

    def test_update_accepts_camel_case(self):
        store = ProfileStore()
        store.update(openingHours="Daily 9-5")
        assert store.profile.opening_hours == "Daily 9-5"

    def test_update_unknown_field(self):
        store = ProfileStore()
        with pytest.raises(ValueError, match="seats"):
            store.update(seats=12)

    def test_update_dishes_from_dicts(self):
        store = ProfileStore()
        store.update(popular_dishes=[{"id": "soup", "name": "Fish Soup"}])
        assert store.profile.popular_dishes == (MenuItem(id="soup", name="Fish Soup"),)

    def test_update_duplicate_dishes_leaves_profile_unchanged(self):
        store = ProfileStore()
        with pytest.raises(ValueError):
            store.update(popular_dishes=[{"id": "x", "name": "X"}, {"id": "x", "name": "Y"}])
        assert store.profile == DEFAULT_PROFILE

    def test_empty_update_is_noop(self):
        store = ProfileStore()
        assert store.update() is DEFAULT_PROFILE


class TestLoadProfile:
    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"name": "Taco Stand", "cuisineType": "Mexican"}))
        profile = load_profile(path)
        assert profile.name == "Taco Stand"
        assert profile.popular_dishes == ()

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_profile(path)
