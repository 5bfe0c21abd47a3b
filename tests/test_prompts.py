from callsim.profile import DEFAULT_PROFILE, BusinessProfile, MenuItem
from callsim.prompts import (
    allergens_reply,
    dish_reply,
    handoff_reply,
    hours_reply,
    menu_reply,
    opening_line,
    prices_reply,
)


def test_opening_line_mentions_name_and_cuisine():
    line = opening_line(DEFAULT_PROFILE)
    assert line.startswith("Thank you for calling Harbor Lights Bistro, serving Coastal Mediterranean cuisine.")
    assert line.endswith("How can I help you today?")


def test_opening_line_blank_profile():
    assert opening_line(BusinessProfile()).startswith("Thank you for calling the restaurant.")


def test_hours_without_closed_days():
    profile = BusinessProfile(opening_hours="daily from noon")
    assert hours_reply(profile) == "We're open daily from noon."


def test_hours_missing():
    assert "don't have our opening hours" in hours_reply(BusinessProfile())


def test_menu_reply_empty_menu():
    assert "menu changes often" in menu_reply(BusinessProfile())


def test_allergens_reply_lists_every_dish():
    reply = allergens_reply(DEFAULT_PROFILE)
    assert "- Citrus Roasted Halibut: Fish, Dairy" in reply.split("\n")


def test_prices_skip_unpriced_dishes():
    profile = BusinessProfile(popular_dishes=(MenuItem(id="a", name="A", price="$5"), MenuItem(id="b", name="B")))
    assert prices_reply(profile) == "Here's what our popular dishes cost:\n- A ($5)"


def test_dish_reply_without_description():
    assert dish_reply(MenuItem(id="a", name="Bread")) == "The Bread is one of our favorites."


def test_handoff_without_phone():
    assert handoff_reply(BusinessProfile()) == (
        "Let me have someone from our team follow up with you directly. Thanks for calling, goodbye!"
    )
