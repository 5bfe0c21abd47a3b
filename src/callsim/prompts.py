from callsim.profile import BusinessProfile, MenuItem

FALLBACK_REPLY = (
    "Sorry, I didn't quite catch that. I can help with our opening hours, "
    "location, menu, allergens, or takeaway. What would you like to know?"
)

ANYTHING_ELSE_REPLY = "You're welcome! Is there anything else I can help you with?"

GREETING_REPLY = "Hi there! How can I help you today?"


def _business_name(profile: BusinessProfile) -> str:
    return profile.name.strip() or "the restaurant"


def opening_line(profile: BusinessProfile) -> str:
    """Greeting spoken when the call connects. Pure function of the profile."""
    name = _business_name(profile)
    cuisine = profile.cuisine_type.strip()
    intro = f"Thank you for calling {name}"
    if cuisine:
        intro += f", serving {cuisine} cuisine"
    return (
        f"{intro}. I'm the automated assistant. "
        "I can help with our hours, location, menu, and takeaway. How can I help you today?"
    )


def farewell_reply(profile: BusinessProfile) -> str:
    return f"Thanks for calling {_business_name(profile)}, goodbye!"


def handoff_reply(profile: BusinessProfile) -> str:
    phone = profile.phone_number.strip()
    reply = "Let me have someone from our team follow up with you directly."
    if phone:
        reply += f" You can also reach us at {phone}."
    return reply + " Thanks for calling, goodbye!"


def hours_reply(profile: BusinessProfile) -> str:
    hours = profile.opening_hours.strip()
    if not hours:
        return "I don't have our opening hours in front of me. Please check with the team directly."
    reply = f"We're open {hours}."
    if profile.closed_days.strip():
        reply += f" {profile.closed_days.strip()}"
    return reply


def location_reply(profile: BusinessProfile) -> str:
    if not profile.address.strip():
        return "I don't have our address on hand, sorry about that."
    return f"You'll find us at {profile.address.strip()}."


def contact_reply(profile: BusinessProfile) -> str:
    if not profile.phone_number.strip():
        return "This is the best line to reach us on."
    return f"You can reach us at {profile.phone_number.strip()}."


def cuisine_reply(profile: BusinessProfile) -> str:
    if not profile.cuisine_type.strip():
        return f"{_business_name(profile)} serves a seasonal menu."
    return f"We serve {profile.cuisine_type.strip()} cuisine."


def _dish_line(item: MenuItem) -> str:
    line = f"- {item.name}"
    if item.price:
        line += f" ({item.price})"
    return line


def menu_reply(profile: BusinessProfile) -> str:
    if not profile.popular_dishes:
        return "Our menu changes often, so the team will be happy to walk you through it when you visit."
    lines = ["Here are some of our most popular dishes:"]
    lines.extend(_dish_line(item) for item in profile.popular_dishes)
    return "\n".join(lines)


def dish_reply(item: MenuItem) -> str:
    reply = f"The {item.name}"
    if item.description:
        reply += f": {item.description}"
    else:
        reply += " is one of our favorites."
    if item.price:
        reply += f" It's {item.price}."
    return reply


def dish_price_reply(item: MenuItem) -> str:
    if not item.price:
        return f"I don't have a price for the {item.name}, sorry."
    return f"The {item.name} is {item.price}."


def dish_allergen_reply(item: MenuItem) -> str:
    if not item.allergens:
        return f"I don't have allergen notes for the {item.name}. Please ask our team when you order."
    return f"The {item.name} contains: {item.allergens}."


def allergens_reply(profile: BusinessProfile) -> str:
    if not profile.popular_dishes:
        return "Please let our team know about any allergies when you order."
    lines = ["Here are the allergen notes for our popular dishes:"]
    lines.extend(
        f"- {item.name}: {item.allergens or 'no notes'}" for item in profile.popular_dishes
    )
    lines.append("Please mention any allergies when you order.")
    return "\n".join(lines)


def prices_reply(profile: BusinessProfile) -> str:
    priced = [item for item in profile.popular_dishes if item.price]
    if not priced:
        return "Prices vary with the season. The team can share today's prices."
    return "\n".join(["Here's what our popular dishes cost:"] + [_dish_line(i) for i in priced])


def dietary_reply(profile: BusinessProfile, tag: str) -> str:
    items = profile.items_tagged(tag)
    if not items:
        return f"I don't have any dishes marked {tag} on our popular list, but the kitchen may be able to adapt one."
    names = ", ".join(item.name for item in items)
    return f"Our {tag} options include: {names}."


def takeaway_reply(profile: BusinessProfile) -> str:
    if not profile.takeaway_available:
        return "I'm sorry, we don't offer takeaway or delivery at the moment."
    reply = "Yes, we offer takeaway and delivery."
    if profile.takeaway_methods.strip():
        reply += f" {profile.takeaway_methods.strip()}"
    return reply


def reservation_reply(profile: BusinessProfile) -> str:
    reply = "I'm not able to book tables on this line."
    if profile.phone_number.strip():
        reply += f" Please call our team at {profile.phone_number.strip()} and they'll set that up."
    return reply


def human_reply(profile: BusinessProfile) -> str:
    reply = "I'm the automated assistant, so I can't transfer you right now."
    if profile.phone_number.strip():
        reply += f" Our team is reachable at {profile.phone_number.strip()}."
    return reply
