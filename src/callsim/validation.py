import re

from callsim.profile import BusinessProfile, MenuItem


def normalize_utterance(value) -> str:
    """Trim caller input. Anything that isn't a string counts as empty."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def match_any_keyword(text: str, keywords: set[str]) -> bool:
    """Check if any keyword appears in text as a whole word (not substring)."""
    lower = _fold_quotes(text.lower())
    return any(re.search(rf'\b{re.escape(kw)}\b', lower) for kw in keywords)


def _fold_quotes(text: str) -> str:
    # Phones and word processors send curly apostrophes ("that’s all").
    return text.replace("’", "'").replace("‘", "'")


GREETING_KEYWORDS = {"hi", "hello", "hey", "good morning", "good afternoon", "good evening"}

HOURS_KEYWORDS = {
    "hours", "open", "opening", "close", "closing", "closed", "what time",
    "when do you", "sunday", "weekend",
}

LOCATION_KEYWORDS = {
    "where", "address", "located", "location", "directions", "find you",
    "parking", "get there",
}

CONTACT_KEYWORDS = {"phone number", "your number", "contact", "call you back", "reach you"}

CUISINE_KEYWORDS = {"cuisine", "kind of food", "type of food", "what food", "style of food"}

MENU_KEYWORDS = {
    "menu", "dishes", "dish", "popular", "recommend", "recommendation",
    "specials", "special", "what do you serve", "signature", "best",
}

DIETARY_KEYWORDS = {
    "vegetarian": "vegetarian",
    "veggie": "vegetarian",
    "vegan": "vegan",
    "gluten-free": "gluten-free",
    "gluten free": "gluten-free",
    "celiac": "gluten-free",
    "coeliac": "gluten-free",
}

ALLERGEN_KEYWORDS = {
    "allergy", "allergies", "allergic", "allergen", "allergens",
    "nuts", "nut", "shellfish", "dairy", "eggs", "fish",
}

PRICE_KEYWORDS = {"price", "prices", "cost", "how much", "expensive", "cheap"}

TAKEAWAY_KEYWORDS = {
    "takeaway", "take away", "takeout", "take out", "delivery", "deliver",
    "to go", "pick up", "pickup", "collect", "order",
}

RESERVATION_KEYWORDS = {
    "reservation", "reserve", "book a table", "table for", "booking", "book",
}

HUMAN_KEYWORDS = {
    "speak to someone", "real person", "human", "manager", "staff",
    "someone else", "operator",
}

GOODBYE_KEYWORDS = {"bye", "goodbye", "good bye", "see you", "hang up", "gotta go"}

CLOSE_KEYWORDS = {
    "thanks", "thank you", "cheers", "that's all", "that's it",
    "nothing else", "all good", "i'm good",
}

NO_KEYWORDS = {"no", "nope", "nah", "no thanks", "no thank you", "that's all", "nothing else", "i'm good"}

# Topic order is reply order when one utterance touches several topics.
TOPIC_KEYWORDS = [
    ("greeting", GREETING_KEYWORDS),
    ("hours", HOURS_KEYWORDS),
    ("location", LOCATION_KEYWORDS),
    ("contact", CONTACT_KEYWORDS),
    ("cuisine", CUISINE_KEYWORDS),
    ("menu", MENU_KEYWORDS),
    ("dietary", set(DIETARY_KEYWORDS)),
    ("allergens", ALLERGEN_KEYWORDS),
    ("price", PRICE_KEYWORDS),
    ("takeaway", TAKEAWAY_KEYWORDS),
    ("reservation", RESERVATION_KEYWORDS),
    ("human", HUMAN_KEYWORDS),
]

NAME_STOPWORDS = {"with", "and", "the", "of", "a", "an", "in", "on"}


def classify_topics(text: str) -> list[str]:
    """Return every topic the utterance touches, in reply order."""
    return [topic for topic, keywords in TOPIC_KEYWORDS if match_any_keyword(text, keywords)]


def detect_dietary_tags(text: str) -> list[str]:
    tags = []
    for keyword, tag in DIETARY_KEYWORDS.items():
        if tag not in tags and match_any_keyword(text, {keyword}):
            tags.append(tag)
    return tags


def detect_goodbye(text: str) -> bool:
    return match_any_keyword(text, GOODBYE_KEYWORDS)


def detect_close(text: str) -> bool:
    return match_any_keyword(text, CLOSE_KEYWORDS)


def detect_no(text: str) -> bool:
    return match_any_keyword(text, NO_KEYWORDS)


def _name_words(item: MenuItem) -> set[str]:
    words = set(re.findall(r"[a-z]+", item.name.lower()))
    words.update(re.findall(r"[a-z]+", item.id.lower()))
    return {w for w in words if len(w) >= 4 and w not in NAME_STOPWORDS}


def menu_item_keywords(profile: BusinessProfile) -> dict[str, set[str]]:
    """Phrases that identify each dish: its full name, its id words, and any
    name word no other dish shares."""
    word_owners: dict[str, set[str]] = {}
    for item in profile.popular_dishes:
        for word in _name_words(item):
            word_owners.setdefault(word, set()).add(item.id)

    result = {}
    for item in profile.popular_dishes:
        phrases = {item.name.lower(), item.id.replace("-", " ").lower()}
        phrases.update(w for w in _name_words(item) if word_owners[w] == {item.id})
        result[item.id] = {p for p in phrases if p}
    return result


def match_menu_items(text: str, profile: BusinessProfile) -> list[MenuItem]:
    """Dishes mentioned in the utterance, in menu order."""
    keywords = menu_item_keywords(profile)
    return [
        item for item in profile.popular_dishes
        if match_any_keyword(text, keywords[item.id])
    ]
