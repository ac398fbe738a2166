"""
Chat profanity filter.

Banned words are matched whole-word and case-insensitively, and replaced
with CENSOR_TOKEN.
"""
import re
from typing import Optional

CENSOR_TOKEN = "[CENSORED]"

BANNED_WORDS = [
    # Slurs
    "nigger", "nigga", "faggot", "fag", "chink", "gook", "spic", "wetback",
    "raghead", "kike", "tranny", "dyke",
    # Profanity
    "fuck", "fucking", "fuckhead", "motherfucker", "shit", "shitty", "bullshit",
    "horseshit", "piss", "asshole", "bitch", "bitches", "bastard", "damn",
    "dammit", "crap", "cock", "cocksucker", "pussy", "dick", "dickhead",
    "dickwad", "cunt", "twat", "wank", "bollocks", "arse", "slut", "whore",
    # Insults
    "retard", "retarded", "dumbass", "jackass", "douche", "douchebag",
    "asshat", "scumbag", "prick",
]

# Longest first so "fucking" is not pre-empted by "fuck"
_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(w) for w in sorted(BANNED_WORDS, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)


def censor_profanity(text: Optional[str]) -> Optional[str]:
    """Replace banned words in `text`; empty or None input is returned unchanged."""
    if not text:
        return text
    return _PATTERN.sub(CENSOR_TOKEN, text)
