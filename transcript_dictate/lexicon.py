"""Word classification tables used by the text post-processing pipeline.

All entries are lowercase and compared against ``normalize_token`` output.
"""

# Words people repeat on purpose ("that that", "bye bye").
ALLOWED_DUPLICATES = frozenset({"that", "had", "very", "really", "so", "bye"})

SPEECH_VERBS = frozenset(
    {
        "say", "says", "said",
        "tell", "tells", "told",
        "ask", "asks", "asked",
        "reply", "replies", "replied",
        "whisper", "whispers", "whispered",
        "shout", "shouts", "shouted",
        "yell", "yells", "yelled",
        "write", "writes", "wrote",
        "text", "texts", "texted",
        "message", "messages", "messaged",
        "goes", "went",
    }
)

# Followed by "like" these introduce speech ("she was like ...").
BE_VERBS = frozenset({"am", "is", "are", "was", "were", "be", "been", "being"})

QUOTE_RECIPIENTS = frozenset({"me", "him", "her", "them", "us", "you"})

# Reported rather than quoted speech ("he said that ...").
INDIRECT_OPENERS = frozenset({"that", "if", "whether"})

DISCOURSE_BOUNDARIES = frozenset({"because", "since", "although", "though", "while"})

CONJUNCTION_BOUNDARIES = frozenset({"and", "but", "then"})

LIKELY_SUBJECTS = frozenset({"i", "you", "he", "she", "they", "we", "it"})

INTERJECTIONS = frozenset(
    {
        "oh", "hey", "nah", "bro", "wow", "yo", "omg", "please",
        "no", "yes", "yeah", "yep", "nope", "wait",
    }
)

IMPERATIVE_STARTERS = frozenset(
    {
        "go", "stop", "look", "listen", "wait", "come", "leave",
        "tell", "give", "take", "hold", "watch", "read", "check",
    }
)

CONVERSATIONAL_PRONOUNS = frozenset(
    {"i", "you", "me", "my", "mine", "your", "yours", "we", "us", "our", "ours"}
)
