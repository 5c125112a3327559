"""Query suggestions for partially typed searches."""

MAX_SUGGESTIONS = 8

# (trigger substrings, suggestions) in the order they are offered
SUGGESTION_GROUPS = (
    (
        ("eth", "bitcoin", "crypto"),
        (
            "transactions from last month",
            "DeFi protocol emails",
            "NFT marketplace notifications",
            "wallet security alerts",
        ),
    ),
    (
        ("today", "yesterday", "week"),
        (
            "emails from today",
            "last week's important emails",
            "monthly newsletters",
            "deadline reminders this week",
        ),
    ),
    (
        ("@", "from"),
        (
            "emails from specific person",
            "conversations with team members",
            "client communications",
            "support ticket responses",
        ),
    ),
    (
        ("action", "todo", "urgent"),
        (
            "emails requiring action",
            "urgent messages",
            "pending approvals",
            "follow-up needed",
        ),
    ),
    (
        ("payment", "invoice", "money"),
        (
            "payment confirmations",
            "invoice notifications",
            "transaction receipts",
            "financial statements",
        ),
    ),
)

DEFAULT_SUGGESTIONS = (
    "unread important emails",
    "emails with attachments",
    "starred conversations",
    "recent project updates",
)


def suggest_queries(user_input: str) -> list[str]:
    """Suggest complete queries for what the user has typed so far.

    Args:
        user_input: Partial query text

    Returns:
        Up to eight suggestions; generic ones when nothing is triggered
    """
    text = (user_input or "").lower().strip()
    suggestions: list[str] = []

    for triggers, group in SUGGESTION_GROUPS:
        if any(trigger in text for trigger in triggers):
            suggestions.extend(group)

    if not suggestions:
        suggestions.extend(DEFAULT_SUGGESTIONS)

    return suggestions[:MAX_SUGGESTIONS]
