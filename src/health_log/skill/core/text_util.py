from __future__ import annotations


# Names the speech model tends to hear when nobody was named.
NAME_BLACKLIST = frozenset({"player", "players"})

COMPLETE_HELP = "Here's some things you can say. Add user, reset user data, and exit."

NEXT_HELP = "You can track a user's weight, add a player, or say help. What would you like?"


def sanitize_user_name(recognized_name: str | None) -> str | None:
    """Clean up a recognized user name and check it against the blacklist.

    Only the first name is kept: anything from the first space onward is
    dropped. Returns None when nothing usable is left.
    """

    if not recognized_name:
        return None

    cleaned = recognized_name.split(" ", 1)[0]
    if not cleaned or cleaned in NAME_BLACKLIST:
        return None

    return cleaned
