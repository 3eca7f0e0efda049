"""Clan tag identification from a team's player names.

Clans mark their members with a shared fragment somewhere in the name
(``[USClan]Rambo``, ``Rambo.USClan``, ``xUSClanx``...) but there is no
fixed delimiter or position. The tag is therefore inferred: every
substring of at least MIN_TAG_LENGTH characters is a candidate, and the
one present in the most names wins, longer substrings winning ties.

Each substring counts once per name, however often it repeats inside
that name. Exact ties on (names, length) go to the substring seen first
when walking names in order, then start position, then end position,
which keeps the result stable for a given input.

Player counts are small (a server holds at most a few dozen players,
names are short), so plain enumeration is used.
"""

from collections.abc import Iterator, Sequence

MIN_TAG_LENGTH = 3
DEFAULT_MIN_MATCHES = 3


def substrings(name: str, min_length: int = MIN_TAG_LENGTH) -> Iterator[str]:
    """Yield each distinct substring of ``name`` with ``len >= min_length``.

    Order is by start position, then by length.
    """
    seen: set[str] = set()
    for start in range(len(name)):
        for end in range(start + min_length, len(name) + 1):
            sub = name[start:end]
            if sub not in seen:
                seen.add(sub)
                yield sub


def index_substrings(names: Sequence[str]) -> dict[str, set[int]]:
    """Map every candidate substring to the indices of names containing it.

    Insertion order of the returned dict is first-seen order, used for
    tie-breaking.
    """
    index: dict[str, set[int]] = {}
    for i, name in enumerate(names):
        for sub in substrings(name):
            index.setdefault(sub, set()).add(i)
    return index


def identify_clan_tag(
    names: Sequence[str], min_matches: int = DEFAULT_MIN_MATCHES
) -> str:
    """Return the most likely shared clan tag for ``names``.

    Args:
        names: Player names of one side, in roster order.
        min_matches: Minimum number of distinct names that must contain
            the tag.

    Returns:
        The winning substring, or ``""`` when no substring appears in at
        least ``min_matches`` names (including an empty ``names``).
    """
    best_tag = ""
    best_count = 0
    best_length = 0

    for sub, holders in index_substrings(names).items():
        count = len(holders)
        if count < min_matches:
            continue
        # Strict comparison keeps the first-seen substring on exact ties.
        if count > best_count or (count == best_count and len(sub) > best_length):
            best_tag = sub
            best_count = count
            best_length = len(sub)

    return best_tag
