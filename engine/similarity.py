"""
String similarity for fuzzy vocabulary lookups.

similarity() scores word resolution and title-word ranking. It is
asymmetric: the first argument (a query token) scores 1.0 whenever it
occurs inside the second (a dictionary term or title word), but not the
other way round. Product matching uses the symmetric edit_similarity(),
where a word fragment ("note" in "notebk") gets no containment credit.
"""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings.

    Minimum number of single-character insertions, deletions and
    substitutions to turn one string into the other. Symmetric.

    Examples:
        >>> edit_distance("laptp", "laptop")
        1
        >>> edit_distance("mobl", "mobile")
        2
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Case-insensitive similarity of a query token to a candidate term.

    Args:
        a: Query token (the needle)
        b: Candidate term (the haystack)

    Returns:
        1.0 if b contains a; otherwise
        (max_len - edit_distance) / max_len, in [0, 1]

    Example:
        >>> similarity("lap", "laptop")
        1.0
        >>> similarity("labtop", "laptop")
        0.8333333333333334
    """
    a = a.lower()
    b = b.lower()

    if a in b:
        return 1.0

    max_len = max(len(a), len(b))
    return (max_len - edit_distance(a, b)) / max_len


def edit_similarity(a: str, b: str) -> float:
    """
    Symmetric, case-insensitive edit-distance similarity in [0, 1].

    Example:
        >>> edit_similarity("note", "notebk")
        0.6666666666666667
        >>> edit_similarity("computr", "computer")
        0.875
    """
    return Levenshtein.normalized_similarity(a.lower(), b.lower())
