from typing import Optional


def levenshtein_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def fuzzy_match(value: str, options: list[str]) -> Optional[str]:
    """Return the option ``value`` most plausibly means, or ``None``.

    A case-insensitive exact match wins.  Otherwise the closest option is
    accepted when it is within ``max(2, len(option) * 0.3)`` edits.
    """
    normalized = value.strip().lower()

    for option in options:
        if normalized == option.lower():
            return option

    best: Optional[str] = None
    best_distance = None
    for option in options:
        distance = levenshtein_distance(normalized, option.lower())
        allowed = max(2, int(len(option) * 0.3))
        if distance <= allowed and (best_distance is None or distance < best_distance):
            best, best_distance = option, distance
    return best
