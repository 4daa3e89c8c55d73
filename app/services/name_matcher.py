# Fuzzy névegyeztetés a dolgozói törzzsel (Levenshtein hasonlóság)
from typing import Iterable, Optional

SIMILARITY_THRESHOLD = 0.7


def edit_distance(a: str, b: str) -> int:
    """Kis-nagybetű független Levenshtein távolság.

    Examples:
        >>> edit_distance("Kovács", "kovacs")
        1
    """
    a = (a or "").lower()
    b = (b or "").lower()
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Hasonlóság 0 és 1 között: (hosszabb hossza - távolság) / hosszabb hossza."""
    a = a or ""
    b = b or ""
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    if len(longer) == 0:
        return 1.0
    return (len(longer) - edit_distance(longer, shorter)) / len(longer)


def match_employee(name: str, roster: Iterable) -> Optional[object]:
    """Megkeresi a névhez tartozó dolgozót a törzsben.

    Először pontos (kis-nagybetű független) egyezést keres, utána a legjobb
    hasonlóságú dolgozót, ha az meghaladja a 0.7-es küszöböt.

    Args:
        name (str): Az OCR által olvasott név.
        roster (Iterable): Objektumok `name` attribútummal (pl. Employee).

    Returns:
        A talált dolgozó vagy None.

    Examples:
        >>> match_employee("Kovacs Janos", [Employee(name="Kovács János")])
        <Employee(... name='Kovács János' ...)>
    """
    roster = list(roster)
    wanted = (name or "").strip().lower()
    for employee in roster:
        if (employee.name or "").strip().lower() == wanted:
            return employee

    best, best_score = None, 0.0
    for employee in roster:
        score = similarity(name, employee.name)
        if score > best_score:
            best, best_score = employee, score
    if best is not None and best_score > SIMILARITY_THRESHOLD:
        return best
    return None
