from typing import Iterable, Optional


def score(pattern: str, candidate: str) -> Optional[int]:
    """Score a case-sensitive subsequence match, or None when there is none.

    Runs of consecutive matching characters score progressively higher, so
    ``web`` ranks ``web.1`` above ``worker.b``.
    """
    if not pattern:
        return 0
    idx = 0
    run = 0
    total = 0
    for ch in candidate:
        if idx < len(pattern) and ch == pattern[idx]:
            idx += 1
            run += 1 + run
        else:
            run = 0
        total += run
    return total if idx == len(pattern) else None


def fuzzy_filter(pattern: str, candidates: Iterable[str]) -> list[str]:
    """Candidates matching ``pattern``, best first; ties keep input order."""
    scored = []
    for i, c in enumerate(candidates):
        s = score(pattern or "", c)
        if s is not None:
            scored.append((-s, i, c))
    scored.sort()
    return [c for _, _, c in scored]
