from __future__ import annotations

from typing import Iterable, List

from .parser import ParsedResult


def determine_winners(results: Iterable[ParsedResult]) -> List[ParsedResult]:
    """Return every result tied for the fewest attempts, failures excluded.

    Ties are kept, in the order the results were submitted.
    """
    solved = [result for result in results if not result.failed]
    if not solved:
        return []
    best = min(int(result.attempts) for result in solved)
    return [result for result in solved if result.attempts == best]
