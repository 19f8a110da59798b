from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .models import TodoItem


# PUBLIC_INTERFACE
def summarize(todos: Iterable[TodoItem], today: Optional[date] = None) -> Dict[str, Any]:
    """
    Build the header summary shown above the todo list.

    Args:
        todos: The current todo list.
        today: Date to display; defaults to the current local date.

    Returns:
        Dict with keys: date, weekday, remaining, total.
    """
    day = today or date.today()
    # Ensure todos is materialized as a list (in case an iterator is passed)
    materialized: List[TodoItem] = list(todos)
    remaining = sum(1 for t in materialized if not t.done)
    return {
        "date": f"{day:%B} {day.day}, {day.year}",
        "weekday": f"{day:%A}",
        "remaining": remaining,
        "total": len(materialized),
    }
