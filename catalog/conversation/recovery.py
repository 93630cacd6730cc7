# catalog/conversation/recovery.py
"""Rebuild the last search from a results message already shown to the user.

Used only when the session no longer remembers the search (for example after
a restart). Parsing is best effort: anything that does not look like a
results message gives ``None`` and the caller simply offers no "back" button.
"""
import re
from typing import Optional

from catalog.models import SearchMode
from .models import LastSearch, Language
from .rendering import QUERY_MARKER, mode_line

_QUERY_LINE = re.compile(r"^" + re.escape(QUERY_MARKER) + r"\s*(?P<query>.+?)\s*$")
_ENTRY_LINE = re.compile(r"^\s*\*?(?P<ordinal>\d+)\.\*?\s")

def _recover_mode(line: str) -> SearchMode:
    for language in Language:
        for mode in SearchMode:
            if line == mode_line(language, mode):
                return mode
    return SearchMode.ALL

def recover_query(message_text: Optional[str]) -> Optional[str]:
    """Query shown on the first line of a results or editions message"""
    if not message_text:
        return None
    lines = message_text.splitlines()
    match = _QUERY_LINE.match(lines[0].strip()) if lines else None
    if not match:
        return None
    # Formatting marks some transports leave around the query
    return match.group("query").strip("*_ ").strip() or None

def recover_last_search(message_text: Optional[str]) -> Optional[LastSearch]:
    """Parse query, mode and offset out of a rendered results message.

    Example:
        A message starting with the line "🔎 война и мир" whose first entry
        is "3. ..." gives LastSearch(query="война и мир", offset=2).
    """
    query = recover_query(message_text)
    if query is None:
        return None

    lines = [line.strip() for line in message_text.splitlines()]

    for line in lines[1:]:
        entry = _ENTRY_LINE.match(line)
        if entry:
            ordinal = int(entry.group("ordinal"))
            if ordinal < 1:
                return None
            mode = _recover_mode(lines[1]) if len(lines) > 1 else SearchMode.ALL
            return LastSearch(query=query, mode=mode, offset=ordinal - 1)

    return None
