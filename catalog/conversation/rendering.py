# catalog/conversation/rendering.py
"""Message templates and button actions of the chat interface.

Results messages always start with the query line ``🔎 <query>`` followed by
the mode line, and number their entries ``<ordinal>. <title>``. Editions
messages reached from a results page start with the same query line. The
recovery module parses that layout back, so changes here must keep it readable.
"""
from typing import List, Optional

from catalog.config import PAGE_SIZE
from catalog.models import SearchMode, Work, EditionView
from .models import Button, LastSearch
from .texts import get_texts

QUERY_MARKER = "🔎"

MODE_TEXT_KEYS = {
    SearchMode.ALL: "btn_search_all",
    SearchMode.TITLE: "btn_search_title",
    SearchMode.AUTHOR: "btn_search_author",
}

# Button actions
MAIN_MENU = "menu:main"
SEARCH_MENU = "menu:search"
LANGUAGE_MENU = "menu:lang"

def mode_action(mode: SearchMode) -> str:
    return f"mode:{mode.value}"

def language_action(code: str) -> str:
    return f"lang:{code}"

def search_page_action(mode: SearchMode, offset: int) -> str:
    # Messenger callback data is limited to 64 bytes, so the query is read
    # back from the session or from the message the button belongs to
    return f"search_page:{mode.value}:{offset}"

def view_work_action(work_key: str, offset: int = 0) -> str:
    if offset:
        return f"view_work:{work_key}:{offset}"
    return f"view_work:{work_key}"

def back_to_results_action(last_search: LastSearch) -> str:
    return search_page_action(last_search.mode, last_search.offset)

def mode_line(language, mode: SearchMode) -> str:
    t = get_texts(language)
    return f"{t['mode']}: {t[MODE_TEXT_KEYS[mode]]}"

def render_results(language, query: str, mode: SearchMode, offset: int, works: List[Work]) -> str:
    t = get_texts(language)
    lines = [f"{QUERY_MARKER} {query}", mode_line(language, mode), ""]
    for i, work in enumerate(works):
        lines.append(f"{offset + i + 1}. {work.display_title or ''}")
        lines.append(f"👤 {work.display_author or ''}")
        lines.append(f"📚 {t['editions']}: {work.editions_count}")
        lines.append("")
    return "\n".join(lines).rstrip()

def results_buttons(language, mode: SearchMode, offset: int, works: List[Work],
                    page_size: int = PAGE_SIZE) -> List[List[Button]]:
    """Number buttons (five per row), page navigation and a way back to the search menu.

    "Next" is only offered when the page is full, which suggests more results.
    """
    t = get_texts(language)
    rows: List[List[Button]] = []
    numbers = [
        Button(label=str(offset + i + 1), action=view_work_action(work.work_key))
        for i, work in enumerate(works)
    ]
    for start in range(0, len(numbers), 5):
        rows.append(numbers[start:start + 5])

    navigation = []
    if offset > 0:
        navigation.append(Button(label=f"⬅️ {t['back']}",
                                 action=search_page_action(mode, max(0, offset - page_size))))
    if len(works) == page_size:
        navigation.append(Button(label=f"{t['next']} ➡️",
                                 action=search_page_action(mode, offset + page_size)))
    if navigation:
        rows.append(navigation)

    rows.append([Button(label=t["back"], action=SEARCH_MENU)])
    return rows

def format_edition(language, edition: EditionView) -> str:
    """Card lines for the fields an edition has; '#<id>' when it has none"""
    t = get_texts(language)
    parts = []
    if edition.data_edition:
        parts.append(f"📅 {t['edition_date']}: {edition.data_edition}")
    if edition.language:
        parts.append(f"🌐 {t['edition_language']}: {edition.language}")
    if edition.locations:
        parts.append(f"📍 {t['edition_location']}: {', '.join(edition.locations)}")
    if edition.index_catalogue:
        parts.append(f"🔖 {t['edition_index']}: {edition.index_catalogue}")
    if edition.volume:
        parts.append(f"📚 {t['edition_volume']}: {edition.volume}")
    if edition.copy_count:
        parts.append(f"🔢 {t['edition_copies']}: {edition.copy_count}")

    if not parts:
        return f"📄 #{edition.id}"
    return "\n".join(parts)

def render_editions(language, editions: List[EditionView], total: int, location_stats: str,
                    query: Optional[str] = None) -> str:
    """Editions of one work; the query line keeps the way back to the results recoverable"""
    t = get_texts(language)
    lines = [f"{QUERY_MARKER} {query}"] if query else []
    lines.append(f"{t['show_editions']} ({t['total_count']}: {total}):")
    if location_stats:
        lines.append(f"🏢 {t['storage']}: {location_stats}")
    lines.append("")
    for edition in editions:
        lines.append(f"📖 {edition.title}")
        lines.append(format_edition(language, edition))
        lines.append("")
    return "\n".join(lines).rstrip()

def editions_buttons(language, work_key: str, offset: int, total: int,
                     back_to: Optional[LastSearch], page_size: int = PAGE_SIZE) -> List[List[Button]]:
    t = get_texts(language)
    rows: List[List[Button]] = []

    navigation = []
    if offset > 0:
        navigation.append(Button(label="⬅️", action=view_work_action(work_key, max(0, offset - page_size))))
    if offset + page_size < total:
        navigation.append(Button(label="➡️", action=view_work_action(work_key, offset + page_size)))
    if navigation:
        rows.append(navigation)

    if back_to is not None:
        rows.append([Button(label=f"⬅️ {t['back']}", action=back_to_results_action(back_to))])
    rows.append([Button(label=t["main_menu"], action=MAIN_MENU)])
    return rows

def main_menu_buttons(language) -> List[List[Button]]:
    t = get_texts(language)
    return [
        [Button(label=t["search"], action=SEARCH_MENU)],
        [Button(label=t["change_lang"], action=LANGUAGE_MENU)],
    ]

def search_menu_buttons(language) -> List[List[Button]]:
    t = get_texts(language)
    return [
        [
            Button(label=t["btn_search_all"], action=mode_action(SearchMode.ALL)),
            Button(label=t["btn_search_title"], action=mode_action(SearchMode.TITLE)),
            Button(label=t["btn_search_author"], action=mode_action(SearchMode.AUTHOR)),
        ],
        [Button(label=t["back"], action=MAIN_MENU)],
    ]

def language_buttons() -> List[List[Button]]:
    return [[
        Button(label="Қазақ тілі", action=language_action("kz")),
        Button(label="Русский язык", action=language_action("ru")),
    ]]
