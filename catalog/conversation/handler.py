# catalog/conversation/handler.py
import logging
from typing import Optional

from catalog.config import MIN_QUERY_LENGTH, PAGE_SIZE
from catalog.models import SearchMode
from catalog.services.search_service import SearchService
from . import rendering
from .models import ChatSession, Language, LastSearch, Reply, SessionState, Button
from .recovery import recover_last_search, recover_query
from .store import SessionStore
from .texts import get_texts

logger = logging.getLogger(__name__)

RESET_WORDS = {"/start", "0", "menu", "меню", "мәзір"}
NEXT_WORDS = {"d", "next", "дальше", "далее"}

PROMPT_KEYS = {
    SearchMode.ALL: "prompt_enter_query",
    SearchMode.TITLE: "prompt_enter_title",
    SearchMode.AUTHOR: "prompt_enter_author",
}

class ConversationHandler:
    """Drives one user's conversation turn by turn.

    Each call loads the user's session from the store, applies one input
    (free text or a button action), and saves the session back. The returned
    Reply is transport-neutral: the messenger adapter decides how to show
    text and buttons.
    """

    def __init__(self, search_service: SearchService, store: SessionStore, page_size: int = PAGE_SIZE):
        self.search_service = search_service
        self.store = store
        self.page_size = page_size

    def _load(self, user_id: str) -> ChatSession:
        return self.store.get(user_id) or ChatSession()

    def handle_text(self, user_id: str, text: str) -> Reply:
        """Handle a text message typed by the user"""
        session = self._load(user_id)
        try:
            # Queries are rendered on a single line
            return self._on_text(session, " ".join((text or "").split()))
        finally:
            self.store.set(user_id, session)

    def handle_action(self, user_id: str, action: str, displayed_text: Optional[str] = None) -> Reply:
        """Handle a button press.

        Args:
            user_id: Chat or phone identity of the user
            action: Action string attached to the pressed button
            displayed_text: Text of the message the button belongs to, used to
                recover the last search when the session lost it
        """
        session = self._load(user_id)
        try:
            return self._on_action(session, action or "", displayed_text)
        finally:
            self.store.set(user_id, session)

    # Text input

    def _on_text(self, session: ChatSession, text: str) -> Reply:
        if text.lower() in RESET_WORDS:
            return self._main_menu(session)

        if session.state == SessionState.AWAITING_QUERY:
            if len(text) < MIN_QUERY_LENGTH:
                return self._too_short(session)
            return self._search(session, text, 0, session.mode)

        if session.state == SessionState.BROWSING_RESULTS:
            if text.isdigit() and (self._on_page(session, int(text)) or len(text) < MIN_QUERY_LENGTH):
                return self._select_by_ordinal(session, int(text))
            if text.lower() in NEXT_WORDS:
                return self._next_page(session)
            if len(text) < MIN_QUERY_LENGTH:
                return self._too_short(session)
            return self._search(session, text, 0, session.mode)

        return self._main_menu(session, welcome=True)

    @staticmethod
    def _page_index(session: ChatSession, ordinal: int) -> int:
        offset = session.last_search.offset if session.last_search else 0
        return ordinal - offset - 1

    def _on_page(self, session: ChatSession, ordinal: int) -> bool:
        return 0 <= self._page_index(session, ordinal) < len(session.last_results)

    def _select_by_ordinal(self, session: ChatSession, ordinal: int) -> Reply:
        index = self._page_index(session, ordinal)
        if self._on_page(session, ordinal):
            return self._view_work(session, session.last_results[index], 0, None)
        t = get_texts(session.language)
        return Reply(text=t["invalid_number"], buttons=[[Button(label=t["back"], action=rendering.SEARCH_MENU)]])

    def _next_page(self, session: ChatSession) -> Reply:
        last = session.last_search
        if last is None or len(session.last_results) < self.page_size:
            t = get_texts(session.language)
            return Reply(text=t["search_no_results"], buttons=[[Button(label=t["back"], action=rendering.SEARCH_MENU)]])
        return self._search(session, last.query, last.offset + self.page_size, last.mode)

    # Button actions

    def _on_action(self, session: ChatSession, action: str, displayed_text: Optional[str]) -> Reply:
        kind, _, payload = action.partition(":")

        if action == rendering.MAIN_MENU:
            return self._main_menu(session)
        if action == rendering.SEARCH_MENU:
            session.reset()
            t = get_texts(session.language)
            return Reply(text=t["search_mode_prompt"], buttons=rendering.search_menu_buttons(session.language))
        if action == rendering.LANGUAGE_MENU:
            return Reply(text=get_texts(session.language)["choose_lang"], buttons=rendering.language_buttons())

        if kind == "lang":
            return self._select_language(session, payload)
        if kind == "mode":
            return self._await_query(session, payload)
        if kind == "search_page":
            return self._search_page(session, payload, displayed_text)
        if kind == "view_work":
            return self._view_work_action(session, payload, displayed_text)

        logger.warning(f"Unknown action: {action}")
        return self._main_menu(session)

    def _select_language(self, session: ChatSession, code: str) -> Reply:
        try:
            session.language = Language(code)
        except ValueError:
            logger.warning(f"Unknown language: {code}")
        session.reset()
        return Reply(
            text=get_texts(session.language)["lang_selected"],
            buttons=rendering.main_menu_buttons(session.language)
        )

    def _await_query(self, session: ChatSession, mode_value: str) -> Reply:
        try:
            mode = SearchMode(mode_value)
        except ValueError:
            logger.warning(f"Unknown search mode: {mode_value}")
            return self._main_menu(session)

        session.state = SessionState.AWAITING_QUERY
        session.mode = mode
        t = get_texts(session.language)
        return Reply(text=t[PROMPT_KEYS[mode]], buttons=[[Button(label=t["back"], action=rendering.SEARCH_MENU)]])

    def _search_page(self, session: ChatSession, payload: str, displayed_text: Optional[str]) -> Reply:
        mode_value, _, offset_value = payload.partition(":")
        try:
            mode = SearchMode(mode_value)
            offset = max(0, int(offset_value))
        except ValueError:
            logger.warning(f"Malformed search page action: {payload}")
            return self._main_menu(session)

        # The message the button belongs to wins over the session, which may
        # hold a newer search
        query = recover_query(displayed_text)
        if query is None and session.last_search is not None:
            query = session.last_search.query
        if not query:
            logger.debug("No query to page through, back to the main menu")
            return self._main_menu(session)
        return self._search(session, query, offset, mode)

    def _view_work_action(self, session: ChatSession, payload: str, displayed_text: Optional[str]) -> Reply:
        work_key, _, offset_value = payload.partition(":")
        try:
            offset = max(0, int(offset_value)) if offset_value else 0
        except ValueError:
            offset = 0
        if not work_key:
            return self._main_menu(session)
        return self._view_work(session, work_key, offset, displayed_text)

    # Shared steps

    def _main_menu(self, session: ChatSession, welcome: bool = False) -> Reply:
        session.reset()
        t = get_texts(session.language)
        text = f"{t['welcome']}\n\n{t['menu']}" if welcome else t["menu"]
        return Reply(text=text, buttons=rendering.main_menu_buttons(session.language))

    def _too_short(self, session: ChatSession) -> Reply:
        t = get_texts(session.language)
        return Reply(text=t["search_too_short"], buttons=[[Button(label=t["back"], action=rendering.SEARCH_MENU)]])

    def _search(self, session: ChatSession, query: str, offset: int, mode: SearchMode) -> Reply:
        t = get_texts(session.language)
        page = self.search_service.search_works(query, offset, self.page_size, mode)
        back = [[Button(label=t["back"], action=rendering.SEARCH_MENU)]]

        if not page.ok:
            return Reply(text=t["search_unavailable"], buttons=back)

        if not page.items:
            session.state = SessionState.AWAITING_QUERY
            session.mode = mode
            return Reply(text=t["search_no_results"], buttons=back)

        session.state = SessionState.BROWSING_RESULTS
        session.mode = mode
        session.last_search = LastSearch(query=query, mode=mode, offset=offset)
        session.last_results = [work.work_key for work in page.items]

        return Reply(
            text=rendering.render_results(session.language, query, mode, offset, page.items),
            buttons=rendering.results_buttons(session.language, mode, offset, page.items, self.page_size)
        )

    def _view_work(self, session: ChatSession, work_key: str, offset: int, displayed_text: Optional[str]) -> Reply:
        back_to = session.last_search
        if back_to is None:
            back_to = recover_last_search(displayed_text)
            if back_to is not None:
                logger.debug(f"Recovered last search from message: {back_to}")
                session.last_search = back_to
                session.mode = back_to.mode

        session.state = SessionState.BROWSING_RESULTS
        t = get_texts(session.language)

        stats = self.search_service.get_work_location_stats(work_key)
        page = self.search_service.get_editions(work_key, offset, self.page_size)
        if not page.ok:
            buttons = rendering.editions_buttons(session.language, work_key, 0, 0, back_to, self.page_size)
            return Reply(text=t["search_unavailable"], buttons=buttons)

        return Reply(
            text=rendering.render_editions(session.language, page.items, page.total, stats.locations,
                                         back_to.query if back_to else None),
            buttons=rendering.editions_buttons(session.language, work_key, offset, page.total, back_to, self.page_size)
        )
