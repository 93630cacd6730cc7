# tests/test_conversation/test_conversation_handler.py
import pytest
from unittest.mock import Mock
from catalog.conversation import ConversationHandler, InMemorySessionStore, SessionState, Language, LastSearch
from catalog.conversation.texts import get_texts
from catalog.models import (
    SearchMode, QueryOutcome, Work, EditionView,
    WorksPage, EditionsPage, LocationSummary
)
from catalog.services import SearchService

USER = "77011234567"
RU = get_texts(Language.RU)

def make_works(count, offset=0):
    return WorksPage(
        items=[
            Work(work_key=f"{i:032x}", display_title=f"Книга {i}", display_author="Автор", editions_count=1)
            for i in range(offset + 1, offset + count + 1)
        ],
        total=offset + count
    )

def actions(reply):
    return [button.action for row in reply.buttons for button in row]

def labels(reply):
    return [button.label for row in reply.buttons for button in row]

@pytest.fixture
def search_service():
    service = Mock(spec=SearchService)
    service.search_works.return_value = make_works(3)
    service.get_editions.return_value = EditionsPage(
        items=[EditionView(id=1, title="Война и мир", author="Толстой", language="Русский", locations=["Абонемент"])],
        total=1
    )
    service.get_work_location_stats.return_value = LocationSummary(locations="Абонемент, ЧЗ")
    return service

@pytest.fixture
def store():
    return InMemorySessionStore()

@pytest.fixture
def handler(search_service, store):
    return ConversationHandler(search_service, store, page_size=10)

@pytest.fixture
def awaiting_query(handler):
    handler.handle_action(USER, "menu:search")
    handler.handle_action(USER, "mode:all")
    return handler

@pytest.fixture
def browsing(awaiting_query):
    awaiting_query.handle_text(USER, "война")
    return awaiting_query

def test_first_message_shows_welcome_and_menu(handler, store):
    reply = handler.handle_text(USER, "привет")
    assert reply.text.startswith(RU["welcome"])
    assert actions(reply) == ["menu:search", "menu:lang"]
    assert store.get(USER).state == SessionState.IDLE

def test_search_menu_offers_modes(handler):
    reply = handler.handle_action(USER, "menu:search")
    assert reply.text == RU["search_mode_prompt"]
    assert actions(reply) == ["mode:all", "mode:title", "mode:author", "menu:main"]

def test_choosing_mode_awaits_query(handler, store):
    reply = handler.handle_action(USER, "mode:title")
    assert reply.text == RU["prompt_enter_title"]
    session = store.get(USER)
    assert session.state == SessionState.AWAITING_QUERY
    assert session.mode == SearchMode.TITLE

def test_short_query_is_rejected_without_search(awaiting_query, search_service, store):
    reply = awaiting_query.handle_text(USER, "ми")
    assert reply.text == RU["search_too_short"]
    assert store.get(USER).state == SessionState.AWAITING_QUERY
    search_service.search_works.assert_not_called()

def test_query_shows_results(awaiting_query, search_service, store):
    reply = awaiting_query.handle_text(USER, "война")

    search_service.search_works.assert_called_once_with("война", 0, 10, SearchMode.ALL)
    lines = reply.text.splitlines()
    assert lines[0] == "🔎 война"
    assert lines[1] == "Режим: Везде"
    assert "1. Книга 1" in lines
    assert "3. Книга 3" in lines

    session = store.get(USER)
    assert session.state == SessionState.BROWSING_RESULTS
    assert session.last_search == LastSearch(query="война", mode=SearchMode.ALL, offset=0)
    assert session.last_results == [f"{i:032x}" for i in (1, 2, 3)]

def test_partial_page_has_no_next_button(browsing, store):
    reply = browsing.handle_action(USER, "search_page:all:0")
    assert labels(reply)[:3] == ["1", "2", "3"]
    assert "search_page:all:10" not in actions(reply)

def test_full_page_offers_next(awaiting_query, search_service):
    search_service.search_works.return_value = make_works(10)
    reply = awaiting_query.handle_text(USER, "война")
    assert len(reply.buttons[0]) == 5
    assert len(reply.buttons[1]) == 5
    assert "search_page:all:10" in actions(reply)

def test_next_word_pages_forward(awaiting_query, search_service, store):
    search_service.search_works.return_value = make_works(10)
    awaiting_query.handle_text(USER, "война")

    search_service.search_works.return_value = make_works(2, offset=10)
    reply = awaiting_query.handle_text(USER, "далее")

    search_service.search_works.assert_called_with("война", 10, 10, SearchMode.ALL)
    assert "11. Книга 11" in reply.text.splitlines()
    assert store.get(USER).last_search.offset == 10

def test_second_page_offers_previous(browsing, search_service):
    search_service.search_works.return_value = make_works(2, offset=10)
    reply = browsing.handle_action(USER, "search_page:all:10")
    assert "search_page:all:0" in actions(reply)

def test_search_page_takes_query_from_session(browsing, search_service):
    browsing.handle_action(USER, "search_page:all:10")
    search_service.search_works.assert_called_with("война", 10, 10, SearchMode.ALL)

def test_search_page_takes_query_from_shown_message(handler, search_service, store):
    displayed = "🔎 История: том 1\nРежим: По названию\n\n21. История"
    handler.handle_action(USER, "search_page:title:20", displayed_text=displayed)
    search_service.search_works.assert_called_once_with("История: том 1", 20, 10, SearchMode.TITLE)
    assert store.get(USER).last_search == LastSearch(query="История: том 1", mode=SearchMode.TITLE, offset=20)

def test_search_page_prefers_shown_message_over_session(browsing, search_service):
    browsing.handle_action(USER, "search_page:all:0", displayed_text="🔎 мир\n\n1. Мир")
    search_service.search_works.assert_called_with("мир", 0, 10, SearchMode.ALL)

def test_search_page_without_query_returns_to_menu(handler, search_service):
    reply = handler.handle_action(USER, "search_page:all:10", displayed_text="Главное меню")
    assert reply.text == RU["menu"]
    search_service.search_works.assert_not_called()

def test_search_page_action_fits_callback_limit(browsing, search_service):
    search_service.search_works.return_value = make_works(10)
    reply = browsing.handle_text(USER, "Очень длинное название книги про войну и мир")
    assert all(len(action.encode("utf-8")) <= 64 for action in actions(reply))

def test_no_results_keeps_awaiting_query(awaiting_query, search_service, store):
    search_service.search_works.return_value = WorksPage()
    reply = awaiting_query.handle_text(USER, "абырвалг")
    assert reply.text == RU["search_no_results"]
    assert store.get(USER).state == SessionState.AWAITING_QUERY

def test_store_unavailable_is_not_reported_as_no_results(awaiting_query, search_service, store):
    search_service.search_works.return_value = WorksPage(outcome=QueryOutcome.UNAVAILABLE)
    reply = awaiting_query.handle_text(USER, "война")
    assert reply.text == RU["search_unavailable"]
    assert store.get(USER).state == SessionState.AWAITING_QUERY

def test_number_opens_work(browsing, search_service):
    reply = browsing.handle_text(USER, "2")

    work_key = f"{2:032x}"
    search_service.get_work_location_stats.assert_called_once_with(work_key)
    search_service.get_editions.assert_called_once_with(work_key, 0, 10)
    lines = reply.text.splitlines()
    assert lines[0] == "🔎 война"
    assert lines[1] == "Издания (всего: 1):"
    assert "🏢 Места хранения: Абонемент, ЧЗ" in reply.text
    assert "📍 Расположение: Абонемент" in reply.text
    assert "search_page:all:0" in actions(reply)
    assert actions(reply)[-1] == "menu:main"

def test_unknown_number(browsing, search_service):
    reply = browsing.handle_text(USER, "15")
    assert reply.text == RU["invalid_number"]
    search_service.get_editions.assert_not_called()

@pytest.mark.parametrize("title", ["1984", "451"])
def test_number_off_page_is_searched_as_title(browsing, search_service, store, title):
    reply = browsing.handle_text(USER, title)
    assert search_service.search_works.call_count == 2
    search_service.search_works.assert_called_with(title, 0, 10, SearchMode.ALL)
    assert reply.text.splitlines()[0] == f"🔎 {title}"
    search_service.get_editions.assert_not_called()

def test_number_on_later_page_opens_work(awaiting_query, search_service):
    search_service.search_works.return_value = make_works(10, offset=100)
    awaiting_query.handle_action(USER, "mode:title")
    awaiting_query.handle_text(USER, "война")
    awaiting_query.handle_action(USER, "search_page:title:100")

    awaiting_query.handle_text(USER, "105")
    search_service.get_editions.assert_called_once_with(f"{105:032x}", 0, 10)

def test_line_breaks_in_query_become_spaces(awaiting_query, search_service):
    reply = awaiting_query.handle_text(USER, "война\nи мир")
    search_service.search_works.assert_called_once_with("война и мир", 0, 10, SearchMode.ALL)
    assert reply.text.splitlines()[:2] == ["🔎 война и мир", "Режим: Везде"]

def test_view_work_recovers_last_search_from_message(handler, store):
    displayed = "🔎 война и мир\nРежим: По названию\n\n3. Война и мир\n👤 Толстой\n📚 Издания: 2"
    reply = handler.handle_action(USER, "view_work:" + "a" * 32, displayed_text=displayed)

    assert "search_page:title:2" in actions(reply)
    session = store.get(USER)
    assert session.last_search == LastSearch(query="война и мир", mode=SearchMode.TITLE, offset=2)

def test_view_work_without_recoverable_search_has_no_back(handler):
    reply = handler.handle_action(USER, "view_work:" + "a" * 32, displayed_text="Главное меню")
    assert actions(reply) == ["menu:main"]

def test_editions_paging_buttons(handler, search_service):
    search_service.get_editions.return_value = EditionsPage(
        items=[EditionView(id=i, title="Война и мир") for i in range(10)],
        total=25
    )
    key = "a" * 32
    reply = handler.handle_action(USER, f"view_work:{key}")
    assert f"view_work:{key}:10" in actions(reply)

    reply = handler.handle_action(USER, f"view_work:{key}:10")
    search_service.get_editions.assert_called_with(key, 10, 10)
    assert f"view_work:{key}" in actions(reply)
    assert f"view_work:{key}:20" in actions(reply)

def test_edition_without_fields_shows_id(handler, search_service):
    search_service.get_editions.return_value = EditionsPage(items=[EditionView(id=42, title="Сборник")], total=1)
    search_service.get_work_location_stats.return_value = LocationSummary()
    reply = handler.handle_action(USER, "view_work:" + "a" * 32)
    assert "📄 #42" in reply.text
    assert "Места хранения" not in reply.text

def test_editions_unavailable(handler, search_service):
    search_service.get_editions.return_value = EditionsPage(outcome=QueryOutcome.UNAVAILABLE)
    reply = handler.handle_action(USER, "view_work:" + "a" * 32)
    assert reply.text == RU["search_unavailable"]

@pytest.mark.parametrize("word", ["0", "/start", "Меню"])
def test_reset_words_return_to_menu(browsing, store, word):
    reply = browsing.handle_text(USER, word)
    assert reply.text == RU["menu"]
    assert store.get(USER).state == SessionState.IDLE

def test_switching_language(handler, store):
    reply = handler.handle_action(USER, "lang:kz")
    assert reply.text == "Қазақ тілі таңдалды"
    assert store.get(USER).language == Language.KZ

    reply = handler.handle_action(USER, "menu:search")
    assert labels(reply)[:3] == ["Барлығы", "Атауы бойынша", "Авторы бойынша"]

def test_unknown_action_returns_to_menu(handler):
    reply = handler.handle_action(USER, "teleport:moon")
    assert reply.text == RU["menu"]

def test_sessions_are_per_user(awaiting_query, store):
    awaiting_query.handle_text(USER, "война")
    awaiting_query.handle_text("other", "война")
    assert store.get(USER).state == SessionState.BROWSING_RESULTS
    assert store.get("other").state == SessionState.IDLE
