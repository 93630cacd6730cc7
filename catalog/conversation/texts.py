# catalog/conversation/texts.py

TEXTS = {
    "ru": {
        "welcome": "Здравствуйте! Это бот библиотеки. Здесь можно найти книгу в каталоге.",
        "choose_lang": "Выберите язык:",
        "lang_selected": "Выбран русский язык",
        "menu": "Главное меню",
        "search": "🔍 Поиск книги",
        "change_lang": "🌐 Язык",
        "search_mode_prompt": "Как искать?",
        "btn_search_all": "Везде",
        "btn_search_title": "По названию",
        "btn_search_author": "По автору",
        "prompt_enter_query": "Введите название или автора:",
        "prompt_enter_title": "Введите название книги:",
        "prompt_enter_author": "Введите автора:",
        "search_too_short": "Запрос слишком короткий. Введите не менее 3 символов.",
        "search_no_results": "По вашему запросу ничего не найдено.",
        "search_unavailable": "Каталог временно недоступен. Попробуйте позже.",
        "mode": "Режим",
        "editions": "Издания",
        "show_editions": "Издания",
        "total_count": "всего",
        "storage": "Места хранения",
        "edition_date": "Издание",
        "edition_language": "Язык",
        "edition_location": "Расположение",
        "edition_index": "Шифр",
        "edition_volume": "Том",
        "edition_copies": "Экз",
        "back": "Назад",
        "next": "Далее",
        "main_menu": "Меню",
        "invalid_number": "Нет результата с таким номером.",
    },
    "kz": {
        "welcome": "Сәлеметсіз бе! Бұл кітапхана боты. Мұнда каталогтан кітап табуға болады.",
        "choose_lang": "Тілді таңдаңыз:",
        "lang_selected": "Қазақ тілі таңдалды",
        "menu": "Басты мәзір",
        "search": "🔍 Кітап іздеу",
        "change_lang": "🌐 Тіл",
        "search_mode_prompt": "Қалай іздейміз?",
        "btn_search_all": "Барлығы",
        "btn_search_title": "Атауы бойынша",
        "btn_search_author": "Авторы бойынша",
        "prompt_enter_query": "Атауын немесе авторын енгізіңіз:",
        "prompt_enter_title": "Кітап атауын енгізіңіз:",
        "prompt_enter_author": "Авторды енгізіңіз:",
        "search_too_short": "Сұраныс тым қысқа. Кемінде 3 таңба енгізіңіз.",
        "search_no_results": "Сұранысыңыз бойынша ештеңе табылмады.",
        "search_unavailable": "Каталог уақытша қолжетімсіз. Кейінірек көріңіз.",
        "mode": "Режим",
        "editions": "Басылымдар",
        "show_editions": "Басылымдар",
        "total_count": "барлығы",
        "storage": "Сақталатын орны",
        "edition_date": "Басылым",
        "edition_language": "Тілі",
        "edition_location": "Орны",
        "edition_index": "Шифр",
        "edition_volume": "Том",
        "edition_copies": "Дана",
        "back": "Артқа",
        "next": "Әрі қарай",
        "main_menu": "Мәзір",
        "invalid_number": "Мұндай нөмірлі нәтиже жоқ.",
    },
}

def get_texts(language) -> dict:
    """Texts for a language code or Language value, Russian when unknown"""
    code = getattr(language, "value", language)
    return TEXTS.get(code, TEXTS["ru"])
