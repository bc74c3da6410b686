"""User-visible strings per locale."""

LABELS = {
    "ru": {
        "subtitle": "Дневник разработки",
        "projects": "Проекты",
        "stages": "этапов",
        "about": "О проекте",
        "read_more": "Читать далее",
        "collapse": "Свернуть",
        "toc": "Оглавление",
        "stage": "Этап",
        "previous_stage": "← Предыдущий этап:",
        "what_done": "Что сделано",
        "current_impl": "Текущая реализация на:",
        "working_version": "Рабочая версия проекта доступна по адресу:",
        "other_projects": "← Другие проекты",
    },
    "en": {
        "subtitle": "Development Diary",
        "projects": "Projects",
        "stages": "stages",
        "about": "About the project",
        "read_more": "Read more",
        "collapse": "Collapse",
        "toc": "Table of Contents",
        "stage": "Stage",
        "previous_stage": "← Previous stage:",
        "what_done": "What was done",
        "current_impl": "Current implementation at:",
        "working_version": "Working version available at:",
        "other_projects": "← Other projects",
    },
}

SECTION_TITLES = {
    "ru": {
        "what_was": "Что было",
        "solution": "Решение",
        "why_solution": "Почему такое решение",
        "pros": "Плюсы",
        "cons": "Минусы",
        "gotchas": "Подводные камни",
    },
    "en": {
        "what_was": "What was needed",
        "solution": "Solution",
        "why_solution": "Why this solution",
        "pros": "Pros",
        "cons": "Cons",
        "gotchas": "Gotchas",
    },
}


def label(lang: str, key: str) -> str:
    return LABELS.get(lang, LABELS["ru"])[key]


def section_title(lang: str, key: str) -> str:
    return SECTION_TITLES.get(lang, SECTION_TITLES["ru"])[key]
