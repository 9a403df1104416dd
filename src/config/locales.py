"""
UI translations for the supported languages.

Every language carries the same set of keys. Built-in charts are shown
under a translated name; user-created charts keep the name they were given.
"""

from typing import Dict

from config.constants import (
    MENS_JACKETS_CHART_ID,
    SPORTSWEAR_CHART_ID,
    SUPPORTED_LANGUAGES,
    UNIVERSAL_CHART_ID,
)


TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "uk": {
        "app_title": "Підбір розміру одягу",
        "app_subtitle": "Завантажте фото та вкажіть зріст, а ШІ підбере ваш розмір",
        "select_category": "Категорія одягу",
        "using_table": "Використовується таблиця",
        "rows": "рядків",
        "show_table": "Показати таблицю",
        "hide_table": "Сховати таблицю",
        "instructions_title": "Як це працює",
        "instructions_step1": "Оберіть категорію одягу",
        "instructions_step2": "Завантажте фото на повний зріст",
        "instructions_step3": "Вкажіть зріст і, за бажанням, вагу",
        "instructions_note": "Результат є орієнтовним і залежить від якості фото",
        "error_analysis": "Не вдалося проаналізувати фото. Спробуйте ще раз.",
        "chart_universal": "Універсальна таблиця",
        "chart_mens_jackets": "Чоловічі куртки",
        "chart_sportswear": "Спортивні костюми",
        "photo_label": "Ваше фото",
        "drag_drop": "Перетягніть фото сюди",
        "or_click": "або натисніть, щоб обрати файл",
        "file_hint": "JPG, PNG або WEBP",
        "height_label": "Зріст (см)",
        "weight_label": "Вага (кг, необов'язково)",
        "analyze_btn": "Підібрати розмір",
        "analyzing_btn": "Аналізуємо...",
        "privacy_note": "Фото використовується лише для аналізу і не зберігається",
        "rec_title": "Рекомендований розмір",
        "ai_estimates": "Оцінка параметрів",
        "chest": "Груди",
        "waist": "Талія",
        "hips": "Стегна",
        "confidence": "Впевненість",
        "try_again": "Спробувати ще раз",
        "editor_title": "Редактор таблиць розмірів",
        "your_categories": "Ваші категорії",
        "add_table": "Додати таблицю",
        "category_name_placeholder": "Назва категорії",
        "add_column": "Додати стовпець",
        "add_row": "Додати рядок",
        "save": "Зберегти",
        "cancel": "Скасувати",
        "error_unique": "Назви стовпців мають бути унікальними",
        "error_empty": "Назви стовпців не можуть бути порожніми",
        "error_delete_last": "Не можна видалити останню категорію",
        "error_heterogeneous": "Усі рядки таблиці мають містити однакові стовпці",
        "error_duplicate_id": "Ідентифікатори категорій мають бути унікальними",
        "new_column": "Новий стовпець",
        "new_category": "Нова категорія",
        "column_size": "Розмір",
        "column_parameters": "Параметри",
        "column_height": "Зріст",
        "column_chest": "Груди",
    },
    "en": {
        "app_title": "Clothing Size Finder",
        "app_subtitle": "Upload a photo and enter your height, and AI will find your size",
        "select_category": "Clothing category",
        "using_table": "Using table",
        "rows": "rows",
        "show_table": "Show table",
        "hide_table": "Hide table",
        "instructions_title": "How it works",
        "instructions_step1": "Choose a clothing category",
        "instructions_step2": "Upload a full-length photo",
        "instructions_step3": "Enter your height and, optionally, your weight",
        "instructions_note": "The result is an estimate and depends on photo quality",
        "error_analysis": "Failed to analyze the photo. Please try again.",
        "chart_universal": "Universal chart",
        "chart_mens_jackets": "Men's jackets",
        "chart_sportswear": "Sportswear",
        "photo_label": "Your photo",
        "drag_drop": "Drag your photo here",
        "or_click": "or click to choose a file",
        "file_hint": "JPG, PNG or WEBP",
        "height_label": "Height (cm)",
        "weight_label": "Weight (kg, optional)",
        "analyze_btn": "Find my size",
        "analyzing_btn": "Analyzing...",
        "privacy_note": "The photo is only used for the analysis and is not stored",
        "rec_title": "Recommended size",
        "ai_estimates": "Estimated measurements",
        "chest": "Chest",
        "waist": "Waist",
        "hips": "Hips",
        "confidence": "Confidence",
        "try_again": "Try again",
        "editor_title": "Size chart editor",
        "your_categories": "Your categories",
        "add_table": "Add table",
        "category_name_placeholder": "Category name",
        "add_column": "Add column",
        "add_row": "Add row",
        "save": "Save",
        "cancel": "Cancel",
        "error_unique": "Column names must be unique",
        "error_empty": "Column names cannot be empty",
        "error_delete_last": "The last category cannot be deleted",
        "error_heterogeneous": "All rows of a chart must have the same columns",
        "error_duplicate_id": "Category ids must be unique",
        "new_column": "New column",
        "new_category": "New category",
        "column_size": "Size",
        "column_parameters": "Parameters",
        "column_height": "Height",
        "column_chest": "Chest",
    },
    "ru": {
        "app_title": "Подбор размера одежды",
        "app_subtitle": "Загрузите фото и укажите рост, а ИИ подберет ваш размер",
        "select_category": "Категория одежды",
        "using_table": "Используется таблица",
        "rows": "строк",
        "show_table": "Показать таблицу",
        "hide_table": "Скрыть таблицу",
        "instructions_title": "Как это работает",
        "instructions_step1": "Выберите категорию одежды",
        "instructions_step2": "Загрузите фото в полный рост",
        "instructions_step3": "Укажите рост и, по желанию, вес",
        "instructions_note": "Результат ориентировочный и зависит от качества фото",
        "error_analysis": "Не удалось проанализировать фото. Попробуйте еще раз.",
        "chart_universal": "Универсальная таблица",
        "chart_mens_jackets": "Мужские куртки",
        "chart_sportswear": "Спортивные костюмы",
        "photo_label": "Ваше фото",
        "drag_drop": "Перетащите фото сюда",
        "or_click": "или нажмите, чтобы выбрать файл",
        "file_hint": "JPG, PNG или WEBP",
        "height_label": "Рост (см)",
        "weight_label": "Вес (кг, необязательно)",
        "analyze_btn": "Подобрать размер",
        "analyzing_btn": "Анализируем...",
        "privacy_note": "Фото используется только для анализа и не сохраняется",
        "rec_title": "Рекомендуемый размер",
        "ai_estimates": "Оценка параметров",
        "chest": "Грудь",
        "waist": "Талия",
        "hips": "Бедра",
        "confidence": "Уверенность",
        "try_again": "Попробовать еще раз",
        "editor_title": "Редактор таблиц размеров",
        "your_categories": "Ваши категории",
        "add_table": "Добавить таблицу",
        "category_name_placeholder": "Название категории",
        "add_column": "Добавить столбец",
        "add_row": "Добавить строку",
        "save": "Сохранить",
        "cancel": "Отмена",
        "error_unique": "Названия столбцов должны быть уникальными",
        "error_empty": "Названия столбцов не могут быть пустыми",
        "error_delete_last": "Нельзя удалить последнюю категорию",
        "error_heterogeneous": "Все строки таблицы должны содержать одинаковые столбцы",
        "error_duplicate_id": "Идентификаторы категорий должны быть уникальными",
        "new_column": "Новый столбец",
        "new_category": "Новая категория",
        "column_size": "Размер",
        "column_parameters": "Параметры",
        "column_height": "Рост",
        "column_chest": "Грудь",
    },
}

# Built-in chart id -> translation key of its display name
_BUILTIN_CHART_NAME_KEYS: Dict[str, str] = {
    UNIVERSAL_CHART_ID: "chart_universal",
    MENS_JACKETS_CHART_ID: "chart_mens_jackets",
    SPORTSWEAR_CHART_ID: "chart_sportswear",
}


def normalize_language(language: str) -> str:
    """Return the language code lowercased, or raise ValueError if unsupported."""
    code = (language or "").strip().lower()
    if code not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language '{language}'. Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return code


def get_translations(language: str) -> Dict[str, str]:
    """Get the UI strings for a language."""
    return TRANSLATIONS[normalize_language(language)]


def translate(language: str, key: str) -> str:
    """Look up one UI string. Unknown keys come back unchanged."""
    return get_translations(language).get(key, key)


def chart_display_name(chart_id: str, name: str, language: str) -> str:
    """
    Name to show for a chart.

    Built-in charts are translated by id while they still carry one of their
    built-in names; a renamed or custom chart keeps its own name.
    """
    key = _BUILTIN_CHART_NAME_KEYS.get(chart_id)
    if key is None:
        return name
    if name not in {strings[key] for strings in TRANSLATIONS.values()}:
        return name
    return translate(language, key)
