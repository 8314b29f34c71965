"""Static name pools and Cyrillic transliteration for email addresses."""

FIRST_NAMES_MALE: tuple[str, ...] = (
    "Александр", "Алексей", "Андрей", "Артем", "Борис",
    "Вадим", "Василий", "Виктор", "Владимир", "Дмитрий",
    "Евгений", "Иван", "Игорь", "Кирилл", "Максим",
    "Михаил", "Никита", "Олег", "Павел", "Роман",
    "Сергей", "Станислав", "Юрий", "Ярослав",
)

FIRST_NAMES_FEMALE: tuple[str, ...] = (
    "Александра", "Алина", "Анастасия", "Анна", "Валентина",
    "Валерия", "Вера", "Виктория", "Галина", "Дарья",
    "Екатерина", "Елена", "Ирина", "Ксения", "Лариса",
    "Марина", "Мария", "Наталья", "Ольга", "Светлана",
    "Татьяна", "Юлия", "Яна",
)

LAST_NAMES: tuple[str, ...] = (
    "Иванов", "Петров", "Сидоров", "Кузнецов", "Попов",
    "Васильев", "Смирнов", "Новиков", "Федоров", "Морозов",
    "Волков", "Алексеев", "Лебедев", "Семенов", "Егоров",
    "Павлов", "Козлов", "Степанов", "Николаев", "Орлов",
    "Андреев", "Макаров", "Никитин", "Захаров",
)

FEMININE_SUFFIX = "а"

_TRANSLIT = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "kh", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "shch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}


def feminize(last_name: str) -> str:
    return last_name + FEMININE_SUFFIX


def transliterate(value: str) -> str:
    """Lower-case ``value`` and spell Cyrillic letters in Latin."""
    return "".join(_TRANSLIT.get(ch, ch) for ch in value.lower())
