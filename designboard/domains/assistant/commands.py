"""Мок-ассистент: превращает текстовую команду в элементы холста.

Никакого разбора языка здесь нет, только поиск подстрок по таблице
ключевых слов на английском и турецком. Каждый найденный вид фигуры
дает ровно один элемент, порядок элементов фиксирован порядком таблицы.
"""
from typing import Any, Dict, List, Sequence, Tuple

SHAPE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "rectangle": ("rectangle", "dikdörtgen"),
    "ellipse": ("circle", "daire", "çember"),
    "triangle": ("triangle", "üçgen"),
    "text": ("text", "yazı", "metin"),
    "line": ("line", "çizgi"),
}

# Порядок важен: побеждает первый найденный цвет
COLOR_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("red", ("red", "kırmızı")),
    ("blue", ("blue", "mavi")),
    ("green", ("green", "yeşil")),
]
DEFAULT_COLOR = "black"

TEXT_LABELS: List[Tuple[Tuple[str, ...], str]] = [
    (("hello", "merhaba"), "Hello World!"),
    (("ai",), "AI Generated Text"),
    (("test",), "Test Text"),
]
DEFAULT_TEXT_LABEL = "Sample Text"

# Положение и размер геометрических фигур: x, y, w, h
GEO_LAYOUT: Dict[str, Tuple[int, int, int, int]] = {
    "rectangle": (100, 100, 200, 100),
    "ellipse": (150, 150, 120, 120),
    "triangle": (200, 200, 150, 150),
}


def _contains_any(command: str, keywords: Sequence[str]) -> bool:
    return any(keyword in command for keyword in keywords)


def pick_color(command: str) -> str:
    for color, keywords in COLOR_KEYWORDS:
        if _contains_any(command, keywords):
            return color
    return DEFAULT_COLOR


def pick_text_label(command: str) -> str:
    for keywords, label in TEXT_LABELS:
        if _contains_any(command, keywords):
            return label
    return DEFAULT_TEXT_LABEL


def geo_element(geo: str, x: int, y: int, w: int, h: int, color: str) -> Dict[str, Any]:
    return {
        "type": "geo",
        "x": x,
        "y": y,
        "props": {
            "geo": geo,
            "w": w,
            "h": h,
            "color": color,
            "fill": "solid",
            "dash": "draw",
            "size": "m",
        },
    }


def text_element(text: str) -> Dict[str, Any]:
    return {
        "type": "text",
        "x": 120,
        "y": 130,
        "props": {
            "text": text,
            "color": "black",
            "font": "draw",
            "align": "middle",
            "size": "m",
        },
    }


def line_element(color: str) -> Dict[str, Any]:
    return {
        "type": "line",
        "x": 50,
        "y": 50,
        "props": {
            "color": color,
            "dash": "draw",
            "size": "m",
            "spline": "line",
        },
    }


def default_element() -> Dict[str, Any]:
    """Элемент по умолчанию, если в команде не нашлось ни одной фигуры"""
    return geo_element("rectangle", 100, 100, 150, 80, "blue")


def generate_mock_elements(command: str) -> List[Dict[str, Any]]:
    """Генерация элементов холста по ключевым словам команды"""
    command = command.lower()
    color = pick_color(command)
    elements: List[Dict[str, Any]] = []

    for shape, keywords in SHAPE_KEYWORDS.items():
        if not _contains_any(command, keywords):
            continue
        if shape in GEO_LAYOUT:
            x, y, w, h = GEO_LAYOUT[shape]
            elements.append(geo_element(shape, x, y, w, h, color))
        elif shape == "text":
            elements.append(text_element(pick_text_label(command)))
        elif shape == "line":
            elements.append(line_element(color))

    if not elements:
        elements.append(default_element())

    return elements
