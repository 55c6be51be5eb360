"""Работа со снимками состояния встроенного редактора холста.

Снимок непрозрачен для сервера: это JSON-объект с ключами ``store``
(записи редактора по ключу) и ``schema`` (версии миграций редактора).
Сервер только проверяет эту форму и достраивает поле ``meta`` у записей,
чтобы редактор принимал снимки, сохраненные старыми клиентами.
"""
import copy
from typing import Any, Dict, Optional

# Последовательности схемы редактора, с которыми создается пустой холст
INITIAL_SCHEMA_SEQUENCES: Dict[str, int] = {
    "com.tldraw.store": 4,
    "com.tldraw.asset": 1,
    "com.tldraw.camera": 1,
    "com.tldraw.document": 2,
    "com.tldraw.instance": 25,
    "com.tldraw.instance_page_state": 5,
    "com.tldraw.page": 1,
    "com.tldraw.instance_presence": 6,
    "com.tldraw.pointer": 1,
    "com.tldraw.shape": 4,
    "com.tldraw.asset.bookmark": 2,
    "com.tldraw.asset.image": 5,
    "com.tldraw.asset.video": 5,
    "com.tldraw.shape.group": 0,
    "com.tldraw.shape.text": 3,
    "com.tldraw.shape.bookmark": 2,
    "com.tldraw.shape.draw": 2,
    "com.tldraw.shape.geo": 10,
    "com.tldraw.shape.note": 9,
    "com.tldraw.shape.line": 5,
    "com.tldraw.shape.frame": 1,
    "com.tldraw.shape.arrow": 6,
    "com.tldraw.shape.highlight": 1,
    "com.tldraw.shape.embed": 4,
    "com.tldraw.shape.image": 5,
    "com.tldraw.shape.video": 4,
    "com.tldraw.binding.arrow": 1,
}


def initial_snapshot() -> Dict[str, Any]:
    """Пустой холст: один документ и одна страница"""
    return {
        "store": {
            "document:document": {
                "gridSize": 10,
                "name": "",
                "id": "document:document",
                "typeName": "document",
            },
            "page:page": {
                "id": "page:page",
                "name": "Page 1",
                "index": "a1",
                "typeName": "page",
            },
        },
        "schema": {
            "schemaVersion": 2,
            "sequences": dict(INITIAL_SCHEMA_SEQUENCES),
        },
    }


def is_valid_snapshot(data: Any) -> bool:
    """Снимок должен быть объектом, store и schema тоже объекты (пустые допустимы)"""
    return (
        isinstance(data, dict)
        and isinstance(data.get("store"), dict)
        and isinstance(data.get("schema"), dict)
    )


def _missing_meta(meta: Any) -> bool:
    # пустые dict и list считаются заполненными, как в редакторе
    if isinstance(meta, (dict, list)):
        return False
    return not meta


def validate_and_fix_snapshot(snapshot: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Возвращает копию снимка, в которой у каждой записи store есть meta.

    Снимок без store возвращается как есть. Записи, которые не являются
    объектами, пропускаются. Исходный объект не изменяется.
    """
    if not isinstance(snapshot, dict) or not isinstance(snapshot.get("store"), dict):
        return snapshot

    fixed = dict(snapshot)
    store = dict(snapshot["store"])

    for key, record in store.items():
        if not isinstance(record, dict):
            continue
        if _missing_meta(record.get("meta")):
            store[key] = {**copy.deepcopy(record), "meta": {}}

    fixed["store"] = store
    return fixed
