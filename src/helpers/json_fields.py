import json
import logging
from typing import Dict, Iterable

logger = logging.getLogger(__name__)


def parse_json_field(value, default_factory=list):
    """Поле, которое хранилище может вернуть JSON-строкой, в виде структуры.

    Списки и словари проходят как есть, строки декодируются, всё остальное
    (и строка с невалидным JSON) превращается в ``default_factory()``.
    """
    if isinstance(value, (list, dict)):
        return value
    if isinstance(value, (str, bytes)):
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Dropping undecodable JSON field value: %.60r", value)
            return default_factory()
        if isinstance(decoded, (list, dict)):
            return decoded
    return default_factory()


def apply_aliases(item, aliases: Dict[str, Iterable[str]]):
    """Переносит значения из старых имён ключей (camelCase) в наши.

    Ключ, который уже есть под нашим именем, не перезаписывается.
    Не-словари возвращаются без изменений.
    """
    if not isinstance(item, dict):
        return item
    item = dict(item)
    for field, old_names in aliases.items():
        if field in item:
            continue
        for old_name in old_names:
            if old_name in item:
                item[field] = item[old_name]
                break
    return item
