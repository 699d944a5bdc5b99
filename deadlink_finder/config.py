# === FILE: deadlink_finder/config.py ===
"""
Модуль для загрузки и валидации конфигурации DeadLinkFinder.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from deadlink_finder.crawler.models import MAX_DEPTH, MAX_LINKS


class ScannerConfig(BaseModel):
    """Параметры одного запуска поиска битых ссылок."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(MAX_DEPTH, ge=0, description="Максимальная глубина обхода ссылок.")
    max_links: int = Field(MAX_LINKS, ge=1, description="Лимит ссылок, извлекаемых с одной страницы.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("DeadLinkFinder/1.0", min_length=1, description="Заголовок User-Agent.")
    link_parser: Literal["regex", "html"] = Field(
        "regex", description="Способ извлечения ссылок: лексический (regex) или BeautifulSoup (html)."
    )


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScannerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScannerConfig.

    Без явного пути берётся configs/default.yaml, а если его нет —
    значения по умолчанию. Отсутствующий явный путь даёт FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScannerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ScannerConfig(**data)
