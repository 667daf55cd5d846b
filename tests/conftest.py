"""Конфигурация pytest с фикстурами для тестов."""
import sys
from pathlib import Path

import pytest

# Добавляем tests в путь для импорта
tests_dir = Path(__file__).parent
sys.path.insert(0, str(tests_dir))

from helpers.factories import ConfigFactory  # noqa: E402


@pytest.fixture
def config():
    """Фикстура с типичной конфигурацией: https-шаблон и ссылка на смену аватара."""
    return ConfigFactory.create_config()
