"""
Модуль для загрузки и валидации конфигурации приложения.

Читает настройки из JSON-файла (по умолчанию config.json). Если файл
отсутствует, создает его с настройками по умолчанию.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field


DEFAULT_CONFIG_PATH = "config.json"

DEFAULT_SOURCE_DIRS = ["e:/FilesNota/572149/1", "e:/FilesNota/572149/2"]
DEFAULT_TARGET_DIRS = ["//192.168.2.15/5/test/1", "//192.168.2.15/5/test/2"]
DEFAULT_MIN_FILE_SIZE = 26463150

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass(frozen=True)
class LoggingConfig:
    """Конфигурация логирования."""
    log_dir: Path = Path("logs")
    retention_days: int = 5
    level: str = "INFO"


@dataclass(frozen=True)
class DirectoryPair:
    """Пара исходного и целевого каталогов."""
    source: Path
    target: Path


@dataclass(frozen=True)
class Config:
    """Основная конфигурация приложения."""
    source_dirs: List[Path]
    target_dirs: List[Path]
    min_file_size: int
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def pairs(self) -> List[DirectoryPair]:
        """Возвращает пары каталогов в порядке конфигурации."""
        return [
            DirectoryPair(source=source, target=target)
            for source, target in zip(self.source_dirs, self.target_dirs)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Преобразует конфигурацию в словарь формата файла настроек."""
        return {
            'source_dirs': [p.as_posix() for p in self.source_dirs],
            'target_dirs': [p.as_posix() for p in self.target_dirs],
            'min_file_size': self.min_file_size,
        }


def default_config() -> Config:
    """Возвращает конфигурацию по умолчанию."""
    return Config(
        source_dirs=[Path(p) for p in DEFAULT_SOURCE_DIRS],
        target_dirs=[Path(p) for p in DEFAULT_TARGET_DIRS],
        min_file_size=DEFAULT_MIN_FILE_SIZE
    )


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None
        self.created = False

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла или создает файл по умолчанию.

        Returns:
            Config: Объект конфигурации

        Raises:
            ValueError: Если файл не читается или конфигурация некорректна
        """
        self.created = False
        if not self.config_path.exists():
            self._config = default_config()
            self.save_config(self._config)
            self.created = True
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Ошибка при чтении файла конфигурации {self.config_path}: {e}")
        except OSError as e:
            raise ValueError(f"Ошибка при открытии файла конфигурации {self.config_path}: {e}")

        self._config = self._parse_config(data)
        self._validate_config()
        return self._config

    def save_config(self, config: Config) -> None:
        """
        Записывает конфигурацию в файл с отступом в 2 пробела.

        Args:
            config: Конфигурация для записи

        Raises:
            ValueError: Если файл не удалось записать
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ValueError(f"Не удалось записать файл конфигурации {self.config_path}: {e}")

    def _parse_config(self, data: Any) -> Config:
        """Преобразует разобранный JSON в объект конфигурации."""
        if not isinstance(data, dict):
            raise ValueError("Файл конфигурации должен содержать JSON-объект")

        for key in ('source_dirs', 'target_dirs', 'min_file_size'):
            if key not in data:
                raise ValueError(f"Параметр '{key}' не найден в конфигурации")

        return Config(
            source_dirs=self._parse_dir_list(data, 'source_dirs'),
            target_dirs=self._parse_dir_list(data, 'target_dirs'),
            min_file_size=data['min_file_size'],
            logging=self._parse_logging_config(data.get('logging', {}))
        )

    @staticmethod
    def _parse_dir_list(data: Dict[str, Any], key: str) -> List[Path]:
        value = data[key]
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"Параметр '{key}' должен быть списком строк")
        return [Path(item) for item in value]

    @staticmethod
    def _parse_logging_config(section: Any) -> LoggingConfig:
        """Загружает необязательную секцию логирования."""
        if not isinstance(section, dict):
            raise ValueError("Секция 'logging' должна быть JSON-объектом")

        defaults = LoggingConfig()
        return LoggingConfig(
            log_dir=Path(section.get('log_dir', defaults.log_dir)),
            retention_days=section.get('retention_days', defaults.retention_days),
            level=section.get('level', defaults.level)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        config = self._config

        if len(config.source_dirs) != len(config.target_dirs):
            raise ValueError(
                f"Количество исходных папок ({len(config.source_dirs)}) не совпадает "
                f"с количеством целевых ({len(config.target_dirs)})"
            )

        # bool является подклассом int
        if isinstance(config.min_file_size, bool) or not isinstance(config.min_file_size, int):
            raise ValueError("Минимальный размер файла должен быть целым числом")

        if config.min_file_size < 0:
            raise ValueError("Минимальный размер файла не может быть отрицательным")

        retention_days = config.logging.retention_days
        if isinstance(retention_days, bool) or not isinstance(retention_days, int) or retention_days < 0:
            raise ValueError("Срок хранения логов должен быть неотрицательным целым числом")

        if not isinstance(config.logging.level, str) or config.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Некорректный уровень логирования: {config.logging.level}")

    def get_config(self) -> Config:
        """
        Возвращает загруженную конфигурацию.

        Returns:
            Config: Объект конфигурации

        Raises:
            ValueError: Если конфигурация не загружена
        """
        if self._config is None:
            raise ValueError("Конфигурация не загружена. Вызовите load_config() сначала.")
        return self._config

    def reload_config(self) -> Config:
        """
        Перезагружает конфигурацию из файла.

        Returns:
            Config: Обновленный объект конфигурации
        """
        self._config = None
        return self.load_config()


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


if __name__ == "__main__":
    try:
        config = load_config()
        print("✅ Конфигурация успешно загружена!")
        for pair in config.pairs():
            print(f"📁 {pair.source} → {pair.target}")
        print(f"📏 Минимальный размер файла: {config.min_file_size} байт")
    except Exception as e:
        print(f"❌ Ошибка загрузки конфигурации: {e}")
