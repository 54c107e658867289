"""
Модуль для настройки и управления логированием приложения.

Каждое сообщение пишется одновременно в консоль и в лог-файл текущего дня
(logs/ДД-ММ-ГГГГ.log). При запуске удаляются лог-файлы старше срока хранения.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime, timedelta

try:
    from .config_loader import LoggingConfig
except ImportError:
    from config_loader import LoggingConfig


LOGGER_NAME = 'file_mover'
LOG_FORMAT = '%(asctime)s: %(message)s'
DATE_FORMAT = '%d-%m-%Y %H:%M:%S'
LOG_FILE_NAME_FORMAT = '%d-%m-%Y.log'


class LoggerSetupError(Exception):
    """Исключение для ошибок подготовки каталога или файла логов."""
    pass


def printable(text) -> str:
    """
    Экранирует символы, которые не кодируются в UTF-8.

    Имена файлов не в UTF-8 приходят из os.walk с суррогатами
    (surrogateescape); такие символы заменяются на \\udcXX.
    """
    return str(text).encode('utf-8', 'backslashreplace').decode('utf-8')


class PrintableFilter(logging.Filter):
    """Фильтр, приводящий текст записи к виду, который кодируется в UTF-8."""

    def filter(self, record):
        message = record.getMessage()
        safe_message = printable(message)
        if safe_message != message or record.args:
            record.msg = safe_message
            record.args = ()
        return True


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def __init__(self, fmt=None, datefmt=None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        """Форматирует запись лога с цветом."""
        # Запись общая с файловым обработчиком, поэтому красим готовую строку
        line = super().format(record)
        color = self.COLORS.get(record.levelname) if self.use_color else None
        if color:
            return f"{color}{line}{self.COLORS['RESET']}"
        return line


def stream_supports_color(stream) -> bool:
    """Проверяет, что поток выводится в терминал."""
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def get_log_file_path(log_dir: Path, dt: datetime) -> Path:
    """
    Возвращает путь к лог-файлу за указанный день.

    Args:
        log_dir: Каталог логов
        dt: Дата

    Returns:
        Path: Путь вида log_dir/ДД-ММ-ГГГГ.log
    """
    return Path(log_dir) / dt.strftime(LOG_FILE_NAME_FORMAT)


class FileMoverLogger:
    """Класс для управления логированием приложения File Mover."""

    def __init__(self, config: LoggingConfig, verbose: bool = False, now: Optional[datetime] = None):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
            verbose: Принудительно включить уровень DEBUG
            now: Дата, по которой выбирается лог-файл (по умолчанию текущая)

        Raises:
            LoggerSetupError: Если не удалось создать каталог или открыть файл
        """
        self.config = config
        self.log_dir = Path(config.log_dir)
        self.level = logging.DEBUG if verbose else getattr(logging, config.level.upper())
        self.log_file_path = get_log_file_path(self.log_dir, now or datetime.now())
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с файловым и консольным выводом."""
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(self.level)

        # Очищаем обработчики от предыдущей инициализации
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LoggerSetupError(f"Не удалось создать директорию для логов {self.log_dir}: {e}")

        try:
            file_handler = logging.FileHandler(
                filename=self.log_file_path,
                mode='a',
                encoding='utf-8',
                errors='backslashreplace'
            )
        except OSError as e:
            raise LoggerSetupError(f"Не удалось открыть лог-файл {self.log_file_path}: {e}")
        file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        file_handler.setLevel(self.level)
        file_handler.addFilter(PrintableFilter())

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(
            fmt=LOG_FORMAT,
            datefmt=DATE_FORMAT,
            use_color=stream_supports_color(sys.stdout)
        ))
        console_handler.setLevel(self.level)
        console_handler.addFilter(PrintableFilter())

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def get_logger(self) -> logging.Logger:
        """
        Возвращает настроенный логгер.

        Returns:
            logging.Logger: Настроенный логгер
        """
        if self.logger is None:
            raise RuntimeError("Логгер не инициализирован")
        return self.logger

    def log_info(self, message: str) -> None:
        """Логирует сообщение с меткой [INFO]."""
        self.logger.info(f"[INFO] {message}")

    def log_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует сообщение с меткой [ERROR].

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error is not None:
            self.logger.error(f"[ERROR] {message}: {error}")
        else:
            self.logger.error(f"[ERROR] {message}")

    def log_program_started(self) -> None:
        self.log_info("Программа запущена")

    def log_program_finished(self) -> None:
        self.log_info("Программа завершена")

    def log_config_created(self, config_path: Path) -> None:
        """Логирует создание файла конфигурации по умолчанию."""
        self.log_info(f"Создан файл конфигурации по умолчанию: {config_path}")

    def log_directory_start(self, source_dir: Path) -> None:
        """
        Логирует начало обработки исходной папки.

        Args:
            source_dir: Исходная папка
        """
        self.logger.info(f"Обработка исходной папки: {source_dir}")

    def log_file_moved(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует успешное перемещение файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
        """
        self.logger.info(f"Файл {source_path} перемещен в {target_path}")

    def log_file_error(self, source_path: Path, target_path: Path, error: Exception) -> None:
        """
        Логирует ошибку при перемещении файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
            error: Исключение
        """
        self.log_error(f"Ошибка при перемещении файла {source_path} в {target_path}", error)

    def log_directory_error(self, source_dir: Path, error: Exception) -> None:
        """Логирует ошибку, прервавшую обработку исходной папки."""
        self.log_error(f"Ошибка при обработке папки {source_dir}", error)

    def log_old_log_removed(self, file_name: str) -> None:
        self.logger.info(f"Удален старый лог-файл: {file_name}")

    def log_file_operation(self, operation: str, file_path: Path) -> None:
        """
        Логирует операцию с файлом на уровне DEBUG.

        Args:
            operation: Тип операции (open, create, copy, delete)
            file_path: Путь к файлу
        """
        self.logger.debug(f"{operation.upper()}: {file_path}")

    def clean_old_logs(self, now: Optional[datetime] = None) -> int:
        """
        Удаляет лог-файлы, последнее изменение которых старше срока хранения.

        Ошибки по отдельным файлам логируются, файл пропускается.

        Args:
            now: Текущий момент (по умолчанию datetime.now())

        Returns:
            int: Количество удаленных файлов
        """
        try:
            entries = sorted(os.scandir(self.log_dir), key=lambda e: e.name)
        except OSError as e:
            self.log_error("Не удалось прочитать директорию логов", e)
            return 0

        cutoff = (now or datetime.now()) - timedelta(days=self.config.retention_days)
        cutoff_ts = cutoff.timestamp()
        removed = 0

        for entry in entries:
            # Текущий лог-файл открыт на запись и не удаляется при любом сроке хранения
            if Path(entry.path) == self.log_file_path:
                continue
            try:
                if entry.is_dir():
                    continue
                modified = os.stat(entry.path).st_mtime
            except OSError as e:
                self.log_error(f"Не удалось получить информацию о файле {entry.name}", e)
                continue

            if modified < cutoff_ts:
                try:
                    os.remove(entry.path)
                except OSError as e:
                    self.log_error(f"Не удалось удалить старый лог-файл {entry.name}", e)
                    continue
                self.log_old_log_removed(entry.name)
                removed += 1

        return removed

    def close(self) -> None:
        """Закрывает обработчики логгера."""
        if self.logger is None:
            return
        for handler in self.logger.handlers[:]:
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)


def setup_logger(config: LoggingConfig, verbose: bool = False) -> FileMoverLogger:
    """
    Удобная функция для быстрой настройки логгера.

    Args:
        config: Конфигурация логирования
        verbose: Включить уровень DEBUG

    Returns:
        FileMoverLogger: Настроенный логгер
    """
    return FileMoverLogger(config, verbose=verbose)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Получает логгер по имени.

    Args:
        name: Имя логгера

    Returns:
        logging.Logger: Логгер
    """
    return logging.getLogger(name)
