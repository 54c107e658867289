"""
Модуль бизнес-логики перемещения файлов.

Для каждой пары (исходная папка, целевая папка) обходит исходное дерево
и переносит в целевую папку все файлы не меньше заданного размера.
"""

from typing import Dict, List, Optional
from datetime import datetime
from pathlib import Path

try:
    from .config_loader import Config, DirectoryPair
    from .logger import FileMoverLogger
    from .file_ops import FileOps, FileOperationError
except ImportError:
    from config_loader import Config, DirectoryPair
    from logger import FileMoverLogger
    from file_ops import FileOps, FileOperationError


class TransferError(Exception):
    """Исключение, прерывающее обработку исходной папки."""

    def __init__(self, message: str, source_path: Path = None, target_path: Path = None):
        super().__init__(message)
        self.source_path = source_path
        self.target_path = target_path


class TransferStats:
    """Класс для хранения статистики перемещения."""

    def __init__(self):
        self.processed_files = 0
        self.successful_files = 0
        self.failed_files = 0
        self.processed_directories = 0
        self.failed_directories = 0
        self.start_time = None
        self.end_time = None
        self.errors = []

    def add_error(self, source: Path, target: Optional[Path], error: Exception):
        """Добавляет ошибку в список."""
        self.errors.append({
            'source': str(source),
            'target': str(target) if target is not None else None,
            'error': str(error),
            'timestamp': datetime.now()
        })

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность работы в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def to_dict(self) -> Dict:
        """Преобразует статистику в словарь."""
        return {
            'processed_files': self.processed_files,
            'successful_files': self.successful_files,
            'failed_files': self.failed_files,
            'processed_directories': self.processed_directories,
            'failed_directories': self.failed_directories,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.get_duration(),
            'error_count': len(self.errors)
        }


class Mover:
    """Основной класс для перемещения больших файлов."""

    def __init__(self, config: Config, logger: FileMoverLogger, file_ops: Optional[FileOps] = None):
        """
        Инициализация.

        Args:
            config: Конфигурация приложения
            logger: Логгер для записи операций
            file_ops: Операции с файлами (по умолчанию FileOps с тем же логгером)
        """
        self.config = config
        self.logger = logger
        self.file_ops = file_ops or FileOps(logger)
        self.stats = TransferStats()

    def process_directory(self, pair: DirectoryPair) -> int:
        """
        Переносит подходящие файлы одной исходной папки.

        Первая же ошибка перемещения логируется и прерывает обход этого дерева.

        Args:
            pair: Пара исходной и целевой папок

        Returns:
            int: Количество перемещенных файлов

        Raises:
            TransferError: Если перемещение файла не удалось
            OSError: Если исходную папку не удалось обойти
            ValueError: Если путь к исходной папке некорректен (например, содержит NUL)
        """
        self.logger.log_directory_start(pair.source)
        moved = 0

        for source_path in self.file_ops.iter_qualifying_files(pair.source, self.config.min_file_size):
            target_path = self.file_ops.get_target_path(pair.target, source_path)
            self.stats.processed_files += 1

            try:
                self.file_ops.move_file(source_path, target_path)
            except FileOperationError as e:
                self.stats.failed_files += 1
                self.stats.add_error(source_path, target_path, e)
                self.logger.log_file_error(source_path, target_path, e)
                raise TransferError(str(e), source_path, target_path) from e

            self.stats.successful_files += 1
            self.logger.log_file_moved(source_path, target_path)
            moved += 1

        return moved

    def run(self) -> TransferStats:
        """
        Обрабатывает все пары каталогов по порядку.

        Ошибка в одной паре логируется, обработка продолжается со следующей.

        Returns:
            TransferStats: Статистика перемещения
        """
        self.stats.start_time = datetime.now()

        for pair in self.config.pairs():
            self.stats.processed_directories += 1
            try:
                self.process_directory(pair)
            except (TransferError, OSError, ValueError) as e:
                self.stats.failed_directories += 1
                if not isinstance(e, TransferError):
                    self.stats.add_error(pair.source, None, e)
                self.logger.log_directory_error(pair.source, e)

        self.stats.end_time = datetime.now()
        return self.stats


def create_mover(config: Config, logger: FileMoverLogger) -> Mover:
    """
    Удобная функция для создания объекта перемещения.

    Args:
        config: Конфигурация приложения
        logger: Логгер

    Returns:
        Mover: Объект перемещения файлов
    """
    return Mover(config, logger)
