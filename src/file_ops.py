"""
Модуль для операций с файловой системой.

Обход исходных каталогов с фильтром по размеру и перемещение файла
копированием с последующим удалением исходника.
"""

import os
import shutil
import stat
from pathlib import Path
from typing import Iterator, Union

try:
    from .logger import FileMoverLogger
except ImportError:
    from logger import FileMoverLogger


PathLike = Union[str, Path]


class FileOperationError(Exception):
    """Исключение для ошибок операций с файлами."""

    def __init__(self, message: str, source_path: Path = None, target_path: Path = None):
        super().__init__(message)
        self.source_path = source_path
        self.target_path = target_path


class SourceOpenError(FileOperationError):
    """Не удалось открыть исходный файл."""
    pass


class FileConflictError(FileOperationError):
    """Целевой файл уже существует."""
    pass


class TargetCreateError(FileOperationError):
    """Не удалось создать целевой файл."""
    pass


class FileCopyError(FileOperationError):
    """Ошибка при копировании содержимого."""
    pass


class SourceDeleteError(FileOperationError):
    """Не удалось удалить исходный файл после копирования."""
    pass


def _raise_walk_error(error: OSError) -> None:
    raise error


class FileOps:
    """Класс для операций с файловой системой."""

    # Размер блока при потоковом копировании
    COPY_BUFFER_SIZE = 1024 * 1024

    def __init__(self, logger: FileMoverLogger):
        """
        Инициализация операций с файлами.

        Args:
            logger: Логгер для записи операций
        """
        self.logger = logger

    def iter_qualifying_files(self, source_dir: PathLike, min_file_size: int) -> Iterator[Path]:
        """
        Рекурсивно обходит каталог и возвращает файлы не меньше заданного размера.

        Каталоги и файлы обходятся в лексикографическом порядке. Ошибка обхода
        (в том числе отсутствие исходного каталога) пробрасывается наверх.

        Args:
            source_dir: Исходный каталог
            min_file_size: Минимальный размер файла в байтах

        Yields:
            Path: Путь к подходящему файлу
        """
        for root, dirs, files in os.walk(source_dir, onerror=_raise_walk_error):
            dirs.sort()
            for name in sorted(files):
                file_path = Path(root) / name
                # Символические ссылки не разыменовываются и не переносятся
                file_stat = file_path.lstat()
                if not stat.S_ISREG(file_stat.st_mode):
                    continue
                if file_stat.st_size >= min_file_size:
                    yield file_path

    @staticmethod
    def get_target_path(target_dir: PathLike, source_path: PathLike) -> Path:
        """
        Возвращает путь назначения: целевой каталог плюс имя файла.

        Вложенная структура исходного каталога не сохраняется.
        """
        return Path(target_dir) / Path(source_path).name

    def move_file(self, source_path: PathLike, target_path: PathLike) -> Path:
        """
        Копирует файл в целевой путь и удаляет исходный файл.

        Исходный файл удаляется только после успешного копирования и закрытия
        обоих файлов. Существующий целевой файл никогда не перезаписывается.
        Если копирование прервалось, созданный целевой файл удаляется.
        Сбой процесса между копированием и удалением оставляет обе копии.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь

        Returns:
            Path: Путь к перемещенному файлу

        Raises:
            SourceOpenError: Если исходный файл не открывается
            FileConflictError: Если целевой файл уже существует
            TargetCreateError: Если целевой файл не создается
            FileCopyError: Если копирование прервалось
            SourceDeleteError: Если исходный файл не удалось удалить
        """
        source_path = Path(source_path)
        target_path = Path(target_path)

        try:
            source_file = open(source_path, 'rb')
        except OSError as e:
            raise SourceOpenError(
                f"Не удалось открыть исходный файл: {e}", source_path, target_path
            )
        self.logger.log_file_operation("open", source_path)

        with source_file:
            try:
                # Режим 'x' создает файл только если его еще нет
                target_file = open(target_path, 'xb')
            except FileExistsError:
                raise FileConflictError(
                    f"Целевой файл уже существует: {target_path}", source_path, target_path
                )
            except OSError as e:
                raise TargetCreateError(
                    f"Не удалось создать целевой файл: {e}", source_path, target_path
                )
            self.logger.log_file_operation("create", target_path)

            try:
                with target_file:
                    shutil.copyfileobj(source_file, target_file, self.COPY_BUFFER_SIZE)
            except OSError as e:
                self._remove_partial_target(target_path)
                raise FileCopyError(
                    f"Ошибка при копировании содержимого: {e}", source_path, target_path
                )
            self.logger.log_file_operation("copy", target_path)

        # Оба файла закрыты, исходник можно удалять
        try:
            source_path.unlink()
        except OSError as e:
            raise SourceDeleteError(
                f"Не удалось удалить исходный файл после копирования: {e}", source_path, target_path
            )
        self.logger.log_file_operation("delete", source_path)

        return target_path

    def _remove_partial_target(self, target_path: Path) -> None:
        """Удаляет частично записанный целевой файл."""
        try:
            target_path.unlink()
        except OSError as e:
            self.logger.log_error(f"Не удалось удалить неполный целевой файл {target_path}", e)


def create_file_ops(logger: FileMoverLogger) -> FileOps:
    """
    Удобная функция для создания объекта операций с файлами.

    Args:
        logger: Логгер

    Returns:
        FileOps: Объект операций с файлами
    """
    return FileOps(logger)
