"""
Главный модуль CLI интерфейса для утилиты перемещения больших файлов.

Загружает конфигурацию, настраивает логирование, чистит старые логи и
переносит файлы по всем настроенным парам каталогов.
"""

import argparse
import sys
from typing import Optional

try:
    from .config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
    from .logger import FileMoverLogger
    from .mover import Mover, TransferStats, create_mover
except ImportError:
    from config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
    from logger import FileMoverLogger
    from mover import Mover, TransferStats, create_mover


class FileMoverCLI:
    """Класс для запуска утилиты из командной строки."""

    def __init__(self):
        self.config = None
        self.logger: Optional[FileMoverLogger] = None
        self.mover: Optional[Mover] = None
        self.config_created = False
        self.config_path = None

    def setup(self, config_path: str = DEFAULT_CONFIG_PATH, verbose: bool = False) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Args:
            config_path: Путь к файлу конфигурации
            verbose: Подробный вывод (уровень DEBUG)

        Returns:
            bool: True если инициализация успешна
        """
        try:
            loader = ConfigLoader(config_path)
            self.config = loader.load_config()
            self.config_created = loader.created
            self.config_path = loader.config_path
        except Exception as e:
            print(f"Ошибка при загрузке конфигурации: {e}")
            return False

        try:
            self.logger = FileMoverLogger(self.config.logging, verbose=verbose)
        except Exception as e:
            print(f"Ошибка при создании лог-файла: {e}")
            return False

        self.mover = create_mover(self.config, self.logger)
        return True

    def run(self) -> TransferStats:
        """
        Выполняет полный цикл работы.

        Returns:
            TransferStats: Статистика перемещения
        """
        try:
            self.logger.log_program_started()
            if self.config_created:
                self.logger.log_config_created(self.config_path)
            self.logger.clean_old_logs()
            stats = self.mover.run()
            self.logger.log_program_finished()
            return stats
        finally:
            self.logger.close()


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        description="Утилита перемещения больших файлов из исходных папок в целевые",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Перемещение по настройкам из config.json
  python -m src.main

  # Другой файл конфигурации и отладочный вывод
  python -m src.main --config settings/mover.json --verbose
        """
    )

    parser.add_argument(
        '--config',
        default=DEFAULT_CONFIG_PATH,
        help=f'Путь к файлу конфигурации (по умолчанию: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    return parser


def main(argv=None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = FileMoverCLI()

    # Ошибки выводятся в консоль и лог, код возврата всегда 0
    if not cli.setup(args.config, verbose=args.verbose):
        return 0

    try:
        cli.run()
    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
    return 0


if __name__ == "__main__":
    sys.exit(main())
