"""
Тесты для модуля config_loader.py
"""

import json
import pytest
from pathlib import Path

from src.config_loader import (
    ConfigLoader,
    Config,
    DirectoryPair,
    LoggingConfig,
    load_config,
    default_config,
    DEFAULT_MIN_FILE_SIZE,
)


def write_config(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


class TestConfigLoader:
    """Тесты для класса ConfigLoader."""

    def test_creates_default_config_when_missing(self, tmp_path):
        """Тест создания файла конфигурации по умолчанию."""
        config_path = tmp_path / "config.json"

        loader = ConfigLoader(str(config_path))
        config = loader.load_config()

        assert config_path.exists()
        assert loader.created is True
        assert config == default_config()
        assert config.min_file_size == DEFAULT_MIN_FILE_SIZE
        assert len(config.source_dirs) == 2
        assert len(config.target_dirs) == 2

    def test_default_config_written_with_two_space_indent(self, tmp_path):
        """Тест формата записанного файла."""
        config_path = tmp_path / "config.json"
        load_config(str(config_path))

        text = config_path.read_text(encoding='utf-8')
        data = json.loads(text)

        assert set(data) == {'source_dirs', 'target_dirs', 'min_file_size'}
        assert data['min_file_size'] == 26463150
        assert data['source_dirs'] == ["e:/FilesNota/572149/1", "e:/FilesNota/572149/2"]
        assert data['target_dirs'] == ["//192.168.2.15/5/test/1", "//192.168.2.15/5/test/2"]
        assert '\n  "source_dirs": [\n    "e:/FilesNota/572149/1"' in text

    def test_default_config_round_trip(self, tmp_path):
        """Тест: созданная конфигурация перечитывается без изменений."""
        config_path = tmp_path / "config.json"

        first = load_config(str(config_path))
        loader = ConfigLoader(str(config_path))
        second = loader.load_config()

        assert loader.created is False
        assert second == first

    def test_load_existing_config(self, tmp_path):
        """Тест загрузки существующего файла."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": ["/data/in/1"],
            "target_dirs": ["/data/out/1"],
            "min_file_size": 1024
        })

        config = load_config(str(config_path))

        assert config.source_dirs == [Path("/data/in/1")]
        assert config.target_dirs == [Path("/data/out/1")]
        assert config.min_file_size == 1024
        assert config.logging == LoggingConfig()

    def test_pairs_follow_config_order(self, tmp_path):
        """Тест сопоставления папок по индексу."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": ["a", "b"],
            "target_dirs": ["x", "y"],
            "min_file_size": 0
        })

        pairs = load_config(str(config_path)).pairs()

        assert pairs == [
            DirectoryPair(source=Path("a"), target=Path("x")),
            DirectoryPair(source=Path("b"), target=Path("y")),
        ]

    def test_optional_logging_section(self, tmp_path):
        """Тест необязательной секции логирования."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": [],
            "target_dirs": [],
            "min_file_size": 0,
            "logging": {"log_dir": "var/log", "retention_days": 10, "level": "debug"}
        })

        config = load_config(str(config_path))

        assert config.logging.log_dir == Path("var/log")
        assert config.logging.retention_days == 10
        assert config.logging.level == "debug"

    def test_mismatched_dir_lists(self, tmp_path):
        """Тест: разная длина списков отклоняется при загрузке."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": ["a", "b"],
            "target_dirs": ["x"],
            "min_file_size": 100
        })

        with pytest.raises(ValueError, match="не совпадает"):
            load_config(str(config_path))

    def test_malformed_json(self, tmp_path):
        """Тест ошибки при некорректном JSON."""
        config_path = tmp_path / "config.json"
        config_path.write_text('{"source_dirs": [', encoding='utf-8')

        with pytest.raises(ValueError, match="Ошибка при чтении файла конфигурации"):
            load_config(str(config_path))

    def test_missing_key(self, tmp_path):
        """Тест ошибки при отсутствии параметра."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": [],
            "target_dirs": []
        })

        with pytest.raises(ValueError, match="'min_file_size' не найден"):
            load_config(str(config_path))

    def test_not_an_object(self, tmp_path):
        config_path = write_config(tmp_path / "config.json", ["a", "b"])

        with pytest.raises(ValueError, match="JSON-объект"):
            load_config(str(config_path))

    @pytest.mark.parametrize("value", [-1, "100", 1.5, True])
    def test_invalid_min_file_size(self, tmp_path, value):
        """Тест валидации минимального размера файла."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": [],
            "target_dirs": [],
            "min_file_size": value
        })

        with pytest.raises(ValueError, match="Минимальный размер файла"):
            load_config(str(config_path))

    def test_invalid_dir_list(self, tmp_path):
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": "not-a-list",
            "target_dirs": [],
            "min_file_size": 0
        })

        with pytest.raises(ValueError, match="списком строк"):
            load_config(str(config_path))

    def test_invalid_log_level(self, tmp_path):
        """Тест валидации некорректного уровня логирования."""
        config_path = write_config(tmp_path / "config.json", {
            "source_dirs": [],
            "target_dirs": [],
            "min_file_size": 0,
            "logging": {"level": "INVALID_LEVEL"}
        })

        with pytest.raises(ValueError, match="Некорректный уровень логирования"):
            load_config(str(config_path))

    def test_save_config(self, tmp_path):
        """Тест записи конфигурации в файл."""
        config_path = tmp_path / "nested" / "config.json"
        config = Config(
            source_dirs=[Path("in")],
            target_dirs=[Path("out")],
            min_file_size=42
        )

        ConfigLoader(str(config_path)).save_config(config)

        assert json.loads(config_path.read_text(encoding='utf-8')) == {
            "source_dirs": ["in"],
            "target_dirs": ["out"],
            "min_file_size": 42
        }

    def test_reload_config(self, tmp_path):
        """Тест перезагрузки конфигурации."""
        config_path = tmp_path / "config.json"
        loader = ConfigLoader(str(config_path))
        config1 = loader.load_config()

        write_config(config_path, {
            "source_dirs": ["a"],
            "target_dirs": ["b"],
            "min_file_size": 7
        })
        config2 = loader.reload_config()

        assert config1.min_file_size == DEFAULT_MIN_FILE_SIZE
        assert config2.min_file_size == 7
        assert loader.get_config() is config2

    def test_get_config_without_load(self):
        """Тест получения конфигурации без предварительной загрузки."""
        loader = ConfigLoader()

        with pytest.raises(ValueError, match="Конфигурация не загружена"):
            loader.get_config()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
