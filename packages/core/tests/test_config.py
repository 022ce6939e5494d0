"""配置模块测试"""

from betmanager.core import config


class TestConfig:
    def test_db_path_override(self, monkeypatch):
        monkeypatch.setenv("BETMANAGER_DB_PATH", "/tmp/custom.db")
        assert config.get_db_path() == "/tmp/custom.db"

    def test_db_path_from_data_dir(self, monkeypatch, tmp_path):
        monkeypatch.delenv("BETMANAGER_DB_PATH", raising=False)
        monkeypatch.setenv("BETMANAGER_DATA_DIR", str(tmp_path))
        assert config.get_db_path() == str(tmp_path / "sqlite" / "betmanager.db")

    def test_defaults(self):
        assert config.SYSTEM_ACTOR_NAME == "System"
        assert config.WITHDRAWAL_TASK_TYPE in config.DEFAULT_TASK_TYPES
        assert "CONTA_NOVA" in config.DEFAULT_TASK_TYPES
