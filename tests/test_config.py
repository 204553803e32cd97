"""
Тести для модуля config

Запуск: pytest tests/test_config.py -v
"""


def test_default_config():
    """Тест конфігурації за замовчуванням"""
    from triage_bot.config import get_default_config, StorageBackend

    config = get_default_config()

    assert config.knowledge_base_path == "data/kb_v1.json"
    assert config.extraction.max_ngram == 4
    assert config.extraction.fuzzy_min_score == 0.80
    assert config.triage.red_flag_threshold == 0.60
    assert config.triage.reason_threshold == 0.40
    assert config.triage.er_score_threshold == 8.0
    assert config.slots.max_unclear_turns == 3
    assert config.storage.backend == StorageBackend.JSON

    print(f"Версія: {config.version}")
    print(f"Red flag поріг: {config.triage.red_flag_threshold}")
    print(f"Сховище: {config.storage.backend.value}")


def test_yaml_round_trip(tmp_path):
    """Збереження та завантаження YAML"""
    from triage_bot.config import (
        TriageBotConfig, StorageBackend, save_config, load_config,
    )

    config = TriageBotConfig()
    config.triage.red_flag_threshold = 0.7
    config.storage.backend = StorageBackend.SQLITE
    config.slots.correction_tokens = ["actually", "just", "only", "sorry"]

    path = tmp_path / "config" / "bot.yaml"
    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded == config
    assert loaded.storage.backend is StorageBackend.SQLITE
    assert "backend: sqlite" in path.read_text(encoding="utf-8")

    print("✓ YAML round trip")


def test_partial_yaml(tmp_path):
    """Відсутні секції отримують значення за замовчуванням"""
    from triage_bot.config import load_config

    path = tmp_path / "bot.yaml"
    path.write_text("triage:\n  doctor_score_threshold: 5.0\n", encoding="utf-8")

    config = load_config(str(path))

    assert config.triage.doctor_score_threshold == 5.0
    assert config.triage.er_score_threshold == 8.0
    assert config.extraction.max_ngram == 4


def test_empty_yaml(tmp_path):
    """Порожній файл -> конфігурація за замовчуванням"""
    from triage_bot.config import load_config, get_default_config

    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


if __name__ == "__main__":
    print("=" * 50)
    print("Triage Bot - Тест конфігурації")
    print("=" * 50)
    test_default_config()
    print("=" * 50)
    print("✅ Успішно!")
