import pytest

from bloom_text_encoder import ConfigurationError, EncoderConfig


def test_defaults():
    config = EncoderConfig()
    assert config.bit_size == 4096
    assert config.num_hash_functions == 5
    assert config.min_frequency == 1
    assert config.strategy == 3
    assert config.identifier == "BLM"
    assert config.preprocessor == "none"
    assert config.language == "EN"


@pytest.mark.parametrize("changes", [
    {"bit_size": 0},
    {"num_hash_functions": 0},
    {"min_frequency": -1},
    {"strategy": 1},
    {"preprocessor": "stemmer"},
    {"language": "xx"},
])
def test_invalid_values(changes):
    with pytest.raises(ConfigurationError):
        EncoderConfig(**changes)


def test_from_env(monkeypatch):
    monkeypatch.setenv("BLOOM_ENCODER_BIT_SIZE", "1024")
    monkeypatch.setenv("BLOOM_ENCODER_HASH_FUNCTIONS", "4")
    monkeypatch.setenv("BLOOM_ENCODER_PREPROCESSOR", "minimal_lowercase")
    monkeypatch.setenv("BLOOM_ENCODER_LANGUAGE", "de")
    config = EncoderConfig.from_env(min_frequency=0)
    assert config.bit_size == 1024
    assert config.num_hash_functions == 4
    assert config.min_frequency == 0
    assert config.preprocessor == "minimal_lowercase"
    assert config.language == "de"


def test_from_env_empty_language_disables_stopwords(monkeypatch):
    monkeypatch.setenv("BLOOM_ENCODER_LANGUAGE", "")
    assert EncoderConfig.from_env().language is None


def test_from_env_rejects_non_integers(monkeypatch):
    monkeypatch.setenv("BLOOM_ENCODER_BIT_SIZE", "lots")
    with pytest.raises(ConfigurationError):
        EncoderConfig.from_env()


def test_dict_roundtrip():
    config = EncoderConfig(bit_size=128, num_hash_functions=2, strategy=5)
    data = dict(config.to_dict(), total_words=12)
    assert EncoderConfig.from_dict(data) == config
    assert config.replace(bit_size=256).bit_size == 256
