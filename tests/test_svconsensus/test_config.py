import json

import pytest
from svconsensus.config import DiscoverySettings, load_config


class TestDiscoverySettings:
    def test_defaults(self):
        settings = DiscoverySettings()
        assert settings.high_mapping_quality_threshold == 60
        assert settings.min_mapping_quality == 60
        assert settings.min_alignment_length == 50

    def test_override(self):
        settings = DiscoverySettings(min_alignment_length='30')
        assert settings.min_alignment_length == 30
        assert settings.min_mapping_quality == 60

    def test_unrecognized_argument(self):
        with pytest.raises(KeyError):
            DiscoverySettings(max_alignment_length=10)

    def test_from_config(self):
        settings = DiscoverySettings.from_config(
            {
                'discovery.high_mapping_quality_threshold': 50,
                'validate.min_mapping_quality': 5,
            }
        )
        assert settings.high_mapping_quality_threshold == 50
        assert settings.min_mapping_quality == 60


def test_load_config(tmp_path):
    filename = tmp_path / 'config.json'
    filename.write_text(json.dumps({'discovery.min_mapping_quality': 20}))
    settings = load_config(str(filename))
    assert settings.min_mapping_quality == 20
    assert 'min_mapping_quality=20' in repr(settings)
