"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml

from polyglot.i18n import TranslationStore
from tests.factories.i18n import make_translations, make_translator


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - incident.en.yml
    - incident.fr.yml
    - role.en.yml
    """
    en_incident = {
        "incident": {
            "created": "Incident {{incident_id}} created",
            "resolved": "Incident {{incident_id}} resolved",
        }
    }
    with open(tmp_path / "incident.en.yml", "w") as f:
        yaml.dump(en_incident, f)

    en_role = {
        "role": {
            "created": "Role {{role_name}} created",
            "deleted": "Role {{role_name}} deleted",
        }
    }
    with open(tmp_path / "role.en.yml", "w") as f:
        yaml.dump(en_role, f)

    fr_incident = {
        "incident": {
            "created": "Incident {{incident_id}} créé",
            "resolved": "Incident {{incident_id}} résolu",
        }
    }
    with open(tmp_path / "incident.fr.yml", "w", encoding="utf-8") as f:
        yaml.dump(fr_incident, f, allow_unicode=True)

    return tmp_path


@pytest.fixture
def sample_translations():
    """Sample translation snapshot for en and fr."""
    return make_translations()


@pytest.fixture
def store(sample_translations):
    """TranslationStore pre-filled with the sample snapshot."""
    return TranslationStore(sample_translations)


@pytest.fixture
def translator():
    """Translator over the sample snapshot, en default and current."""
    return make_translator()
