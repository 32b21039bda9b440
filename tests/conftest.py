import os
import pytest
from visiontransform.config import get_settings

def pytest_configure():
    # evita que un .env local o variables VISION_* del entorno cambien los defaults
    for k in list(os.environ):
        if k.startswith("VISION_"):
            del os.environ[k]

@pytest.fixture(autouse=True)
def _reset_settings_cache():
    # evita fuga de estado entre tests
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
