import pytest

from models import LanguageModel


@pytest.fixture
def sample_model():
    return LanguageModel(
        {
            1: {"": {"ez": 5.0, "diçim": 3.0, "pirtûk": 10.0}},
            2: {
                "diçim": {"bazarê": 0.8, "malê": 0.5, "dibistanê": 0.3},
                "ez": {"diçim": 4.0, "dixwazim": 2.0},
            },
        }
    )


@pytest.fixture
def backoff_model():
    return LanguageModel(
        {
            2: {"diçim": {"bazarê": 0.8, "malê": 0.5, "dibistanê": 0.3}},
            3: {"ez diçim": {"malê": 2.0}},
        }
    )
