import pytest
from core.config import Settings


@pytest.fixture
def settings():
    return Settings(HISTORY_SIZE=8, CONFIDENCE_SCALE=1.5)

@pytest.fixture
def smile_snapshot():
    return {"mouthSmileLeft": 0.9, "mouthSmileRight": 0.9}

@pytest.fixture
def surprised_snapshot():
    return {
        "jawOpen": 0.8,
        "eyeWideLeft": 0.7, "eyeWideRight": 0.7,
        "browOuterUpLeft": 0.5, "browOuterUpRight": 0.5,
        "browInnerUp": 0.3,
    }

@pytest.fixture
def sad_snapshot():
    return {"mouthFrownLeft": 0.8, "mouthFrownRight": 0.8, "browInnerUp": 0.6}
