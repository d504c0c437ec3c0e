import json

import pytest

from tle_retriever.config import ENV_PREFIX, Settings

ISS_LINE1 = "1 25544U 98067A   24045.51782528  .00011988  00000-0  21539-3 0  9992"
ISS_LINE2 = "2 25544  51.6418 283.1113 0005188 107.9657  12.7847 15.50095752440727"
HST_LINE1 = "1 20580U 90037B   24045.87154457  .00001523  00000-0  76904-4 0  9990"
HST_LINE2 = "2 20580  28.4700 112.6541 0002607 104.5420 313.6283 15.15497428644561"


def make_element(**overrides) -> dict:
    element = {
        "OBJECT_NAME": "ISS (ZARYA)",
        "OBJECT_ID": "1998-067A",
        "NORAD_CAT_ID": "25544",
        "EPOCH": "2024-02-14T12:25:40.104192",
        "REV_AT_EPOCH": "44072",
        "TLE_LINE1": ISS_LINE1,
        "TLE_LINE2": ISS_LINE2,
        "CLASSIFICATION_TYPE": "U",
        "MEAN_MOTION": "15.50095752",
    }
    element.update(overrides)
    return element


@pytest.fixture()
def two_element_body() -> bytes:
    return json.dumps(
        [
            make_element(),
            make_element(
                OBJECT_NAME="HST",
                OBJECT_ID="1990-037B",
                NORAD_CAT_ID="20580",
                REV_AT_EPOCH="64456",
                TLE_LINE1=HST_LINE1,
                TLE_LINE2=HST_LINE2,
            ),
        ]
    ).encode()


@pytest.fixture()
def settings_values(tmp_path) -> dict:
    return {
        "username": "operator@example.org",
        "password": "hunter2",
        "norad_ids": [25544, 20580],
        "connection_timeout": 5,
        "connection_read_timeout": 20,
        "connection_retries": 3,
        "output_filename": "tles.txt",
        "output_directory": str(tmp_path),
    }


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
