import os

import pytest


@pytest.fixture(autouse=True)
def clean_amortizer_env(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith("AMORTIZER_"):
            monkeypatch.delenv(name)
