from __future__ import annotations

from typing import Any

import pytest

from autorisation.config import ConfigModel, PdfSettings, load_config
from autorisation.config.schema import ENV_OVERRIDES
from autorisation.form.model import AuthorizationRequest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def request_data() -> dict[str, Any]:
    return {
        "child": {"last_name": "Dupont", "first_name": "Jean"},
        "date": "25/09/2025",
        "place": "Rennes",
        "class_name": "CM1",
    }


@pytest.fixture
def auth_request(request_data: dict[str, Any]) -> AuthorizationRequest:
    return AuthorizationRequest.model_validate(request_data)


@pytest.fixture
def full_request(request_data: dict[str, Any]) -> AuthorizationRequest:
    data = dict(request_data)
    data["guardian"] = {"name": "Marie Dupont", "phone": "06 12 34 56 78"}
    data["reason"] = "Rendez-vous médical"
    return AuthorizationRequest.model_validate(data)


@pytest.fixture
def cfg() -> ConfigModel:
    return load_config(env={})


@pytest.fixture
def pdf_settings(cfg: ConfigModel) -> PdfSettings:
    return cfg.pdf
