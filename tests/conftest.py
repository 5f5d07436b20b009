from __future__ import annotations

import importlib.util
import io
import smtplib
import sys
from functools import lru_cache
from pathlib import Path
from types import ModuleType

import pytest

from topsis_ranker.dataset import Dataset

REPO_ROOT = Path(__file__).resolve().parents[1]

LAPTOPS_CSV = (
    "Model,Storage,Memory\n"
    "L1,250,16\n"
    "L2,200,16\n"
    "L3,300,32\n"
    "L4,275,32\n"
)


@lru_cache(maxsize=8)
def load_module_from_file(file_path: str, module_name: str) -> ModuleType:
    path = Path(file_path).resolve()
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Failed to load module spec from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def laptops() -> Dataset:
    return Dataset.from_records(
        [
            {"Model": "L1", "Storage": 250, "Memory": 16},
            {"Model": "L2", "Storage": 200, "Memory": 16},
            {"Model": "L3", "Storage": 300, "Memory": 32},
            {"Model": "L4", "Storage": 275, "Memory": 32},
        ]
    )


@pytest.fixture
def laptops_csv() -> str:
    return LAPTOPS_CSV


@pytest.fixture
def laptops_upload():
    def _upload(filename: str = "laptops.csv", content: str = LAPTOPS_CSV):
        return (io.BytesIO(content.encode("utf-8")), filename)

    return _upload


@pytest.fixture(scope="session")
def website() -> ModuleType:
    return load_module_from_file(str(REPO_ROOT / "Website" / "index.py"), "topsis_website")


@pytest.fixture
def client(website, monkeypatch):
    monkeypatch.setitem(website.app.config, "TESTING", True)
    monkeypatch.setitem(website.app.config, "SENDER_EMAIL", "ranker@example.com")
    monkeypatch.setitem(website.app.config, "SENDER_PASSWORD", "app-password")
    return website.app.test_client()


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    class FakeSMTP:
        def __init__(self, host, port):
            self.host = host
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return False

        def login(self, user, password):
            self.user = user

        def send_message(self, msg):
            sent.append(msg)

    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
    return sent
