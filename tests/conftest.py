"""Shared pytest configuration and path setup for test modules."""

import sys
from pathlib import Path

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from dpnoise.core.utils import GeneratorRandomSource, get_config, reset_configured_source  # noqa: E402


@pytest.fixture
def seeded_source() -> GeneratorRandomSource:
    # 固定种子的确定性随机源，使采样结果可复现
    return GeneratorRandomSource(20240601)


@pytest.fixture(autouse=True)
def _restore_config():
    # 每个测试结束后还原全局运行时配置，避免测试间相互污染
    config = get_config()
    snapshot = dict(vars(config))
    yield
    for key, value in snapshot.items():
        setattr(config, key, value)
    reset_configured_source()
