"""
Randomness sources for noise sampling.

Responsibilities
  - Define the minimal interface every sampler draws from (uniform fraction
    in [0, 1) and raw random bits).
  - Provide the cryptographically secure default backed by the OS CSPRNG.
  - Adapt numpy Generators for deterministic, replayable tests.
  - Provide independent per-worker splits for concurrent callers.

Usage Context
  - Every sampling function accepts an explicit ``source``. Without one,
    the secure default is used, unless ``RuntimeConfig.rng_seed`` selects a
    single process-wide seeded stream shared by all such calls.

Limitations
  - ``GeneratorRandomSource`` is NOT cryptographically secure; its internal
    state can leak through the released noise. Use it for tests and
    simulations only.
"""
# 说明：随机源抽象与实现，用于在库中统一管理噪声采样所需的随机性。
# 职责：
# - RandomSource：采样函数依赖的最小接口（random / getrandbits）
# - SecureRandomSource：基于 secrets.SystemRandom 的默认密码学安全随机源，带内部锁，可跨线程共享
# - GeneratorRandomSource：包装 numpy Generator，提供可复现的确定性随机源（仅用于测试/仿真）
# - create_random_source / split_random_source：集中封装随机源的创建与拆分

from __future__ import annotations

import secrets
import threading
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from .config import get_config
from .logging import get_logger
from .param_validation import ParameterError

logger = get_logger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for the randomness consumed by every sampler."""

    def random(self) -> float:
        """Return a float drawn uniformly from [0, 1)."""

    def getrandbits(self, k: int) -> int:
        """Return a non-negative integer with ``k`` random bits."""


class SecureRandomSource:
    """
    Cryptographically secure source backed by the operating system CSPRNG.

    - Behavior
      - ``random()`` yields 53-bit uniform fractions in [0, 1).
      - Draws are serialized by an internal lock so a single instance may be
        shared between threads.
    """

    def __init__(self) -> None:
        self._rng = secrets.SystemRandom()
        self._lock = threading.Lock()

    def random(self) -> float:
        with self._lock:
            return self._rng.random()

    def getrandbits(self, k: int) -> int:
        with self._lock:
            return self._rng.getrandbits(k)

    def __repr__(self) -> str:
        return "<SecureRandomSource>"


class GeneratorRandomSource:
    """
    Deterministic source adapting a ``numpy.random.Generator``.

    - Usage Notes
      - Same seed, same sequence of draws: samplers become deterministic
        functions of their inputs.
      - Not safe for releasing real statistics.
    """

    def __init__(self, seed: Optional[Any] = None) -> None:
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        else:
            self._rng = np.random.default_rng(seed)
        logger.warning("using deterministic (non-cryptographic) random source %r", self)

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def random(self) -> float:
        return float(self._rng.random())

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        # 按 32 位分块拼接，避免 integers() 的 int64 上界限制
        value = 0
        remaining = k
        while remaining > 0:
            chunk = min(32, remaining)
            value = (value << chunk) | int(self._rng.integers(0, 1 << chunk))
            remaining -= chunk
        return value

    def spawn(self, num: int) -> List["GeneratorRandomSource"]:
        """Split into ``num`` statistically independent child sources."""
        if num <= 0:
            raise ValueError("num must be positive")
        return [GeneratorRandomSource(child) for child in self._rng.spawn(num)]

    def __repr__(self) -> str:
        return f"<GeneratorRandomSource {type(self._rng.bit_generator).__name__}>"


_SEED_TYPES = (int, np.integer, np.random.SeedSequence, np.random.Generator)

# 配置种子对应的共享随机源：(种子, 随机源)
_configured_lock = threading.Lock()
_configured_source: Optional[Tuple[Any, GeneratorRandomSource]] = None


def _shared_configured_source(seed: Any) -> GeneratorRandomSource:
    # 同一配置种子只构造一次，后续调用继续消费同一条随机流，种子变化时重建
    global _configured_source
    with _configured_lock:
        if _configured_source is None or _configured_source[0] != seed:
            _configured_source = (seed, GeneratorRandomSource(seed))
        return _configured_source[1]


def reset_configured_source() -> None:
    """Forget the shared source derived from ``RuntimeConfig.rng_seed``."""
    global _configured_source
    with _configured_lock:
        _configured_source = None


def create_random_source(seed: Optional[Any] = None) -> RandomSource:
    """
    Normalise ``seed`` into a :class:`RandomSource`.

    ``None`` yields the secure default, or the process-wide seeded generator
    when ``RuntimeConfig.rng_seed`` is set (shared, never reseeded per call);
    ints, SeedSequences and numpy Generators yield a fresh deterministic
    source; existing sources pass through.
    """
    config = get_config()
    if seed is None and config.rng_seed is None:
        return SecureRandomSource()
    if isinstance(seed, RandomSource) and not isinstance(seed, GeneratorRandomSource):
        return seed
    if not config.allow_insecure_rng:
        raise ParameterError("deterministic random sources are disabled by configuration")
    if seed is None:
        seed = config.rng_seed
        if isinstance(seed, bool) or not isinstance(seed, _SEED_TYPES):
            raise ParameterError(f"cannot build a random source from {type(seed).__name__}")
        return _shared_configured_source(seed)
    if isinstance(seed, GeneratorRandomSource):
        return seed
    if isinstance(seed, _SEED_TYPES) and not isinstance(seed, bool):
        return GeneratorRandomSource(seed)
    raise ParameterError(f"cannot build a random source from {type(seed).__name__}")


def split_random_source(source: RandomSource, num: int) -> List[RandomSource]:
    """Derive ``num`` independent sources, one per concurrent worker."""
    if num <= 0:
        raise ValueError("num must be positive")
    if isinstance(source, GeneratorRandomSource):
        return list(source.spawn(num))
    # OS CSPRNG 的各实例天然独立
    return [SecureRandomSource() for _ in range(num)]


def random_bool(source: RandomSource) -> bool:
    return source.getrandbits(1) == 1
