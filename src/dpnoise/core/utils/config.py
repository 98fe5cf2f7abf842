"""
Runtime configuration utilities.

Centralises the library's tunable options and exposes helpers to read
from environment variables or update settings at runtime.
"""
# 说明：运行时配置管理工具，集中管理库内可调选项，并支持环境变量覆写与运行期更新。
# 职责：
# - RuntimeConfig：封装严格校验开关、日志等级、敏感字段掩码、随机种子、是否允许非密码学 RNG 等配置项
# - load_from_env(...)：按统一前缀（DPNOISE_）从环境变量加载并解析配置值
# - get_config()：获取全局 RuntimeConfig 单例
# - configure(...)：通过关键字参数更新全局配置并返回更新后的实例
# 约定：
# - 布尔类环境变量使用 {"1", "true", "yes"}（大小写不敏感）视为 True
# - RNG_SEED 环境变量会被解析为整数；设置后默认随机源变为可复现（非密码学）生成器
# - 未知配置键在 update(...) 中会触发 AttributeError

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_BOOL_KEYS = ("STRICT_VALIDATION", "MASK_SENSITIVE_FIELDS", "ALLOW_INSECURE_RNG")


@dataclass
class RuntimeConfig:
    strict_validation: bool = True
    log_level: str = field(default_factory=lambda: os.environ.get("DPNOISE_LOG_LEVEL", "INFO"))
    mask_sensitive_fields: bool = True
    rng_seed: Optional[int] = None
    allow_insecure_rng: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    def update(self, **kwargs: Any) -> None:
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"unknown config option '{key}'")
            setattr(self, key, value)

    def load_from_env(self, prefix: str = "DPNOISE_") -> None:
        # 从带有指定前缀的环境变量中加载配置，并进行类型转换后写回实例字段
        for key in ("STRICT_VALIDATION", "LOG_LEVEL", "MASK_SENSITIVE_FIELDS", "RNG_SEED", "ALLOW_INSECURE_RNG"):
            env_key = f"{prefix}{key}"
            if env_key not in os.environ:
                continue
            value: Any = os.environ[env_key]
            if key in _BOOL_KEYS:
                value = value.lower() in {"1", "true", "yes"}
            elif key == "RNG_SEED":
                value = int(value)
            setattr(self, key.lower(), value)


_GLOBAL_CONFIG = RuntimeConfig()


def get_config() -> RuntimeConfig:
    return _GLOBAL_CONFIG


def configure(**kwargs: Any) -> RuntimeConfig:
    # 以关键字参数更新全局配置，并返回更新后的实例
    _GLOBAL_CONFIG.update(**kwargs)
    return _GLOBAL_CONFIG
