"""
Hypothesis profiles shared by the property-based tests.
"""
# 说明：属性测试共享的 Hypothesis 配置。
# 职责：
# - 采样器的单次调用涉及最多约 63 步二分，放宽 deadline 以避免偶发超时
# - 通过 HYPOTHESIS_PROFILE 环境变量在 ci / dev 配置间切换

import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile("ci", max_examples=200, deadline=None, derandomize=True)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))
