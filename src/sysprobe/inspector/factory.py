"""
进程查询器工厂。

该模块根据平台标签创建 PosixQuerier 或 WindowsQuerier，并在进程生命周期内
缓存选中的查询器，供 get_process_info() 使用。
"""

import logging
from typing import Optional

from ..config import get_config
from ..models.config import ProbeConfig
from ..models.process import ProcessInfo
from ..system.platform import POSIX, WINDOWS, resolve_platform
from .base import ProcessQuerier

logger = logging.getLogger(__name__)

_QUERIER: Optional[ProcessQuerier] = None


def create_querier(
    platform_tag: Optional[str] = None, config: Optional[ProbeConfig] = None
) -> ProcessQuerier:
    """
    创建进程查询器实例。

    Args:
        platform_tag: "posix"、"windows" 或 "auto"；为 None 时使用配置中的 platform
        config: 查询器使用的配置，默认使用全局配置

    Returns:
        进程查询器实例

    Raises:
        ValueError: 如果平台标签未知
    """
    config = config or get_config()
    platform = resolve_platform(platform_tag or config.platform)

    if platform == WINDOWS:
        from .windows import WindowsQuerier

        querier: ProcessQuerier = WindowsQuerier(config)
    elif platform == POSIX:
        from .posix import PosixQuerier

        querier = PosixQuerier(config)
    else:
        raise ValueError(f"Unknown platform: {platform}")

    logger.debug(f"Created {querier.__class__.__name__} for platform '{platform}'")
    return querier


def get_querier() -> ProcessQuerier:
    """返回缓存的查询器；首次调用时按配置创建。"""
    global _QUERIER
    if _QUERIER is None:
        _QUERIER = create_querier()
    return _QUERIER


def reset_querier() -> None:
    """清除缓存的查询器（配置变更或测试时使用）。"""
    global _QUERIER
    _QUERIER = None


def get_process_info(pid: int) -> ProcessInfo:
    """
    获取指定 PID 的进程信息。

    主记录（pid、cpu、memory、state、user、cmd）要么完整返回，要么抛出异常；
    POSIX 上的补充字段尽力获取，失败时保持零值。

    Raises:
        ValidationError: pid 不是非负整数
        ProcessQueryError: 列表工具无法运行、进程不存在或输出格式不符
    """
    return get_querier().get_process_info(pid)
