"""
Configuration Manager for Zenith.

集中管理系统常量和配置参数。
所有经验值必须显式声明并可通过 config/runtime.yaml 覆盖。

使用方式:
    from core.config_manager import config
    window = config.TREND_WINDOW_DAYS
"""
from dataclasses import dataclass
from pathlib import Path

import yaml

from core.exceptions import ConfigError
from core.logger import get_logger


CONFIG_DIR = Path(__file__).parent.parent / "config"
RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"

logger = get_logger("config")


@dataclass
class SystemConfig:
    """
    系统运行时常量配置。

    所有值均为经验值，可根据用户实际情况调整。
    """

    # === 每日记录 ===

    # 新的一天默认压力值 (0-10 的中间值)
    DEFAULT_STRESS_LEVEL: int = 5
    STRESS_LEVEL_MIN: int = 0
    STRESS_LEVEL_MAX: int = 10

    # === 统计窗口 ===

    # 类别平衡与趋势图的滚动窗口 (天)
    BALANCE_WINDOW_DAYS: int = 7
    TREND_WINDOW_DAYS: int = 7

    # 仪表盘展示的习惯数量上限
    DASHBOARD_HABIT_LIMIT: int = 5

    # === 成就阈值 ===

    # Flawless: 累计完成次数
    ACHIEVEMENT_TOTAL_COMPLETIONS: int = 7
    # Deep Sea: 累计饮水杯数 (严格大于)
    ACHIEVEMENT_WATER_TOTAL: int = 40
    # Zen Master: 冥想类习惯完成次数
    ACHIEVEMENT_MEDITATION_COMPLETIONS: int = 5
    ACHIEVEMENT_MEDITATION_KEYWORD: str = "Meditate"

    # === 提醒 ===

    # 中午以后仍未喝水则提示
    HYDRATION_NUDGE_HOUR: int = 12

    # === 存储 ===

    HABITS_STORAGE_KEY: str = "zenith_habits"
    LOGS_STORAGE_KEY: str = "zenith_logs"
    EXPORT_VERSION: str = "1.0"

    # 备份保留天数
    # 调整建议：存储紧张可降至 14
    BACKUP_RETENTION_DAYS: int = 30


def _load_runtime_config() -> dict:
    """加载运行时配置覆盖（如果存在）。"""
    if not RUNTIME_CONFIG_PATH.exists():
        return {}

    try:
        with open(RUNTIME_CONFIG_PATH, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        error = ConfigError(f"Failed to read runtime config: {e}", str(RUNTIME_CONFIG_PATH))
        logger.warning(error.get_user_message())
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring runtime config, expected a mapping: {RUNTIME_CONFIG_PATH}")
        return {}
    return data


def get_config() -> SystemConfig:
    """
    获取系统配置实例。

    优先级：runtime.yaml > 默认值
    """
    base = SystemConfig()
    overrides = _load_runtime_config()

    for key, value in overrides.items():
        if not hasattr(base, key):
            logger.debug(f"Unknown config key ignored: {key}")
            continue
        # 按默认值的类型转换，转换失败则保留默认值
        expected = type(getattr(base, key))
        try:
            setattr(base, key, expected(value))
        except (TypeError, ValueError):
            logger.warning(
                f"Ignoring {key}={value!r} from runtime config, expected {expected.__name__}"
            )

    return base


# 全局配置实例（单例模式）
config = get_config()
