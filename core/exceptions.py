"""
Zenith 异常定义模块。

定义系统中所有自定义异常的层次结构：
- ZenithError: 基类，所有已知错误
- ConfigError: 配置文件错误
- HabitValidationError: 习惯字段非法 (如空名称)
- ImportFormatError: 导入文件格式错误
- HabitNotFoundError: 引用了不存在的习惯
- PersistenceError: 本地存储不可用
"""
from typing import Optional


class ZenithError(Exception):
    """Zenith 基础异常类。

    所有系统内已知错误都继承自此类。
    捕获此类可以处理所有预期的错误情况。
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: 错误描述
            hint: 对用户的操作建议
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """返回用户友好的错误消息。"""
        if self.hint:
            return f"{self.message}\n💡 Hint: {self.hint}"
        return self.message


class ConfigError(ZenithError):
    """配置文件错误。

    当 runtime.yaml 无法读取或格式错误时抛出。
    """

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"Check the config file: {config_path}" if config_path else "Check the config file format"
        super().__init__(message, hint)
        self.config_path = config_path


class HabitValidationError(ZenithError):
    """习惯字段校验失败。

    在边界处拒绝，状态不发生任何变化。
    """

    def __init__(self, message: str, field: Optional[str] = None):
        hint = f"Provide a valid value for '{field}'" if field else None
        super().__init__(message, hint)
        self.field = field


class ImportFormatError(ZenithError):
    """导入数据格式错误。

    导入文件必须包含 habits 与 logs 两个集合。
    """

    def __init__(self, message: str = "Invalid backup file format."):
        super().__init__(message, hint="Make sure it's a valid Zenith backup with 'habits' and 'logs'")


class HabitNotFoundError(ZenithError):
    """引用了不存在的习惯 ID。

    通常来自过期的界面状态，属于良性未命中。
    """

    def __init__(self, habit_id: str):
        super().__init__(f"Habit not found: {habit_id}")
        self.habit_id = habit_id


class PersistenceError(ZenithError):
    """本地存储写入或读取失败。

    内存中的状态仍然是本次会话的权威数据。
    """

    def __init__(self, message: str, key: Optional[str] = None):
        hint = "Check free disk space and permissions of the data directory"
        super().__init__(message, hint)
        self.key = key
