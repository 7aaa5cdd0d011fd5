# =====================================================
# =============== 错误日志记录器 ===============
# =====================================================

"""
错误日志记录器 - 负责捕获和记录程序异常

游戏核心逻辑对有效输入是全函数，不抛出异常；
只有宿主侧（资源加载等）会抛出 FindMeError 派生异常。
"""

import os
import sys
import threading
import traceback
from datetime import datetime
from typing import Optional, Callable, TextIO

# 日志文件大小限制（5MB）
MAX_LOG_SIZE = 5 * 1024 * 1024


class FindMeError(Exception):
    """游戏错误基类"""
    pass


class AssetLoadError(FindMeError):
    """图像资源加载失败"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"无法加载图像 {path}: {reason}")
        self.path = path
        self.reason = reason


def get_log_dir() -> str:
    """
    获取日志目录（用户数据目录 ~/.find_me）

    Returns:
        日志目录路径
    """
    from find_me.core.config_manager import get_user_data_dir
    return get_user_data_dir()


def get_log_filename(version: str) -> str:
    """
    获取日志文件名

    Args:
        version: 应用版本号

    Returns:
        日志文件名，格式: FindMe{版本号}.log
    """
    return f"FindMe{version}.log"


class ErrorLogger:
    """错误日志记录器"""

    def __init__(self, version: str, app_dir: Optional[str] = None):
        """
        初始化日志记录器

        Args:
            version: 应用版本号
            app_dir: 日志目录，默认为用户数据目录
        """
        self._version = version
        self._app_dir = app_dir if app_dir else get_log_dir()
        self._log_path = os.path.join(self._app_dir, get_log_filename(version))
        self._original_excepthook: Optional[Callable] = None

        self._lock = threading.RLock()
        self._file_handle: Optional[TextIO] = None

        os.makedirs(self._app_dir, exist_ok=True)

    @property
    def log_path(self) -> str:
        """获取日志文件路径"""
        return self._log_path

    @property
    def version(self) -> str:
        """获取版本号"""
        return self._version

    def _rotate_if_needed(self) -> None:
        """检查并执行日志轮转（超过 5MB 时）"""
        if not os.path.exists(self._log_path):
            return

        try:
            if os.path.getsize(self._log_path) >= MAX_LOG_SIZE:
                # 轮转：重命名为 .log.1
                backup_path = self._log_path + ".1"
                if os.path.exists(backup_path):
                    os.remove(backup_path)
                os.rename(self._log_path, backup_path)
        except OSError:
            pass  # 忽略轮转错误

    def _ensure_file_open(self) -> None:
        """确保文件句柄打开，使用行缓冲模式"""
        if self._file_handle is None or self._file_handle.closed:
            self._rotate_if_needed()
            self._file_handle = open(
                self._log_path, 'a',
                encoding='utf-8',
                buffering=1  # 行缓冲模式
            )

    def close(self) -> None:
        """安全关闭文件句柄"""
        with self._lock:
            if self._file_handle and not self._file_handle.closed:
                self._file_handle.close()
            self._file_handle = None

    def _write_log(self, content: str) -> None:
        """
        线程安全的日志写入

        Args:
            content: 日志内容
        """
        with self._lock:
            try:
                self._ensure_file_open()
                self._file_handle.write(content)
                self._file_handle.flush()
            except OSError as e:
                # 写入失败时输出到 stderr
                print(f"[ErrorLogger] 写入日志失败: {e}", file=sys.stderr)

    def _format_timestamp(self) -> str:
        """格式化当前时间戳"""
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def log_startup(self) -> None:
        """记录程序启动"""
        separator = "=" * 80
        self._write_log(
            f"\n{separator}\n找到我 v{self._version} 启动\n"
            f"时间: {self._format_timestamp()}\n{separator}\n\n"
        )

    def log_shutdown(self) -> None:
        """记录程序退出"""
        separator = "=" * 80
        self._write_log(
            f"\n{separator}\n找到我 v{self._version} 退出\n"
            f"时间: {self._format_timestamp()}\n{separator}\n\n"
        )

    def log_info(self, message: str) -> None:
        self._write_log(f"[{self._format_timestamp()}] [INFO] {message}\n")

    def log_warning(self, message: str) -> None:
        self._write_log(f"[{self._format_timestamp()}] [WARNING] {message}\n")

    def log_error(self, message: str) -> None:
        self._write_log(f"[{self._format_timestamp()}] [ERROR] {message}\n")

    def log_exception(self, exc_type, exc_value, exc_tb) -> str:
        """
        记录异常

        Args:
            exc_type: 异常类型
            exc_value: 异常值
            exc_tb: 异常堆栈

        Returns:
            格式化的异常信息字符串
        """
        type_name = exc_type.__name__ if exc_type else 'Unknown'
        tb_str = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

        content = f"""[{self._format_timestamp()}] [ERROR] 未处理的异常
类型: {type_name}
消息: {exc_value}
堆栈跟踪:
{tb_str}
"""
        self._write_log(content)
        return content

    def install_exception_handler(self) -> None:
        """安装全局异常处理器"""
        self._original_excepthook = sys.excepthook
        sys.excepthook = self._exception_handler

    def uninstall_exception_handler(self) -> None:
        """卸载全局异常处理器"""
        if self._original_excepthook:
            sys.excepthook = self._original_excepthook
            self._original_excepthook = None

    def _exception_handler(self, exc_type, exc_value, exc_tb) -> None:
        """全局异常处理器：先记录，再交给原始处理器

        KeyboardInterrupt 不写入日志。
        """
        if not (exc_type and issubclass(exc_type, KeyboardInterrupt)):
            self.log_exception(exc_type, exc_value, exc_tb)
        if self._original_excepthook:
            self._original_excepthook(exc_type, exc_value, exc_tb)


# 全局实例
_error_logger: Optional[ErrorLogger] = None


def get_error_logger() -> Optional[ErrorLogger]:
    """获取全局错误日志记录器实例"""
    return _error_logger


def init_error_logger(version: str, app_dir: Optional[str] = None) -> ErrorLogger:
    """
    初始化全局错误日志记录器

    Args:
        version: 应用版本号
        app_dir: 日志目录，默认自动检测

    Returns:
        ErrorLogger 实例
    """
    global _error_logger
    _error_logger = ErrorLogger(version, app_dir)
    return _error_logger
