# =====================================================
# =============== 异步调试日志器 ===============
# =====================================================

"""
异步调试日志器 - 无阻塞的日志记录

游戏的事件回调都在 UI 线程上执行，日志写盘不能拖慢重绘。

特性：
- 异步文件写入，不阻塞主线程
- 批量缓冲，减少IO操作
- 无阻塞日志轮转
"""

import os
import threading
import queue
import datetime
import atexit
from typing import Optional


class AsyncDebugLogger:
    """异步调试日志器"""

    BATCH_SIZE = 50  # 批量写入阈值
    FLUSH_INTERVAL = 1.0  # 刷新间隔（秒）
    MAX_LINES = 2000  # 最大保留行数

    _instance: Optional['AsyncDebugLogger'] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls, log_dir: str = None, log_file: str = "find_me_debug.log") -> 'AsyncDebugLogger':
        """获取单例实例"""
        with cls._lock:
            # 检查实例是否存在且仍在运行
            if cls._instance is None or not cls._instance._running:
                if log_dir is None:
                    log_dir = get_default_log_dir()
                cls._instance = cls(log_dir, log_file)
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """重置单例实例（用于测试）"""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.shutdown()
                cls._instance = None
        return cls._instance

    def __init__(self, log_dir: str, log_file: str = "find_me_debug.log"):
        """
        初始化异步日志器

        Args:
            log_dir: 日志目录
            log_file: 日志文件名
        """
        self._log_dir = log_dir
        self._log_file = log_file
        self._log_path = os.path.join(log_dir, log_file)

        # 消息队列（线程安全）
        self._queue: queue.Queue = queue.Queue()

        # 写入线程
        self._running = True
        self._writer_thread = threading.Thread(
            target=self._writer_loop,
            daemon=True,
            name="AsyncLogger-Writer"
        )
        self._writer_thread.start()

        # 统计信息（用于测试）
        self._write_count = 0
        self._message_count = 0
        self._trim_counter = 0
        self._stats_lock = threading.Lock()

        atexit.register(self.shutdown)

    @property
    def log_path(self) -> str:
        """日志文件路径"""
        return self._log_path

    def log(self, message: str, category: str = "INFO"):
        """
        记录日志（非阻塞）

        Args:
            message: 日志消息
            category: 日志类别
        """
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        entry = f"[{timestamp}] [{category}] {message}\n"

        self._queue.put_nowait(entry)
        with self._stats_lock:
            self._message_count += 1

    def _writer_loop(self):
        """后台写入线程

        条目写盘之后才 task_done，flush() 返回时批次已落盘。
        """
        buffer = []

        while self._running or not self._queue.empty():
            try:
                buffer.append(self._queue.get(timeout=self.FLUSH_INTERVAL))
            except queue.Empty:
                continue

            # 批量获取更多消息
            while len(buffer) < self.BATCH_SIZE:
                try:
                    buffer.append(self._queue.get_nowait())
                except queue.Empty:
                    break

            try:
                self._write_entries(buffer)
            finally:
                for _ in buffer:
                    self._queue.task_done()
                buffer.clear()

    def _write_entries(self, entries: list):
        """批量写入文件"""
        try:
            os.makedirs(self._log_dir, exist_ok=True)
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.writelines(entries)
        except OSError:
            return  # 日志失败不影响主程序

        # 每10次写入检查一次行数限制，避免频繁IO
        self._trim_counter += 1
        if self._trim_counter >= 10:
            self._trim_counter = 0
            self._trim_log_lines()

        with self._stats_lock:
            self._write_count += 1

    def _trim_log_lines(self):
        """限制日志文件行数，保留最新的 MAX_LINES 行"""
        try:
            # 假设平均每行100字节，超过阈值才需要裁剪
            if os.path.getsize(self._log_path) < self.MAX_LINES * 100:
                return

            with open(self._log_path, "r", encoding="utf-8") as f:
                lines = f.readlines()

            if len(lines) > self.MAX_LINES:
                with open(self._log_path, "w", encoding="utf-8") as f:
                    f.writelines(lines[-self.MAX_LINES:])
        except OSError:
            pass

    def flush(self):
        """阻塞直到已入队的日志全部写入文件"""
        if not self._writer_thread.is_alive():
            return
        self._queue.join()

    def shutdown(self):
        """关闭日志器"""
        if not self._running:
            return
        self._running = False
        self.flush()
        if self._writer_thread.is_alive():
            self._writer_thread.join(timeout=2.0)
        atexit.unregister(self.shutdown)

    def get_stats(self) -> dict:
        """获取统计信息（用于测试）"""
        with self._stats_lock:
            return {
                "message_count": self._message_count,
                "write_count": self._write_count
            }


def get_default_log_dir() -> str:
    """默认日志目录：环境变量优先，其次为用户数据目录下的 logs"""
    log_dir = os.environ.get("FIND_ME_DEBUG_LOG_DIR")
    if log_dir:
        return log_dir
    from find_me.core.config_manager import get_user_data_dir
    return os.path.join(get_user_data_dir(), "logs")


# 全局日志函数
_logger: Optional[AsyncDebugLogger] = None
_enabled = os.environ.get("FIND_ME_DEBUG_ENABLED", "1") == "1"


def get_logger() -> AsyncDebugLogger:
    """获取全局日志器"""
    global _logger
    if _logger is None or not _logger._running:
        _logger = AsyncDebugLogger.get_instance()
    return _logger


def async_debug_log(message: str, category: str = "INFO"):
    """
    异步调试日志（全局函数）

    Args:
        message: 日志消息
        category: 日志类别
    """
    if not _enabled:
        return
    get_logger().log(message, category)


def async_game_log(message: str):
    """游戏状态调试日志"""
    async_debug_log(message, "GAME")


def async_main_log(message: str):
    """主程序调试日志"""
    async_debug_log(message, "MAIN")
