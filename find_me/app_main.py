# =====================================================
# =============== 游戏主程序 ===============
# =====================================================

"""
游戏主程序 - 创建 QApplication 并显示主窗口
"""

import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from find_me import __app_name__
from find_me.core.async_logger import async_main_log
from find_me.core.config_manager import ConfigManager
from find_me.ui.main_window import FindMeWindow


def main(argv: Optional[List[str]] = None, config_path: Optional[str] = None) -> int:
    """主函数

    Args:
        argv: 命令行参数，默认 sys.argv
        config_path: 配置文件路径，默认 ~/.find_me/config.json

    Returns:
        Qt 事件循环退出码
    """
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(__app_name__)

    config_manager = ConfigManager(config_path)
    config = config_manager.load()
    async_main_log(f"配置已加载: {config_manager.config_path}")

    window = FindMeWindow(config)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
