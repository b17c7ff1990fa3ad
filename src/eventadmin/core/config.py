"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、优先级范围、受限事件类型的默认国家等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("EVENTADMIN_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "EVENTADMIN_DB_PATH",
        str(_get_base_dir() / "sqlite" / "eventadmin.db"),
    )


# Event 优先级取值范围（闭区间）
PRIORITY_MIN: int = 0
PRIORITY_MAX: int = 10
