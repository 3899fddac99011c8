import logging
import sys
from datetime import datetime
from typing import Union

import pytz
from dateutil import parser as date_parser


# 将日志配置移到这里，作为一个可被调用的函数
def setup_logging(verbose: bool = False):
    """配置全局日志"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def set_verbose(verbose: bool):
    """日志配置完成后再切换根日志级别 (用于 --verbose)"""
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def to_local(instant: Union[datetime, str], tz) -> datetime:
    """
    将绝对时刻转换为目标时区的本地时间。
    - 字符串按 ISO-8601 解析
    - 不带时区信息的 datetime 视为 UTC
    """
    if isinstance(instant, str):
        instant = date_parser.isoparse(instant)
    if instant.tzinfo is None:
        instant = pytz.utc.localize(instant)
    return instant.astimezone(tz)
