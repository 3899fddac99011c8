# report_builder.py
"""
[V1.0] 提交时段报告生成器
负责计算百分比与进度条，并调用 Jinja2 模板渲染最终写入 Gist 的文本。
渲染结果只取决于 stats 与传入的时刻。
"""
import logging
import math
import os
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

import pytz
from jinja2 import Environment, FileSystemLoader

from config import GlobalConfig
from models import BUCKETS, CommitStats

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "commit_habit.md.j2"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

BAR_FILLED = "█"
BAR_EMPTY = "░"
DEFAULT_BAR_WIDTH = 20

LABEL_WIDTH = 7
MIN_COUNT_WIDTH = 3
PERCENT_WIDTH = 5
COLUMN_GAP = "   "


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_percent(count: int, total: int) -> float:
    """count 占 total 的百分比，保留一位小数；total 为 0 时返回 0"""
    if total == 0:
        return 0.0
    # 对浮点数的精确值做四舍五入，末位 5 一律进位
    exact = Decimal(count / total * 100)
    return float(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def render_bar(percent: float, width: int = DEFAULT_BAR_WIDTH) -> str:
    """固定宽度的进度条，宽度恒为 width"""
    filled = _round_half_up(percent / 100 * width)
    filled = max(0, min(width, filled))
    return BAR_FILLED * filled + BAR_EMPTY * (width - filled)


def build_rows(
    stats: CommitStats, bar_width: int = DEFAULT_BAR_WIDTH, show_percent: bool = True
) -> List[str]:
    """
    生成每个时段的一行：
    `<emoji> <label>   <count> commits   <bar>   <percent>%`
    """
    total = stats.total
    counts = [stats.count_for(bucket.key) for bucket in BUCKETS]
    count_width = max([MIN_COUNT_WIDTH] + [len(str(c)) for c in counts])

    rows = []
    for bucket, count in zip(BUCKETS, counts):
        percent = get_percent(count, total)
        columns = [
            f"{bucket.emoji} {bucket.label:<{LABEL_WIDTH}}",
            f"{count:>{count_width}} commits",
            render_bar(percent, bar_width),
        ]
        if show_percent:
            columns.append(f"{percent:>{PERCENT_WIDTH}.1f}%")
        rows.append(COLUMN_GAP.join(columns))
    return rows


def format_update_time(now: datetime, tz) -> str:
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(tz).strftime(TIME_FORMAT)


def _get_environment(global_config: GlobalConfig) -> Environment:
    templates_dir = os.path.join(global_config.SCRIPT_BASE_PATH, "templates")
    return Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=False,
        keep_trailing_newline=True,
    )


def generate_summary(
    stats: CommitStats,
    global_config: GlobalConfig,
    now: Optional[datetime] = None,
) -> str:
    """
    渲染写入 Gist 的完整文本。
    :param now: 生成时刻 (默认当前 UTC 时间)，以目标时区显示
    """
    if now is None:
        now = datetime.now(pytz.utc)

    template_context = {
        "rows": build_rows(
            stats,
            bar_width=global_config.BAR_WIDTH,
            show_percent=global_config.SHOW_PERCENT,
        ),
        "update_time": format_update_time(now, global_config.tz),
    }

    template = _get_environment(global_config).get_template(TEMPLATE_NAME)
    logger.debug(f"🎨 正在渲染 Jinja2 模板: {TEMPLATE_NAME}")
    return template.render(**template_context)
