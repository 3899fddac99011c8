# models.py
from dataclasses import dataclass
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class Bucket:
    """提交时段 (本地小时区间 [start, end))"""

    key: str
    label: str
    emoji: str
    start: int
    end: int

    def contains(self, hour: int) -> bool:
        return self.start <= hour < self.end


# 渲染顺序即此列表顺序
BUCKETS: List[Bucket] = [
    Bucket(key="morning", label="Morning", emoji="🌞", start=6, end=12),
    Bucket(key="daytime", label="Daytime", emoji="🏙️", start=12, end=18),
    Bucket(key="evening", label="Evening", emoji="🌆", start=18, end=24),
    Bucket(key="night", label="Night", emoji="🌙", start=0, end=6),
]

BUCKET_KEYS = tuple(b.key for b in BUCKETS)


def classify_hour(hour: int) -> Bucket:
    """将本地小时 (0-23) 映射到唯一的时段"""
    for bucket in BUCKETS:
        if bucket.contains(hour):
            return bucket
    raise ValueError(f"hour must be in 0..23, got {hour!r}")


@dataclass
class CommitTime:
    """一条提交记录：发生时刻 + 计入的提交数"""

    instant: datetime
    count: int = 1


@dataclass
class CommitStats:
    """四个时段的提交计数，只增不减"""

    morning: int = 0
    daytime: int = 0
    evening: int = 0
    night: int = 0

    @property
    def total(self) -> int:
        return self.morning + self.daytime + self.evening + self.night

    def add(self, bucket_key: str, count: int = 1) -> None:
        if bucket_key not in BUCKET_KEYS:
            raise KeyError(f"unknown bucket: {bucket_key!r}")
        if count < 0:
            raise ValueError(f"commit count must be non-negative, got {count}")
        setattr(self, bucket_key, getattr(self, bucket_key) + count)

    def count_for(self, bucket_key: str) -> int:
        if bucket_key not in BUCKET_KEYS:
            raise KeyError(f"unknown bucket: {bucket_key!r}")
        return getattr(self, bucket_key)
