# data_sources/commit_count.py
"""
[V1.1] PushEvent 提交数提取策略
GitHub 的 PushEvent payload 字段并不总是完整 (commits 列表可能缺失或为空)，
按顺序尝试以下策略，第一个给出结果的策略生效。
"""
from typing import Any, Callable, List, Mapping, Optional

CountStrategy = Callable[[Mapping[str, Any]], Optional[int]]


def _positive_int(value: Any) -> Optional[int]:
    # bool 是 int 的子类，需要排除
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def from_commit_list(payload: Mapping[str, Any]) -> Optional[int]:
    """payload.commits 列表的长度 (空列表不算)"""
    commits = payload.get("commits")
    if isinstance(commits, list) and commits:
        return len(commits)
    return None


def from_size(payload: Mapping[str, Any]) -> Optional[int]:
    """payload.size"""
    return _positive_int(payload.get("size"))


def from_distinct_size(payload: Mapping[str, Any]) -> Optional[int]:
    """payload.distinct_size"""
    return _positive_int(payload.get("distinct_size"))


def single_commit(payload: Mapping[str, Any]) -> Optional[int]:
    """兜底：一次推送至少算一个提交"""
    return 1


# --- 在这里调整提取顺序 ---
DEFAULT_STRATEGIES: List[CountStrategy] = [
    from_commit_list,
    from_size,
    from_distinct_size,
    single_commit,
]


def extract_commit_count(
    payload: Any, strategies: Optional[List[CountStrategy]] = None
) -> int:
    """
    依次尝试提取策略，返回第一个非空结果。
    payload 缺失或不是字典时按空 payload 处理。
    """
    if not isinstance(payload, Mapping):
        payload = {}
    for strategy in strategies if strategies is not None else DEFAULT_STRATEGIES:
        count = strategy(payload)
        if count is not None:
            return count
    return 1
