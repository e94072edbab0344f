# backend/modules/dashboard/utils/query_monitor.py

"""
Query performance monitoring for dashboard sub-queries.

Every store primitive is timed; slow ones are logged so a dashboard that
fans out a dozen queries can be traced back to the one holding it up.
"""

import time
import functools
import logging
from typing import Callable, Any, Dict, Optional, List
from datetime import datetime
from collections import defaultdict
import threading

from core.config import get_settings

logger = logging.getLogger(__name__)


class QueryPerformanceMonitor:
    """Monitor and track database query performance"""

    def __init__(self, slow_query_threshold: float = 1.0):
        self.query_stats = defaultdict(lambda: {
            "count": 0,
            "error_count": 0,
            "total_time": 0.0,
            "min_time": float('inf'),
            "max_time": 0.0,
            "slow_queries": [],
            "last_executed": None
        })
        self.slow_query_threshold = slow_query_threshold
        self.enabled = True
        self._lock = threading.Lock()

    def record_query(
        self,
        query_name: str,
        execution_time: float,
        query_details: Optional[Dict[str, Any]] = None
    ):
        """Record query execution statistics"""
        if not self.enabled:
            return

        with self._lock:
            stats = self.query_stats[query_name]
            stats["count"] += 1
            stats["total_time"] += execution_time
            stats["min_time"] = min(stats["min_time"], execution_time)
            stats["max_time"] = max(stats["max_time"], execution_time)
            stats["last_executed"] = datetime.now()
            if query_details and "error" in query_details:
                stats["error_count"] += 1

            if execution_time > self.slow_query_threshold:
                stats["slow_queries"].append({
                    "execution_time": execution_time,
                    "timestamp": datetime.now(),
                    "details": query_details or {}
                })

                # Keep only last 100 slow queries
                if len(stats["slow_queries"]) > 100:
                    stats["slow_queries"] = stats["slow_queries"][-100:]

                logger.warning(
                    f"Slow query detected: {query_name} took {execution_time:.2f}s"
                )

    def get_statistics(self, query_name: Optional[str] = None) -> Dict[str, Any]:
        """Get query performance statistics"""
        if query_name:
            stats = self.query_stats.get(query_name)
            if not stats:
                return {}

            avg_time = stats["total_time"] / stats["count"] if stats["count"] > 0 else 0
            return {
                "query_name": query_name,
                "execution_count": stats["count"],
                "error_count": stats["error_count"],
                "total_time": stats["total_time"],
                "average_time": avg_time,
                "min_time": stats["min_time"] if stats["min_time"] != float('inf') else 0,
                "max_time": stats["max_time"],
                "slow_query_count": len(stats["slow_queries"]),
                "last_executed": stats["last_executed"]
            }

        all_stats: List[Dict[str, Any]] = []
        for name, stats in self.query_stats.items():
            avg_time = stats["total_time"] / stats["count"] if stats["count"] > 0 else 0
            all_stats.append({
                "query_name": name,
                "execution_count": stats["count"],
                "average_time": avg_time,
                "slow_query_count": len(stats["slow_queries"])
            })

        return {
            "total_queries": sum(s["execution_count"] for s in all_stats),
            "queries": sorted(all_stats, key=lambda x: x["average_time"], reverse=True)
        }

    def reset_statistics(self, query_name: Optional[str] = None):
        """Reset query statistics"""
        with self._lock:
            if query_name:
                self.query_stats.pop(query_name, None)
            else:
                self.query_stats.clear()


# Global monitor instance
query_monitor = QueryPerformanceMonitor(
    slow_query_threshold=get_settings().dashboard_slow_query_seconds
)


def monitor_query_performance(query_name: Optional[str] = None):
    """
    Decorator to time an async store primitive.

    Usage:
        @monitor_query_performance("orders.count")
        async def count_orders(self, criteria):
            ...
    """
    def decorator(func: Callable) -> Callable:
        name = query_name or f"{func.__module__}.{func.__name__}"

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            error = None

            try:
                return await func(*args, **kwargs)
            except Exception as e:
                error = e
                raise
            finally:
                execution_time = time.perf_counter() - start_time

                details = {}
                if args and hasattr(args[0], '__class__'):
                    details["class"] = args[0].__class__.__name__
                if error:
                    details["error"] = str(error)

                query_monitor.record_query(name, execution_time, details)

        return async_wrapper

    return decorator
