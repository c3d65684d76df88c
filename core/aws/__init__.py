"""
core/aws - AWS 클라이언트 헬퍼
"""

from .client import GLOBAL_API_REGION, get_client, new_session, resolve_region

__all__: list[str] = ["GLOBAL_API_REGION", "get_client", "new_session", "resolve_region"]
