"""
core/dao - 리소스 DAO capability 모델

리소스 모듈 약 160개가 공통으로 구현하는 list/get/delete 규약과
리전 메타데이터가 붙은 리소스 타입을 제공합니다.
"""

from .base import DAO, BaseDAO, DAOFactory, PaginatedDAO, iter_pages, list_page_or_all
from .regional import RegionalResource, get_resource_region, unwrap_resource, wrap_with_region
from .types import BaseResource, ExtraFields, Operation, Resource, tags_from_list

__all__: list[str] = [
    # types
    "Operation",
    "Resource",
    "BaseResource",
    "ExtraFields",
    "tags_from_list",
    # base
    "DAO",
    "BaseDAO",
    "PaginatedDAO",
    "DAOFactory",
    "list_page_or_all",
    "iter_pages",
    # regional
    "RegionalResource",
    "wrap_with_region",
    "unwrap_resource",
    "get_resource_region",
]
