# core/__init__.py
"""
core - AWS 리소스 브라우저 코어

리소스 모듈 약 160개가 공유하는 구조적 핵심을 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── dao/            # 리소스/DAO capability 모델, 리전 래핑 리소스
    ├── registry/       # 플러그인 레지스트리, 리전 투명 DAO 데코레이터
    ├── render/         # 렌더러 규약 (컬럼, 상세, 요약)
    ├── aws/            # boto3 session/client 헬퍼
    ├── context.py      # 요청 컨텍스트 (취소, 데드라인, 리전 오버라이드)
    ├── errors.py       # 에러 분류 (ErrorKind)
    ├── config.py       # 중앙 설정 관리, 로깅
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.context import background, with_region_override
    from core.errors import classify
    from core.registry import get_registry

    ctx = with_region_override(background(), "eu-west-1")
    dao = get_registry().get_dao(ctx, "ec2", "instances")
    try:
        resources = dao.list(ctx)
    except Exception as e:
        print(classify(e))
"""

__all__: list[str] = [
    # 서브패키지
    "aws",
    "dao",
    "registry",
    "render",
    # 모듈
    "config",
    "context",
    "errors",
    "exceptions",
]
