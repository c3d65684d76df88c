"""
plugins/logs - CloudWatch Logs 리소스

Resources:
    - log-groups: 로그 그룹 (페이지 조회/삭제)
"""

CATEGORY = {
    "name": "logs",
    "display_name": "CloudWatch Logs",
    "description": "CloudWatch 로그 관리",
    "description_en": "CloudWatch Log Management",
    "aliases": ["cw", "cloudwatch"],
}
