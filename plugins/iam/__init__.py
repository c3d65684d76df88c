"""
plugins/iam - IAM 리소스 (글로벌 서비스)

Resources:
    - roles: IAM 역할 (읽기 전용)
"""

CATEGORY = {
    "name": "iam",
    "display_name": "IAM",
    "description": "IAM 자격 증명 리소스",
    "description_en": "IAM Identity Resources",
    "aliases": ["security"],
    "is_global": True,  # IAM is a Global service - region override has no effect
}
