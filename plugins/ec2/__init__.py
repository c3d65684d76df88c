"""
plugins/ec2 - EC2 컴퓨팅 리소스

Resources:
    - instances: EC2 인스턴스 (조회/삭제)
"""

CATEGORY = {
    "name": "ec2",
    "display_name": "EC2",
    "description": "EC2 및 컴퓨팅 리소스",
    "description_en": "EC2 and Compute Resources",
    "aliases": ["compute"],
}
