"""
plugins/s3 - S3 스토리지 리소스

Resources:
    - buckets: S3 버킷 (조회/삭제)
"""

CATEGORY = {
    "name": "s3",
    "display_name": "S3",
    "description": "S3 스토리지",
    "description_en": "S3 Storage",
    "aliases": ["storage", "bucket"],
}
