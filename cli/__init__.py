"""
cli - aws-browse 명령줄 인터페이스
"""
