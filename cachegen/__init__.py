"""
sqlc Queries 메서드용 읽기 캐시 래퍼 생성기.
"""

__version__ = "0.1.0"
