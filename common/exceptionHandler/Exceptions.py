# 외부 라이브러리 에러를 종류별로 감싸는 예외들
# 컨트롤러는 메시지 문자열이 아니라 예외 타입으로 상태 코드를 결정한다


class ResolverError(Exception):
    """영상 정보 조회 실패 (일시적 오류 포함)"""
    kind = "transient"

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class VideoUnavailableError(ResolverError):
    """삭제 / 비공개 영상"""
    kind = "not_found"


class AgeRestrictedError(ResolverError):
    """로그인이 필요한 연령 제한 영상"""
    kind = "access_denied"


class SearchError(Exception):
    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
