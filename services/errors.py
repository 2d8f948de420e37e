class StorageError(Exception):
    """DB 읽기/쓰기 실패 (메시지는 클라이언트에 그대로 노출되는 일반 문구)"""
    pass


class RecordNotFoundError(Exception):
    """수정/삭제 대상 레코드가 없음"""
    pass


class InferenceError(Exception):
    """텍스트 생성 서버 연동 실패 (연결 불가, 시간 초과, 비정상 응답)"""
    pass


class MalformedEnrollmentDateError(ValueError):
    """입학 시기 문자열이 "<연도> <Spring|Fall>" 형식이 아님"""

    def __init__(self, student_id, value):
        self.student_id = student_id
        self.value = value
        super().__init__(f"Invalid enrollment date {value!r} for student {student_id}")
