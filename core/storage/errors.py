"""
저장소 예외 정의
"""


class StorageError(IOError):
    """저장소 I/O 실패

    문서를 획득/읽기/쓰기할 수 없는 경우.
    내부에서 재시도하지 않고 호출자에게 그대로 전파.
    """

    pass
