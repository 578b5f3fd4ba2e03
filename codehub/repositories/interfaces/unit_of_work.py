from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

class IUnitOfWork(ABC):
    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        하나의 논리적 작업 단위를 감싸는 컨텍스트 매니저를 반환합니다.
        블록이 정상 종료되면 커밋하고, 예외가 발생하면 전체를 롤백한 뒤 예외를 다시 던집니다.
        중첩 호출은 가장 바깥쪽 트랜잭션에 합류합니다.
        """
        pass
