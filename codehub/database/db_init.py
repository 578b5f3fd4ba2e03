from .database import engine, Base
from . import models  # noqa: F401  모든 모델을 Base.metadata에 등록합니다.
from codehub.utils.logger import logger

def initialize_db(bind=None):
    """
    모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    사용자와 프로젝트는 요청 처리 중에 만들어지므로 기본 데이터는 넣지 않습니다.
    """
    bind = bind or engine
    logger.info("Initializing database schema at %s", bind.url)
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready.")

if __name__ == '__main__':
    initialize_db()
