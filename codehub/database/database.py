from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from codehub.config import settings


def enable_sqlite_transactions(engine: Engine) -> Engine:
    """
    pysqlite 드라이버가 BEGIN을 직접 관리하지 않도록 하고, SQLAlchemy가 트랜잭션을 시작할 때
    명시적으로 BEGIN을 보내도록 설정합니다.
    이 설정이 없으면 SQLite에서 SAVEPOINT(begin_nested)와 롤백이 제대로 동작하지 않습니다.
    """
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # connect_args는 SQLite에서만 필요합니다. (thread-safe 설정)
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        return enable_sqlite_transactions(engine)
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(settings.database_url)

# autoflush=False로 설정하여, 트랜잭션 경계는 UnitOfWork가 명시적으로 관리합니다.
SessionLocal = sessionmaker(autoflush=False, bind=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()
