import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tenant_rbac.services.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def guarded(db: Session, description: str) -> Iterator[None]:
    """
    블록 안에서 발생한 SQLAlchemyError를 PersistenceFailure로 바꿉니다.

    조회와 지연 로딩(lazy load)도 저장소 오류를 낼 수 있으므로, 리포지토리의 모든
    데이터베이스 접근은 이 블록 안에서 실행됩니다. 세션은 롤백되어 다음 호출에서
    다시 사용할 수 있는 상태로 남습니다.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to %s: %s", description, e)
        raise PersistenceFailure(f"Failed to {description}.") from e


def commit(db: Session, description: str):
    """커밋에 실패하면 세션을 롤백하고 PersistenceFailure로 감싸서 다시 던집니다."""
    with guarded(db, description):
        db.commit()


def first_or_create(db: Session, lookup: Callable[[], Optional[T]], factory: Callable[[], T], description: str) -> T:
    """
    고유 키로 레코드를 조회하고, 없으면 생성합니다.

    두 호출이 동시에 같은 키를 생성하려고 경합하면, 나중 호출은 유니크 제약 위반
    (IntegrityError)을 받게 됩니다. 이 경우 롤백 후 먼저 생성된 레코드를 다시 읽어
    성공으로 처리합니다. lookup은 자체적으로 guarded()를 사용해야 합니다.
    """
    instance = lookup()
    if instance is not None:
        return instance

    instance = factory()
    db.add(instance)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        existing = lookup()
        if existing is None:
            logger.error("Failed to %s: %s", description, e)
            raise PersistenceFailure(f"Failed to {description}.") from e
        logger.debug("Concurrent create detected while trying to %s; using existing row.", description)
        return existing
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to %s: %s", description, e)
        raise PersistenceFailure(f"Failed to {description}.") from e
    with guarded(db, description):
        db.refresh(instance)
    return instance
