"""Singleton counter row."""
from sqlalchemy import BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from sandbox_services.db.session import Base

# Range of the BIGINT column holding the counter.
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1


class Counter(Base):
    """Shared numeric counter.

    Exactly one row exists. It is provisioned by the bootstrap script and only
    ever mutated in place by request traffic.
    """

    __tablename__ = "countr"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, default=1)
    number: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
