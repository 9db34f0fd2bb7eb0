"""Casbin rule table for policy storage.

Row layout (same columns as the common Casbin SQL adapters, so existing
tables can be reused):

    ptype='p',    v0=<principal>, v1=<resource>, v2=<action>
    ptype='g',    v0='user:<id>', v1=<role>
    ptype='role', v0=<role>                        (declared role)
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from accessgate.infrastructure.persistence.base import BaseModel


class CasbinRule(BaseModel):
    """One stored policy tuple.

    Fields:
        id: Auto-incrementing key; load order follows it.
        ptype: 'p', 'g' or 'role'.
        v0-v5: Tuple values. v3-v5 stay NULL under the shipped model.
    """

    __tablename__ = "casbin_rule"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        nullable=False,
    )
    ptype: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v0: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v3: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v4: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v5: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("idx_casbin_rule_ptype", "ptype"),
        Index("idx_casbin_rule_v0", "v0"),
    )

    @classmethod
    def from_row(cls, row: list[str]) -> "CasbinRule":
        """Build a rule from ``[ptype, v0, v1, ...]``."""
        ptype, *values = row
        padded = [*values, *([None] * (6 - len(values)))]
        return cls(
            ptype=ptype,
            v0=padded[0],
            v1=padded[1],
            v2=padded[2],
            v3=padded[3],
            v4=padded[4],
            v5=padded[5],
        )

    def to_row(self) -> list[str]:
        """Return ``[ptype, v0, ...]`` up to the last non-NULL value."""
        values = [self.v0, self.v1, self.v2, self.v3, self.v4, self.v5]
        while values and values[-1] is None:
            values.pop()
        return [self.ptype or "", *(value or "" for value in values)]

    def __repr__(self) -> str:
        return f"<CasbinRule(ptype={self.ptype}, v0={self.v0}, v1={self.v1}, v2={self.v2})>"
