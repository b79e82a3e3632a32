"""
Module: monitor_kernel.models.monitor_config
Responsibility: ORM persistence for the single, process-wide monitor
    configuration: owner, trigger identity, cooldown length, pause flag.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - At most one row exists (created once by AdminService.initialize).
    - version increases by one on every administrative mutation, so a
      MonitorConfigInfo snapshot can be compared against the live row.
    - trigger is never the null address.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from monitor_kernel.db.base import TrackedBase
from monitor_kernel.db.types import ADDRESS_LENGTH


class MonitorConfig(TrackedBase):
    """
    Global configuration of the balance monitor.

    Contract:
        Mutated only through AdminService.  Read by the control loop as an
        immutable MonitorConfigInfo snapshot.
    """

    __tablename__ = "monitor_config"

    owner: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=False,
    )

    # Proposed owner awaiting accept_ownership()
    pending_owner: Mapped[str | None] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=True,
    )

    # Only identity allowed to run the perform phase
    trigger: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=False,
    )

    min_wait_period_seconds: Mapped[int] = mapped_column(
        nullable=False,
        default=0,
    )

    paused: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    version: Mapped[int] = mapped_column(
        nullable=False,
        default=1,
    )

    def __repr__(self) -> str:
        return (
            f"<MonitorConfig v{self.version} owner={self.owner} "
            f"trigger={self.trigger} paused={self.paused}>"
        )
