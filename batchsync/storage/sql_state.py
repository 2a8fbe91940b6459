"""SQLModel-backed scheduler state."""

from datetime import datetime

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from batchsync.interfaces.state import PersistentState
from batchsync.log import get_logger
from batchsync.models.rows import SchedulerStateRow
from batchsync.utils import get_current_timestamp

logger = get_logger(__name__)


class SqlPersistentState(PersistentState):
    """Scheduler state stored in a single ``scheduler_state`` row."""

    def __init__(self, engine: Engine) -> None:
        """Initialize the state store.

        Args:
            engine: Database engine with the state table created
        """
        self.engine = engine

    def get_or_create_state(self) -> SchedulerStateRow:
        """Get the state row, creating an empty one if none exists."""
        with Session(self.engine) as session:
            state = session.exec(select(SchedulerStateRow)).first()

            if state is None:
                state = SchedulerStateRow()
                session.add(state)
                session.commit()
                session.refresh(state)
                logger.info("Created new scheduler state")

            return state

    def get_last_successful_run_at(self) -> datetime | None:
        value = self.get_or_create_state().last_successful_run_at
        return datetime.fromisoformat(value) if value else None

    def set_last_successful_run_at(self, value: datetime) -> None:
        self._update(last_successful_run_at=value.isoformat())

    def get_last_outcome_display(self) -> str | None:
        return self.get_or_create_state().last_outcome_display

    def set_last_outcome_display(self, value: str) -> None:
        self._update(last_outcome_display=value)

    def _update(self, **values: str) -> None:
        self.get_or_create_state()
        with Session(self.engine) as session:
            state = session.exec(select(SchedulerStateRow)).one()
            for key, value in values.items():
                setattr(state, key, value)
            state.updated_at = get_current_timestamp()
            session.add(state)
            session.commit()
