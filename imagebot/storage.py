"""
Generation tracking store.

GenerationStore is the contract the bot and the HTTP surface depend on.
MemStorage keeps everything in process memory (default deployment);
DatabaseStorage implements the same contract over SQLAlchemy.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional
import datetime
import math
import uuid

from . import crud, models, schemas
from .async_operations import async_database_operation
from .database import create_db_engine, create_session_factory
from .logger import logger
from .schemas import GenerationRecord, GenerationStatus, GenerationUpdate


class GenerationStore(ABC):
    """Abstract store for generation records and user accounts"""

    @abstractmethod
    async def create_record(self, requester_id: str, prompt: str) -> GenerationRecord:
        pass

    @abstractmethod
    async def update_record(self, record_id: str, updates: GenerationUpdate) -> None:
        """
        Merge the set fields of `updates` into an existing record.
        Unknown ids are ignored; no record is created and nothing is raised.
        """
        pass

    @abstractmethod
    async def get_record(self, record_id: str) -> Optional[GenerationRecord]:
        pass

    @abstractmethod
    async def find_latest_by_requester_and_prompt(self, requester_id: str, prompt: str) -> Optional[GenerationRecord]:
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> List[GenerationRecord]:
        pass

    @abstractmethod
    async def compute_stats(self) -> schemas.BotStats:
        pass

    @abstractmethod
    async def create_user(self, user: schemas.UserCreate) -> schemas.UserAccount:
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[schemas.UserAccount]:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[schemas.UserAccount]:
        pass


def allowed_changes(current: GenerationRecord, updates: GenerationUpdate) -> Optional[dict]:
    """
    Return the changes that may be applied to `current`, or None when the
    update must be dropped because it would move a terminal record.
    """
    changes = updates.changes()
    new_status = changes.get("status")
    if current.status.is_terminal and new_status is not None and new_status != current.status:
        logger.warning(
            f"Ignoring status change {current.status.value} -> {GenerationStatus(new_status).value} "
            f"for generation {current.id}"
        )
        return None
    return changes


def summarize_generations(generations: Iterable[GenerationRecord]) -> schemas.BotStats:
    generations = list(generations)
    successful = [g for g in generations if g.status == GenerationStatus.COMPLETED]
    failed = [g for g in generations if g.status == GenerationStatus.FAILED]

    # Average generation time over completed generations that carry both timestamps
    timed = [g for g in successful if g.created_at and g.completed_at]
    average = 0
    if timed:
        total = sum((g.completed_at - g.created_at).total_seconds() for g in timed)
        # Halves round up to the next hundredth
        average = math.floor(total / len(timed) * 100 + 0.5) / 100

    return schemas.BotStats(
        totalGenerations=len(generations),
        successfulGenerations=len(successful),
        failedGenerations=len(failed),
        uniqueUsers=len({g.requester_id for g in generations}),
        averageGenerationTimeSeconds=average,
    )


class MemStorage(GenerationStore):
    """In-process store; dict insertion order is creation order"""

    def __init__(self, clock: Optional[Callable[[], datetime.datetime]] = None):
        self.clock = clock or schemas.utc_now
        self.users: Dict[str, schemas.UserAccount] = {}
        self.generations: Dict[str, GenerationRecord] = {}

    async def create_record(self, requester_id: str, prompt: str) -> GenerationRecord:
        record = GenerationRecord(
            id=str(uuid.uuid4()),
            requester_id=requester_id,
            prompt=prompt,
            status=GenerationStatus.PENDING,
            created_at=self.clock(),
        )
        self.generations[record.id] = record
        return record.model_copy()

    async def update_record(self, record_id: str, updates: GenerationUpdate) -> None:
        existing = self.generations.get(record_id)
        if existing is None:
            logger.debug(f"Update for unknown generation {record_id} ignored")
            return
        changes = allowed_changes(existing, updates)
        if changes:
            self.generations[record_id] = existing.model_copy(update=changes)

    async def get_record(self, record_id: str) -> Optional[GenerationRecord]:
        record = self.generations.get(record_id)
        return record.model_copy() if record else None

    async def find_latest_by_requester_and_prompt(self, requester_id: str, prompt: str) -> Optional[GenerationRecord]:
        for record in reversed(list(self.generations.values())):
            if record.requester_id == requester_id and record.prompt == prompt:
                return record.model_copy()
        return None

    async def list_recent(self, limit: int) -> List[GenerationRecord]:
        ordered = sorted(
            enumerate(self.generations.values()),
            key=lambda item: (item[1].created_at, item[0]),
            reverse=True,
        )
        return [record.model_copy() for _, record in ordered[:max(limit, 0)]]

    async def compute_stats(self) -> schemas.BotStats:
        return summarize_generations(self.generations.values())

    async def create_user(self, user: schemas.UserCreate) -> schemas.UserAccount:
        if await self.get_user_by_username(user.username):
            raise ValueError(f"Username '{user.username}' is already taken")
        account = schemas.UserAccount(id=str(uuid.uuid4()), username=user.username, password=user.password)
        self.users[account.id] = account
        return account.model_copy()

    async def get_user(self, user_id: str) -> Optional[schemas.UserAccount]:
        user = self.users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[schemas.UserAccount]:
        for user in self.users.values():
            if user.username == username:
                return user.model_copy()
        return None


class DatabaseStorage(GenerationStore):
    """Store backed by SQLAlchemy; each call runs in its own session on a worker thread"""

    def __init__(self, engine, clock: Optional[Callable[[], datetime.datetime]] = None):
        self.engine = engine
        self.clock = clock or schemas.utc_now
        self.SessionLocal = create_session_factory(engine)
        models.Base.metadata.create_all(bind=engine)

    async def _run(self, crud_func, *args):
        def work():
            db = self.SessionLocal()
            try:
                return crud_func(db, *args)
            finally:
                db.close()
        return await async_database_operation(work)

    async def create_record(self, requester_id: str, prompt: str) -> GenerationRecord:
        return await self._run(crud.create_generation, requester_id, prompt, self.clock())

    async def update_record(self, record_id: str, updates: GenerationUpdate) -> None:
        existing = await self.get_record(record_id)
        if existing is None:
            logger.debug(f"Update for unknown generation {record_id} ignored")
            return
        changes = allowed_changes(existing, updates)
        if changes:
            await self._run(crud.update_generation, record_id, changes)

    async def get_record(self, record_id: str) -> Optional[GenerationRecord]:
        return await self._run(crud.get_generation, record_id)

    async def find_latest_by_requester_and_prompt(self, requester_id: str, prompt: str) -> Optional[GenerationRecord]:
        return await self._run(crud.get_latest_by_requester_and_prompt, requester_id, prompt)

    async def list_recent(self, limit: int) -> List[GenerationRecord]:
        return await self._run(crud.get_recent_generations, max(limit, 0))

    async def compute_stats(self) -> schemas.BotStats:
        return summarize_generations(await self._run(crud.get_all_generations))

    async def create_user(self, user: schemas.UserCreate) -> schemas.UserAccount:
        return await self._run(crud.create_user, user)

    async def get_user(self, user_id: str) -> Optional[schemas.UserAccount]:
        return await self._run(crud.get_user, user_id)

    async def get_user_by_username(self, username: str) -> Optional[schemas.UserAccount]:
        return await self._run(crud.get_user_by_username, username)


def build_storage(database_url: Optional[str] = None) -> GenerationStore:
    """Pick the store implementation for the configured database URL"""
    if database_url:
        logger.info("Using database-backed generation store")
        return DatabaseStorage(create_db_engine(database_url))
    logger.info("Using in-memory generation store")
    return MemStorage()
