from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
from . import models, schemas

def _to_record(db_generation: Optional[models.ImageGeneration]) -> Optional[schemas.GenerationRecord]:
    if db_generation is None:
        return None
    return schemas.GenerationRecord.model_validate(db_generation)

def _get_db_generation(db: Session, generation_id: str) -> Optional[models.ImageGeneration]:
    return db.query(models.ImageGeneration).filter(models.ImageGeneration.id == generation_id).first()

def get_generation(db: Session, generation_id: str) -> Optional[schemas.GenerationRecord]:
    return _to_record(_get_db_generation(db, generation_id))

def create_generation(db: Session, requester_id: str, prompt: str, created_at=None) -> schemas.GenerationRecord:
    db_generation = models.ImageGeneration(
        requester_id=requester_id,
        prompt=prompt,
        status=schemas.GenerationStatus.PENDING.value,
    )
    if created_at is not None:
        db_generation.created_at = created_at
    db.add(db_generation)
    db.commit()
    db.refresh(db_generation)
    return _to_record(db_generation)

def update_generation(db: Session, generation_id: str, changes: dict) -> Optional[schemas.GenerationRecord]:
    db_generation = _get_db_generation(db, generation_id)
    if db_generation:
        for field, value in changes.items():
            if isinstance(value, schemas.GenerationStatus):
                value = value.value
            setattr(db_generation, field, value)
        db.commit()
        db.refresh(db_generation)
    return _to_record(db_generation)

def get_latest_by_requester_and_prompt(db: Session, requester_id: str, prompt: str) -> Optional[schemas.GenerationRecord]:
    db_generation = (
        db.query(models.ImageGeneration)
        .filter(
            models.ImageGeneration.requester_id == requester_id,
            models.ImageGeneration.prompt == prompt,
        )
        .order_by(models.ImageGeneration.created_at.desc(), models.ImageGeneration.seq.desc())
        .first()
    )
    return _to_record(db_generation)

def get_recent_generations(db: Session, limit: int) -> List[schemas.GenerationRecord]:
    generations = (
        db.query(models.ImageGeneration)
        .order_by(models.ImageGeneration.created_at.desc(), models.ImageGeneration.seq.desc())
        .limit(limit)
        .all()
    )
    return [_to_record(g) for g in generations]

def get_all_generations(db: Session) -> List[schemas.GenerationRecord]:
    return [_to_record(g) for g in db.query(models.ImageGeneration).order_by(models.ImageGeneration.seq).all()]

# User CRUD Operations
def get_user(db: Session, user_id: str) -> Optional[schemas.UserAccount]:
    db_user = db.get(models.User, user_id)
    return schemas.UserAccount.model_validate(db_user) if db_user else None

def get_user_by_username(db: Session, username: str) -> Optional[schemas.UserAccount]:
    db_user = db.query(models.User).filter(models.User.username == username).first()
    return schemas.UserAccount.model_validate(db_user) if db_user else None

def create_user(db: Session, user: schemas.UserCreate) -> schemas.UserAccount:
    db_user = models.User(username=user.username, password=user.password)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError(f"Username '{user.username}' is already taken")
    db.refresh(db_user)
    return schemas.UserAccount.model_validate(db_user)
