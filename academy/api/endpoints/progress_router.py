from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api.dependencies import get_db
from academy.core.exceptions import NotFoundError
from academy.schemas import progress_schema
from academy.schemas.achievement_schema import Achievement
from academy.services.progress_service import ProgressOutcome, ProgressService

router = APIRouter()


def _mutation_response(outcome: ProgressOutcome) -> progress_schema.ProgressMutationResponse:
    return progress_schema.ProgressMutationResponse(
        data=progress_schema.Progress.model_validate(outcome.progress),
        unlocked=[Achievement.model_validate(a) for a in outcome.unlocked],
    )


@router.post("", response_model=progress_schema.ProgressMutationResponse)
def upsert_progress(progress_in: progress_schema.ProgressUpsert, db: Session = Depends(get_db)):
    service = ProgressService(db, progress_in.user_id)
    return _mutation_response(service.upsert(progress_in))


@router.get("/{user_id}")
def list_progress(user_id: str, db: Session = Depends(get_db)):
    rows = ProgressService(db, user_id).list_progress()
    return {"success": True, "data": [progress_schema.Progress.model_validate(r) for r in rows]}


@router.get("/{user_id}/summary")
def progress_summary(user_id: str, db: Session = Depends(get_db)):
    service = ProgressService(db, user_id)
    rows = service.list_progress()
    summary = progress_schema.ProgressSummary(
        completion_rate=service.completion_rate(),
        time_spent=service.time_spent(),
        count=len(rows),
    )
    return {"success": True, "data": summary}


@router.get("/{user_id}/{algorithm_id}")
def read_progress(user_id: str, algorithm_id: str, db: Session = Depends(get_db)):
    row = ProgressService(db, user_id).get_progress(algorithm_id)
    if row is None:
        raise NotFoundError("Progress not found")
    return {"success": True, "data": progress_schema.Progress.model_validate(row)}


@router.patch("/{user_id}/{algorithm_id}", response_model=progress_schema.ProgressMutationResponse)
def update_progress(
    user_id: str,
    algorithm_id: str,
    changes: progress_schema.ProgressUpdate,
    db: Session = Depends(get_db),
):
    service = ProgressService(db, user_id)
    return _mutation_response(service.update(algorithm_id, **changes.model_dump(exclude_unset=True)))


@router.post("/{user_id}/{algorithm_id}/start", response_model=progress_schema.ProgressMutationResponse)
def start_algorithm(user_id: str, algorithm_id: str, db: Session = Depends(get_db)):
    return _mutation_response(ProgressService(db, user_id).start(algorithm_id))


@router.post("/{user_id}/{algorithm_id}/complete", response_model=progress_schema.ProgressMutationResponse)
def complete_algorithm(user_id: str, algorithm_id: str, db: Session = Depends(get_db)):
    return _mutation_response(ProgressService(db, user_id).complete(algorithm_id))


@router.post("/{user_id}/{algorithm_id}/bookmark", response_model=progress_schema.ProgressMutationResponse)
def bookmark_algorithm(user_id: str, algorithm_id: str, db: Session = Depends(get_db)):
    return _mutation_response(ProgressService(db, user_id).bookmark(algorithm_id))


@router.post("/{user_id}/{algorithm_id}/sections", response_model=progress_schema.ProgressMutationResponse)
def complete_section(
    user_id: str,
    algorithm_id: str,
    section_in: progress_schema.SectionComplete,
    db: Session = Depends(get_db),
):
    service = ProgressService(db, user_id)
    return _mutation_response(service.complete_section(algorithm_id, section_in.section_id))


@router.post("/{user_id}/{algorithm_id}/rating", response_model=progress_schema.ProgressMutationResponse)
def rate_algorithm(
    user_id: str,
    algorithm_id: str,
    rating_in: progress_schema.RatingIn,
    db: Session = Depends(get_db),
):
    return _mutation_response(ProgressService(db, user_id).rate(algorithm_id, rating_in.rating))
