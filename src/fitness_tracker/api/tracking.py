"""Authenticated endpoints for profiles, goals, stats and logs."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from fitness_tracker.api.dependencies import current_user_id, get_container, today
from fitness_tracker.api.schemas import (
    MAX_AGE,
    MIN_AGE,
    ExerciseLogCreate,
    FoodCreate,
    FoodLogCreate,
    FoodLogUpdate,
    ProfileUpdate,
    is_allowed_age,
)
from fitness_tracker.services.exercise import ExerciseNotFoundError
from fitness_tracker.services.food import FoodNotFoundError, LogNotFoundError
from fitness_tracker.services.stats import StatsUnavailableError

if TYPE_CHECKING:
    from fitness_tracker.domain.logs import ExerciseLogEntry, FoodLogEntry
    from fitness_tracker.domain.profile import Profile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tracking"])


@router.get("/profile")
async def get_profile(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the profile with its existence and completeness flags."""
    status_ = get_container(request).profile_service.get_status(user_id)
    return {
        "exists": status_.exists,
        "is_complete": status_.is_complete,
        "profile": _serialize_profile(status_.profile) if status_.profile else None,
    }


@router.put("/profile")
async def update_profile(
    body: ProfileUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Create or update the profile; today's goal follows the new values."""
    if body.birth_date is not None and not is_allowed_age(body.birth_date, day):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Age must be between {MIN_AGE} and {MAX_AGE}",
        )
    profile = get_container(request).profile_service.update_profile(
        user_id, body.model_dump(exclude_unset=True), day
    )
    return _serialize_profile(profile)


@router.get("/goals/today")
async def goals_today(
    request: Request,
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Return today's calorie and macro targets."""
    targets = get_container(request).goal_service.resolve_goal(user_id, day)
    return {"date": day.isoformat(), **asdict(targets)}


@router.get("/stats")
async def stats(
    request: Request,
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Return dashboard stats for today."""
    try:
        snapshot = get_container(request).stats_service.compute_user_stats(
            user_id, day
        )
    except StatsUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to load stats",
        ) from exc
    return asdict(snapshot)


@router.get("/foods/search")
async def search_foods(
    request: Request,
    q: str = Query(default=""),
    limit: int = Query(default=20, ge=1, le=50),
    _user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Search the food catalog by name."""
    foods = get_container(request).food_service.search(q, limit)
    return {"foods": [asdict(food) for food in foods]}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(
    body: FoodCreate, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Create a custom food item."""
    food = get_container(request).food_service.create_custom_food(
        user_id, body.model_dump()
    )
    return asdict(food)


@router.get("/food-logs")
async def list_food_logs(
    request: Request,
    log_date: date | None = Query(default=None, alias="date"),
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Return one day's food log with totals."""
    daily = get_container(request).food_service.daily_log(user_id, log_date or day)
    return {
        "date": daily.day.isoformat(),
        "entries": [_serialize_food_log(entry) for entry in daily.entries],
        "totals": asdict(daily.totals),
    }


@router.post("/food-logs", status_code=status.HTTP_201_CREATED)
async def log_food(
    body: FoodLogCreate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Log servings of a food."""
    try:
        entry = get_container(request).food_service.log_food(
            user_id=user_id,
            food_item_id=body.food_item_id,
            meal_type_id=body.meal_type_id,
            quantity=body.quantity,
            log_date=body.log_date or day,
        )
    except FoodNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
        ) from exc
    return _serialize_food_log(entry)


@router.patch("/food-logs/{log_id}")
async def update_food_log(
    log_id: UUID,
    body: FoodLogUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Change the quantity of a food log entry."""
    try:
        entry = get_container(request).food_service.update_quantity(
            user_id, log_id, body.quantity
        )
    except LogNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Log not found"
        ) from exc
    return _serialize_food_log(entry)


@router.delete("/food-logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> None:
    """Delete a food log entry."""
    try:
        get_container(request).food_service.delete_log(user_id, log_id)
    except LogNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Log not found"
        ) from exc


@router.get("/exercises/search")
async def search_exercises(
    request: Request,
    q: str = Query(default=""),
    limit: int = Query(default=20, ge=1, le=50),
    _user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Search exercises by name."""
    exercises = get_container(request).exercise_service.search(q, limit)
    return {"exercises": [asdict(exercise) for exercise in exercises]}


@router.get("/exercise-logs")
async def list_exercise_logs(
    request: Request,
    log_date: date | None = Query(default=None, alias="date"),
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Return one day's workouts."""
    target_day = log_date or day
    logs = get_container(request).exercise_service.list_logs(user_id, target_day)
    return {
        "date": target_day.isoformat(),
        "entries": [_serialize_exercise_log(entry) for entry in logs],
    }


@router.post("/exercise-logs", status_code=status.HTTP_201_CREATED)
async def log_exercise(
    body: ExerciseLogCreate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
    day: date = Depends(today),
) -> dict[str, object]:
    """Log a workout."""
    try:
        entry = get_container(request).exercise_service.log_exercise(
            user_id=user_id,
            exercise_id=body.exercise_id,
            duration_minutes=body.duration_minutes,
            calories_burned=body.calories_burned,
            log_date=body.log_date or day,
        )
    except ExerciseNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found"
        ) from exc
    return _serialize_exercise_log(entry)


@router.delete("/exercise-logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> None:
    """Delete a workout."""
    try:
        get_container(request).exercise_service.delete_log(user_id, log_id)
    except LogNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Log not found"
        ) from exc


def _serialize_profile(profile: Profile) -> dict[str, object]:
    return {
        "user_id": str(profile.user_id),
        "birth_date": profile.birth_date.isoformat() if profile.birth_date else None,
        "gender": profile.gender.value if profile.gender else None,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "activity_level_id": profile.activity_level_id,
        "goal_id": profile.goal_id,
    }


def _serialize_food_log(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "food": asdict(entry.food),
        "meal_type_id": entry.meal_type_id,
        "meal_type": entry.meal_type_name,
        "quantity": entry.quantity,
        "log_date": entry.log_date.isoformat(),
        "calories": entry.calories,
        "protein_g": entry.protein_g,
        "fat_g": entry.fat_g,
        "carbs_g": entry.carbs_g,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _serialize_exercise_log(entry: ExerciseLogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "exercise": asdict(entry.exercise),
        "duration_minutes": entry.duration_minutes,
        "calories_burned": entry.calories_burned,
        "log_date": entry.log_date.isoformat(),
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }
