"""
API router for static game content and quizzes.
"""
from typing import Annotated, List

from fastapi import APIRouter, HTTPException, Path

from climafarm.api.dependencies import QuizGeneratorDep
from climafarm.domain.models import Crop, EarthArea, LocationData, QuizQuestion
from climafarm.services.domain import game_data


router = APIRouter(
    prefix="/game",
    tags=["game"],
)


@router.get("/crops", response_model=List[Crop], summary="All crops")
async def get_crops() -> List[Crop]:
    return game_data.CROPS


@router.get("/areas", response_model=List[EarthArea], summary="Tutorial areas")
async def get_earth_areas() -> List[EarthArea]:
    return game_data.EARTH_AREAS


@router.get(
    "/areas/{area_id}/suitable-crops",
    response_model=List[Crop],
    summary="Crops that grow in a tutorial area",
)
async def get_suitable_crops(
    area_id: Annotated[int, Path(description="Tutorial area id")],
) -> List[Crop]:
    area = game_data.get_earth_area(area_id)
    if area is None:
        raise HTTPException(status_code=404, detail=f"Area with ID '{area_id}' not found")
    return game_data.suitable_crops(area.temperature, area.soil_type)


@router.get(
    "/quiz/{area_id}",
    response_model=QuizQuestion,
    summary="Fixed quiz question for a tutorial area",
)
async def get_quiz_question(
    area_id: Annotated[int, Path(description="Tutorial area id")],
) -> QuizQuestion:
    question = game_data.get_quiz_question(area_id)
    if question is None:
        raise HTTPException(status_code=404, detail=f"No quiz question for area '{area_id}'")
    return question


@router.post(
    "/quiz/climate",
    response_model=QuizQuestion,
    summary="Generate a quiz question about a played location",
)
async def generate_climate_quiz(
    location: LocationData,
    generator: QuizGeneratorDep,
) -> QuizQuestion:
    return generator.generate_climate_quiz(location)
