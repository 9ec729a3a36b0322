"""
Domain service: Static game content and quiz generation.

Crops, tutorial areas and the fixed quiz live here, together with the
generator that builds a quiz question from a played location.
"""
import random
import time
from typing import Optional

from climafarm.domain.models import (
    Area,
    ClimateZone,
    Crop,
    EarthArea,
    LocationData,
    QuizQuestion,
    SoilType,
)
from climafarm.utils.geo_math import round_half_up

# Chance that a crop with the wrong soil still counts as suitable
SOIL_FLEXIBILITY = 0.3

EARTH_AREAS: list[EarthArea] = [
    EarthArea(
        id=1,
        name="Mediterranean Coast",
        temperature=18,
        soil_type=SoilType.SANDY,
        description="Warm coastal area with sandy soil, perfect for Mediterranean crops.",
        x=30,
        y=40,
    ),
    EarthArea(
        id=2,
        name="European Plains",
        temperature=8,
        soil_type=SoilType.CLAY_RICH,
        description="Temperate region with nutrient-rich clay soil, ideal for grains.",
        x=60,
        y=30,
    ),
    EarthArea(
        id=3,
        name="Mountain Highlands",
        temperature=2,
        soil_type=SoilType.ROCKY,
        description="Cool mountainous area with rocky terrain, suitable for hardy vegetables.",
        x=45,
        y=60,
    ),
    EarthArea(
        id=4,
        name="Tropical Valleys",
        temperature=28,
        soil_type=SoilType.VOLCANIC,
        description="Warm tropical area with volcanic soil rich in minerals.",
        x=70,
        y=50,
    ),
]

CROPS: list[Crop] = [
    Crop(id=1, name="Mediterranean Potato", type="vegetable", min_temperature=10, max_temperature=25,
         soil_requirement=SoilType.SANDY, image="🥔",
         description="Hardy potato variety perfect for Mediterranean coastal areas."),
    Crop(id=2, name="Heritage Tomato", type="fruit", min_temperature=15, max_temperature=30,
         soil_requirement=SoilType.CLAY_RICH, image="🍅",
         description="Classic tomato variety thriving in rich clay soils."),
    Crop(id=3, name="Alpine Spinach", type="vegetable", min_temperature=-5, max_temperature=15,
         soil_requirement=SoilType.ROCKY, image="🥬",
         description="Cold-resistant leafy green adapted to mountain conditions."),
    Crop(id=4, name="Tropical Beans", type="legume", min_temperature=20, max_temperature=35,
         soil_requirement=SoilType.VOLCANIC, image="🫘",
         description="Nitrogen-fixing beans that thrive in volcanic tropical soil."),
    Crop(id=5, name="Coastal Strawberry", type="fruit", min_temperature=5, max_temperature=20,
         soil_requirement=SoilType.SANDY, image="🍓",
         description="Sweet strawberry variety adapted to coastal sandy soils."),
    Crop(id=6, name="European Wheat", type="vegetable", min_temperature=0, max_temperature=20,
         soil_requirement=SoilType.CLAY_RICH, image="🌾",
         description="Traditional wheat variety perfect for European plains."),
]

QUIZ_QUESTIONS: list[QuizQuestion] = [
    QuizQuestion(
        id=1,
        question="Given the temperature of 18°C and sandy soil, which crop would be best suited for this Mediterranean area?",
        options=["Mediterranean Potato", "Heritage Tomato", "Alpine Spinach", "Tropical Beans"],
        correct_answer=0,
        explanation="Mediterranean Potato is perfect for 18°C temperature and sandy coastal soil conditions.",
        area_id=1,
    ),
    QuizQuestion(
        id=2,
        question="With clay-rich soil and 8°C temperature, what would grow best in these European plains?",
        options=["Coastal Strawberry", "European Wheat", "Heritage Tomato", "Tropical Beans"],
        correct_answer=1,
        explanation="European Wheat thrives in clay-rich soil and can handle 8°C temperatures perfectly.",
        area_id=2,
    ),
    QuizQuestion(
        id=3,
        question="In rocky soil at 2°C, which crop can survive these mountain highland conditions?",
        options=["Heritage Tomato", "Alpine Spinach", "Mediterranean Potato", "Coastal Strawberry"],
        correct_answer=1,
        explanation="Alpine Spinach is specifically adapted for rocky soil and cold mountain temperatures.",
        area_id=3,
    ),
    QuizQuestion(
        id=4,
        question="The volcanic soil at 28°C is ideal for which tropical crop?",
        options=["Tropical Beans", "European Wheat", "Alpine Spinach", "Mediterranean Potato"],
        correct_answer=0,
        explanation="Tropical Beans love warm volcanic soil and thrive at 28°C temperatures.",
        area_id=4,
    ),
]

TEMPERATURE_PATTERNS = [
    "Hot with large daily variation",
    "Consistently hot conditions",
    "Moderate with significant daily swings",
    "Temperate conditions",
    "Cool with moderate variation",
    "Cool stable conditions",
    "Cold with daily fluctuation",
    "Consistently cold conditions",
]

CLIMATE_ADAPTATIONS: dict[ClimateZone, list[str]] = {
    ClimateZone.TROPICAL: [
        "Use shade cloth to protect from intense sun",
        "Implement efficient drainage systems",
        "Choose heat-resistant crop varieties",
    ],
    ClimateZone.TROPICAL_RAINFOREST: [
        "Implement efficient drainage systems",
        "Use raised beds to avoid waterlogging",
        "Choose disease-resistant crop varieties",
    ],
    ClimateZone.TROPICAL_MONSOON: [
        "Time planting to the onset of the rainy season",
        "Store water for the dry months",
        "Use terracing to control runoff",
    ],
    ClimateZone.SUBTROPICAL: [
        "Plan for wet and dry seasons",
        "Use mulching to retain moisture",
        "Select drought-tolerant varieties",
    ],
    ClimateZone.MEDITERRANEAN: [
        "Irrigate through the dry summer",
        "Plant in autumn to use winter rains",
        "Grow drought-adapted perennials like olives and vines",
    ],
    ClimateZone.TEMPERATE: [
        "Rotate crops seasonally",
        "Use frost protection methods",
        "Implement season extension techniques",
    ],
    ClimateZone.CONTINENTAL: [
        "Use cold-frame protection",
        "Select short-season varieties",
        "Implement wind protection",
    ],
    ClimateZone.STEPPE: [
        "Practice dryland farming with fallow periods",
        "Plant windbreaks to reduce soil erosion",
        "Combine grazing with hardy grains",
    ],
    ClimateZone.ARID_DESERT: [
        "Use drip irrigation to save water",
        "Farm in shaded or sheltered plots",
        "Choose heat and drought-tolerant species",
    ],
    ClimateZone.COLD_DESERT: [
        "Capture snowmelt for irrigation",
        "Use windbreaks and cold frames",
        "Choose cold-hardy drought-tolerant species",
    ],
    ClimateZone.SEMI_ARID: [
        "Harvest rainwater in the short wet season",
        "Use mulching to retain moisture",
        "Select drought-tolerant varieties",
    ],
    ClimateZone.SUBARCTIC: [
        "Select fast-maturing varieties",
        "Use polytunnels to extend the season",
        "Warm the soil with dark mulch",
    ],
    ClimateZone.TUNDRA: [
        "Use greenhouse cultivation",
        "Grow in raised beds above the permafrost",
        "Choose arctic-adapted varieties",
    ],
    ClimateZone.POLAR: [
        "Use greenhouse cultivation",
        "Employ soil heating systems",
        "Choose arctic-adapted varieties",
    ],
}

WRONG_ADAPTATIONS = [
    "Use only greenhouse farming",
    "Plant crops randomly throughout the year",
    "Ignore soil moisture levels",
    "Use identical farming methods worldwide",
]

SOIL_BENEFITS: dict[SoilType, list[str]] = {
    SoilType.SANDY: ["Excellent drainage", "Easy to work with", "Good root penetration"],
    SoilType.CLAY_RICH: ["High nutrient retention", "Good water holding capacity", "Rich in minerals"],
    SoilType.VOLCANIC: ["Exceptional fertility", "Rich in trace minerals", "Good structure"],
    SoilType.ROCKY: ["Good drainage", "Mineral rich", "Suitable for hardy crops"],
    SoilType.LOAMY: ["Perfect balance of nutrients", "Ideal water retention", "Easy cultivation"],
    SoilType.PEATY: ["High organic content", "Excellent for root vegetables", "Rich in nutrients"],
}

WRONG_SOIL_BENEFITS = [
    "Poor water retention",
    "Low nutrient content",
    "Difficult to cultivate",
    "Unsuitable for most crops",
]


def get_earth_area(area_id: int) -> Optional[EarthArea]:
    return next((area for area in EARTH_AREAS if area.id == area_id), None)


def get_quiz_question(area_id: int) -> Optional[QuizQuestion]:
    return next((q for q in QUIZ_QUESTIONS if q.area_id == area_id), None)


def suitable_crops(temperature: float, soil_type: SoilType) -> list[Crop]:
    """Crops whose temperature range covers the value and whose soil matches."""
    return [
        crop for crop in CROPS
        if crop.min_temperature <= temperature <= crop.max_temperature
        and crop.soil_requirement == soil_type
    ]


def temperature_pattern(day_temp: int, night_temp: int) -> str:
    diff = abs(day_temp - night_temp)
    avg = (day_temp + night_temp) / 2
    if avg > 25:
        return TEMPERATURE_PATTERNS[0] if diff > 10 else TEMPERATURE_PATTERNS[1]
    if avg > 15:
        return TEMPERATURE_PATTERNS[2] if diff > 12 else TEMPERATURE_PATTERNS[3]
    if avg > 5:
        return TEMPERATURE_PATTERNS[4] if diff > 8 else TEMPERATURE_PATTERNS[5]
    return TEMPERATURE_PATTERNS[6] if diff > 5 else TEMPERATURE_PATTERNS[7]


def climate_adaptations(climate_zone: ClimateZone) -> list[str]:
    return CLIMATE_ADAPTATIONS.get(climate_zone, CLIMATE_ADAPTATIONS[ClimateZone.TEMPERATE])


def soil_benefits(soil_type: SoilType) -> list[str]:
    return SOIL_BENEFITS.get(soil_type, SOIL_BENEFITS[SoilType.LOAMY])


class QuizGenerator:
    """
    Builds a quiz question about a played location.

    One of four question kinds is chosen at random: temperature arithmetic
    or pattern, crop suitability, climate adaptation, soil benefit. Options
    are shuffled and correct_answer is the index of the right one.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _question_id(self, offset: int = 0) -> int:
        return int(time.time() * 1000) + offset

    def _question(
        self,
        question: str,
        correct: str,
        wrong: list[str],
        explanation: str,
        area_id: int,
        offset: int,
    ) -> QuizQuestion:
        options = [correct, *wrong]
        self.rng.shuffle(options)
        return QuizQuestion(
            id=self._question_id(offset),
            question=question,
            options=options,
            correct_answer=options.index(correct),
            explanation=explanation,
            area_id=area_id,
        )

    def suitable_crops_for_climate(self, temperature: int, soil_type: SoilType) -> list[Crop]:
        """Like suitable_crops, but a wrong-soil crop sometimes still qualifies."""
        return [
            crop for crop in CROPS
            if crop.min_temperature <= temperature <= crop.max_temperature
            and (crop.soil_requirement == soil_type or self.rng.random() < SOIL_FLEXIBILITY)
        ]

    def temperature_question(self, day_temp: int, night_temp: int, area: Area) -> QuizQuestion:
        diff = abs(day_temp - night_temp)
        avg = round_half_up((day_temp + night_temp) / 2)
        pattern = temperature_pattern(day_temp, night_temp)
        zone = area.climate_zone.value

        variants = [
            (
                f"In {area.name}, the day temperature is {day_temp}°C and night temperature "
                f"is {night_temp}°C. What is the temperature difference?",
                f"{diff}°C",
                [f"{diff + 5}°C", f"{diff - 3}°C", f"{diff + 8}°C"],
                f"The temperature difference between day ({day_temp}°C) and night ({night_temp}°C) "
                f"is {diff}°C. This daily temperature variation affects crop selection and farming "
                f"practices in {zone} climates.",
            ),
            (
                f"With day temperature of {day_temp}°C and night temperature of {night_temp}°C "
                f"in {area.name}, what is the average temperature?",
                f"{avg}°C",
                [f"{avg + 3}°C", f"{avg - 2}°C", f"{day_temp}°C"],
                f"The average temperature is calculated as ({day_temp}°C + {night_temp}°C) ÷ 2 = "
                f"{avg}°C. This average helps determine suitable crops for the region.",
            ),
            (
                f"Based on the temperature data (Day: {day_temp}°C, Night: {night_temp}°C) "
                f"in {area.name}, this represents which climate pattern?",
                pattern,
                [p for p in TEMPERATURE_PATTERNS if p != pattern][:3],
                f"With day temperatures of {day_temp}°C and night temperatures of {night_temp}°C, "
                f"this shows {pattern.lower()} conditions typical of {zone} regions.",
            ),
        ]
        question, correct, wrong, explanation = self.rng.choice(variants)
        return self._question(question, correct, wrong, explanation, area.id, 0)

    def crop_suitability_question(self, crops: list[Crop], area: Area) -> QuizQuestion:
        if not crops:
            crops = CROPS[:2]
        correct = crops[0]
        wrong = [crop.name for crop in CROPS if crop not in crops][:3]
        return self._question(
            f"With {area.climate_zone.value.lower()} climate, {area.day_temperature}°C average "
            f"temperature, and {area.soil_type.value.lower()} soil in {area.name}, which crop "
            f"would be most suitable?",
            correct.name,
            wrong,
            f"{correct.name} is ideal for this location because it thrives in temperatures "
            f"between {correct.min_temperature}°C and {correct.max_temperature}°C and grows well "
            f"in {correct.soil_requirement.value.lower()} soil.",
            area.id,
            1,
        )

    def climate_adaptation_question(self, area: Area) -> QuizQuestion:
        correct = climate_adaptations(area.climate_zone)[0]
        wrong = [a for a in WRONG_ADAPTATIONS if a != correct][:3]
        return self._question(
            f"In the {area.climate_zone.value} climate zone of {area.name}, what farming "
            f"adaptation would be most effective?",
            correct,
            wrong,
            f"In {area.climate_zone.value.lower()} climates, {correct.lower()} is essential for "
            f"successful agriculture due to the specific temperature and precipitation patterns.",
            area.id,
            2,
        )

    def soil_question(self, area: Area) -> QuizQuestion:
        correct = soil_benefits(area.soil_type)[0]
        wrong = [b for b in WRONG_SOIL_BENEFITS if b != correct][:3]
        return self._question(
            f"The {area.soil_type.value.lower()} soil in {area.name} provides which main "
            f"advantage for agriculture?",
            correct,
            wrong,
            f"{area.soil_type.value} soil is beneficial because it {correct.lower()}, making it "
            f"suitable for various agricultural practices.",
            area.id,
            3,
        )

    def generate_climate_quiz(self, location: LocationData) -> QuizQuestion:
        """Random question about the location's temperatures, crops, climate or soil."""
        area = location.area
        crops = self.suitable_crops_for_climate(location.day_temp, area.soil_type)
        builders = [
            lambda: self.temperature_question(location.day_temp, location.night_temp, area),
            lambda: self.crop_suitability_question(crops, area),
            lambda: self.climate_adaptation_question(area),
            lambda: self.soil_question(area),
        ]
        return self.rng.choice(builders)()
