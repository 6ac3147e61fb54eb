"""Demo roster loaded into the in-memory store at startup (SEED_DEMO_DATA=true)."""

import logging
from datetime import date
from typing import List

from lailatov.core.store import InMemoryBabyRepository
from lailatov.db.models import Baby, SleepCycle, SleepRecord
from lailatov.utils.sleep_records import now_local

logger = logging.getLogger(__name__)


# Used by: seed_demo_data(), tests
def build_demo_babies() -> List[Baby]:
    seeded_at = now_local()
    return [
        Baby(
            id="1",
            name="אורי",
            family_name="כהן",
            age=6,
            mother_name="שרה",
            father_name="משה",
            siblings_count=0,
            parent_username="cohen-family",
            description="תינוק חייכן ושמח, מתקשה להירדם בלילה.",
            coach_notes="להמליץ על טקס שינה קבוע. לבדוק תזונה לפני השינה.",
            sleep_records=[
                SleepRecord(
                    id="sr1",
                    date=date(2024, 7, 20),
                    stage="הסתגלות",
                    sleep_cycles=[
                        SleepCycle(id="sc1", bedtime="19:00", time_to_sleep="30 דקות",
                                   who_put_to_sleep="אמא", how_fell_asleep="הנקה", wake_time="06:00"),
                        SleepCycle(id="sc2", bedtime="10:00", time_to_sleep="15 דקות",
                                   who_put_to_sleep="אבא", how_fell_asleep="נענוע קל", wake_time="11:30"),
                    ],
                ),
                SleepRecord(
                    id="sr1-prev",
                    date=date(2024, 7, 19),
                    stage="הסתגלות",
                    sleep_cycles=[
                        SleepCycle(id="sc1-prev", bedtime="19:30", time_to_sleep="45 דקות",
                                   who_put_to_sleep="אמא", how_fell_asleep="הנקה", wake_time="05:45"),
                    ],
                ),
            ],
            last_modified=seeded_at,
        ),
        Baby(
            id="2",
            name="נועה",
            family_name="לוי",
            age=8,
            mother_name="רבקה",
            father_name="יעקב",
            siblings_count=1,
            siblings_names="דניאל (3)",
            parent_username="levi-family",
            description="מתעוררת מספר פעמים בלילה.",
            coach_notes="לנסות להפחית גירויים לפני השינה. לבדוק טמפרטורת חדר.",
            sleep_records=[
                SleepRecord(
                    id="sr2",
                    date=date(2024, 7, 21),
                    stage="ביסוס הרגלים",
                    sleep_cycles=[
                        SleepCycle(id="sc3", bedtime="20:00", time_to_sleep="20 דקות",
                                   who_put_to_sleep="אמא", how_fell_asleep="שיר ערש", wake_time="05:30"),
                    ],
                ),
            ],
            last_modified=seeded_at,
        ),
        Baby(
            id="3",
            name="איתי",
            family_name="ישראל",
            age=12,
            mother_name="לאה",
            father_name="יוסף",
            siblings_count=2,
            siblings_names="רות (5), דוד (2)",
            parent_username="israel-family",
            description="נרדם רק על הידיים.",
            coach_notes="לעבוד על הרדמות עצמאית במיטה.",
            last_modified=seeded_at,
        ),
    ]


# Used by: main.py lifespan (startup)
def seed_demo_data(repository: InMemoryBabyRepository) -> int:
    """Load the demo roster into an empty store. Returns how many babies were added."""
    if len(repository) > 0:
        logger.warning("Store already populated, skipping demo seed")
        return 0

    babies = build_demo_babies()
    repository.load(babies)
    logger.info(f"Seeded {len(babies)} demo babies")
    return len(babies)
