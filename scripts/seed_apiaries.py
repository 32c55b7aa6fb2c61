"""Seed a demo apiary with hives and a week of sensor records."""
import random
from datetime import datetime, timedelta

from beeyard.config import config
from beeyard.db import Database
from beeyard.models import Apiary, Hive, Record
from beeyard.services import DataService

INITIAL_APIARIES = [
    {"name": "Home Yard", "location_lat": 40.4168, "location_long": -3.7038},
    {"name": "Orchard", "location_lat": 40.9429, "location_long": -4.1088},
]
HIVES_PER_APIARY = 2
DAYS = 7


def sample_records(start: datetime) -> list[Record]:
    """One record every 30 minutes between 08:00 and 20:00 for DAYS days."""
    records = []
    for day in range(DAYS):
        current = start + timedelta(days=day, hours=8)
        while current.hour < 20:
            records.append(
                Record(
                    id=-1,
                    timestamp=current,
                    num_bees=random.randint(0, 60),
                    temperature=round(random.uniform(12, 32), 1),
                    humidity=round(random.uniform(0.3, 0.9), 2),
                )
            )
            current += timedelta(minutes=30)
    return records


def main():
    start = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0) - timedelta(days=DAYS)

    with DataService(Database(config.database_url)) as data:
        existing = {a.name for a in data.apiaries.get_apiaries().unwrap()}

        for apiary_data in INITIAL_APIARIES:
            if apiary_data["name"] in existing:
                print(f"Skipping {apiary_data['name']} - already exists")
                continue

            apiary = Apiary(id=data.apiaries.get_next_apiary_id().unwrap(), **apiary_data)
            data.apiaries.save_apiary(apiary).unwrap()
            print(f"Created: {apiary.name} (id={apiary.id})")

            for n in range(HIVES_PER_APIARY):
                hive = Hive(id=data.hives.get_next_hive_id().unwrap(), name=f"{apiary.name} #{n + 1}")
                data.hives.save_hive(apiary.id, hive).unwrap()
                saved = data.records.save_records(hive.id, sample_records(start)).unwrap()
                print(f"  Hive {hive.name} (id={hive.id}): {len(saved)} records")


if __name__ == "__main__":
    main()
