#!/usr/bin/env python3
"""
Script to register pens and breeding stock for a farm.

Pig and pen management lives outside this service; this script loads the minimum a farm
needs before matings can be recorded:
1. Creates the pen (or reuses an existing one by id)
2. Registers each sow and boar tag in that pen

Usage:
  python scripts/seed_farm.py --farm-id UUID --pen "Pen A" --sow S-001 --boar B-001
"""

import asyncio
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sowcycle.config.settings import get_settings
from sowcycle.domain.models.pen import Pen
from sowcycle.domain.models.pig import Gender, Pig
from sowcycle.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def seed_farm(farm_id: UUID, pen_name: str, sows: list[str], boars: list[str]):
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            pen = await uow.pens.add(Pen(id=uuid4(), farm_id=farm_id, name=pen_name))
            print(f"✨ Pen created: {pen.name} ({pen.id})")

            stock = [(tag, Gender.FEMALE) for tag in sows] + [(tag, Gender.MALE) for tag in boars]
            for tag, gender in stock:
                if await uow.pigs.get(farm_id, tag):
                    print(f"ℹ️  Pig {tag} already exists, skipped")
                    continue
                await uow.pigs.add(
                    Pig.create(farm_id=farm_id, pig_id=tag, gender=gender.value, pen_id=pen.id)
                )
                print(f"   {gender.value:<6} {tag}")
            await uow.commit()

        print("\n✅ Farm seeded successfully!")
        print(f"   Farm ID: {farm_id}")
    except Exception as exc:
        print(f"\n❌ Error seeding farm: {exc}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Register a pen with sows and boars for a farm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One pen with two sows and a boar
  python scripts/seed_farm.py --farm-id 12345678-1234-5678-1234-567812345678
  --pen "Pen A" --sow S-001 --sow S-002 --boar B-001
        """,
    )
    parser.add_argument("--farm-id", help="Farm ID (optional, auto-generated)")
    parser.add_argument("--pen", required=True, help="Pen name")
    parser.add_argument("--sow", action="append", default=[], help="Sow tag (repeatable)")
    parser.add_argument("--boar", action="append", default=[], help="Boar tag (repeatable)")

    args = parser.parse_args()

    farm_uuid = uuid4()
    if args.farm_id:
        try:
            farm_uuid = UUID(args.farm_id)
        except ValueError:
            print(f"❌ Error: '{args.farm_id}' is not a valid UUID")
            sys.exit(1)

    print("=" * 60)
    print("🐖 Farm Seeder - Sowcycle")
    print("=" * 60)

    asyncio.run(seed_farm(farm_uuid, args.pen, args.sow, args.boar))

    print("\n" + "=" * 60)
    print("✨ Process completed")
    print("=" * 60)
