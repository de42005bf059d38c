# scripts/init_db.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from sqlalchemy import text

from lms.api.dependencies import get_pipeline
from lms.core.context import system_scope, tenant_scope
from lms.infrastructure.database import models  # noqa: F401
from lms.infrastructure.database.client import IsolatedDatabase
from lms.infrastructure.database.session import Base, get_engine, get_session_factory

DEMO_TENANT_NAME = "Demo Academy"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        result = await conn.execute(text("SELECT 1"))
        print("DB Connected:", result.scalar())
        # Create tables if they don't exist
        await conn.run_sync(Base.metadata.create_all)

    async with get_session_factory()() as session:
        db = IsolatedDatabase(session, get_pipeline())
        with system_scope():
            tenant = await db.model("Tenant").find_first(where={"tenant_name": DEMO_TENANT_NAME})
            if tenant is None:
                tenant = await db.model("Tenant").create(data={"tenant_name": DEMO_TENANT_NAME})

        # Seed through the tenant scope so rows are stamped by the interceptor
        with tenant_scope(tenant.tenant_id):
            specs = db.model("Specialization")
            if await specs.count() == 0:
                await specs.create(data={"specialization_name": "Mathematics"})
            print("Specializations in demo tenant:", await specs.count())

        await db.commit()
        print("Seeded tenant:", tenant.tenant_id)

    await engine.dispose()


asyncio.run(init_db())
