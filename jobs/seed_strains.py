"""
Strain catalog seed job.

Fills an empty (or partial) catalog with a starter set of well-known strains.
Strains whose name already exists (any casing) are skipped, so the job can
be re-run safely.

Usage:
    python -m jobs.seed_strains
"""

import asyncio
import logging
from typing import Any, Dict, List

from common.database import MongoDB
from common.utils.exceptions import ValidationException

from cabinet.config import settings
from cabinet.services.strain_service import StrainService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


SEED_STRAINS: List[Dict[str, str]] = [
    {
        "name": "Blue Dream",
        "type": "Hybrid",
        "flavor": "Blueberry, sweet, herbal",
        "description": "Balanced full-body relaxation with gentle cerebral invigoration.",
    },
    {
        "name": "Sour Diesel",
        "type": "Sativa",
        "flavor": "Diesel, citrus, earthy",
        "description": "Fast-acting, energizing and dreamy cerebral effects.",
    },
    {
        "name": "Granddaddy Purple",
        "type": "Indica",
        "flavor": "Grape, berry, sweet",
        "description": "Deep physical relaxation; often used for sleep and appetite.",
    },
    {
        "name": "Green Crack",
        "type": "Sativa",
        "flavor": "Mango, citrus, sweet",
        "description": "Sharp, invigorating focus that carries through the day.",
    },
    {
        "name": "Northern Lights",
        "type": "Indica",
        "flavor": "Pine, earthy, sweet",
        "description": "Resinous buds with a relaxing, sedating body effect.",
    },
    {
        "name": "OG Kush",
        "type": "Hybrid",
        "flavor": "Pine, lemon, fuel",
        "description": "Heavy euphoria with stress relief; parent of many West Coast strains.",
    },
    {
        "name": "Jack Herer",
        "type": "Sativa",
        "flavor": "Pine, spicy, woody",
        "description": "Blissful, clear-headed and creative.",
    },
    {
        "name": "Girl Scout Cookies",
        "type": "Hybrid",
        "flavor": "Sweet, earthy, mint",
        "description": "Full-body relaxation with a euphoric lift.",
    },
]


class SeedStrainsJob:
    """
    Inserts the starter catalog through StrainService, so seeded strains
    go through the same validation and normalization as user-created ones.
    """

    def __init__(self, strain_service: StrainService):
        self._strain_service = strain_service

    async def run(self, strains: List[Dict[str, str]] = SEED_STRAINS) -> Dict[str, Any]:
        """
        Seed the catalog.

        Returns:
            Summary with created and skipped strain names
        """
        results: Dict[str, Any] = {"created": [], "skipped": []}

        for strain in strains:
            try:
                await self._strain_service.create_strain(
                    name=strain["name"],
                    strain_type=strain["type"],
                    flavor=strain.get("flavor", ""),
                    description=strain.get("description", ""),
                )
            except ValidationException as e:
                if e.code != "STRAIN_EXISTS":
                    raise
                logger.info(f"Skipping existing strain: {strain['name']}")
                results["skipped"].append(strain["name"])
                continue

            results["created"].append(strain["name"])

        logger.info(
            f"Seed complete: {len(results['created'])} created, {len(results['skipped'])} skipped"
        )
        return results


async def main():
    """Main entry point for the seed job."""
    db = MongoDB()
    await db.connect(uri=settings.MONGODB_URI, database_name=settings.MONGODB_DATABASE)

    try:
        strain_service = StrainService(db.db)
        await strain_service.ensure_indexes()
        results = await SeedStrainsJob(strain_service).run()

        print("\n=== Strain Seed Results ===")
        print(f"Created: {', '.join(results['created']) or '-'}")
        print(f"Skipped: {', '.join(results['skipped']) or '-'}")
    finally:
        await db.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
