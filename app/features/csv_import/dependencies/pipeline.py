from fastapi import Depends

from app.features.channels.dependencies.registry import get_channel_registry
from app.features.channels.services.registry import ChannelRegistry
from app.features.csv_import.services.ownership import OwnershipCheck, SimulatedOwnershipCheck
from app.features.csv_import.services.pipeline import BulkImportPipeline


def get_ownership_check() -> OwnershipCheck:
    return SimulatedOwnershipCheck()


async def get_import_pipeline(
    registry: ChannelRegistry = Depends(get_channel_registry),
    ownership_check: OwnershipCheck = Depends(get_ownership_check),
) -> BulkImportPipeline:
    return BulkImportPipeline(registry, ownership_check)
