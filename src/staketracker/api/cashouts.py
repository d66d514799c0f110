from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from staketracker.api.deps import get_db
from staketracker.api.schemas.cashouts import IngestResponse
from staketracker.exceptions import IngestValidationError
from staketracker.ingest.service import IngestionService

router = APIRouter(prefix="/api", tags=["cashouts"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


async def _ingest(body: Any, db: AsyncSession) -> IngestResponse:
    service = IngestionService(db)
    try:
        await service.ingest(body)
    except IngestValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    await db.commit()
    return IngestResponse()


@router.post("/cashouts", response_model=IngestResponse)
async def ingest_cashout(db: DbDep, body: Any = Body(...)) -> IngestResponse:
    """Ingest a cashout in either the nested ``{minesCashout, user}`` or the flat shape."""
    return await _ingest(body, db)


@router.post("/ingest", response_model=IngestResponse)
async def ingest_flat(db: DbDep, body: Any = Body(...)) -> IngestResponse:
    """Compatibility alias used by older userscript builds."""
    return await _ingest(body, db)
