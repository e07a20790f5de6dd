import logging
from fastapi import APIRouter, HTTPException
from uni_leaderboard.exceptions import FetchFailure, InvalidInputError
from uni_leaderboard.models import LeaderboardRequest, LeaderboardResponse
from uni_leaderboard.services import leaderboard_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/api/leaderboard")
async def get_leaderboard(request: LeaderboardRequest) -> LeaderboardResponse:
    """Build the trader leaderboard for a token"""
    logger.info(f"Received leaderboard request: {request.model_dump(exclude_none=True)}")
    try:
        return await leaderboard_service.get_leaderboard(request)

    except InvalidInputError as e:
        logger.warning(f"Rejected leaderboard request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except FetchFailure as e:
        logger.error(f"Error fetching swaps for token {request.token_address}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to build leaderboard: {e}")
        raise HTTPException(status_code=500, detail="Failed to build leaderboard")
