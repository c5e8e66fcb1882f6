from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from database import get_db
from schemas.rent_generation import GenerationResult
from tasks.rent_generation import generate_monthly_rent
from utils.auth_utils import require_role, get_user_identifier
from utils.scope import resolve_scope

router = APIRouter(
    prefix="/rent-generation",
    tags=["Rent Generation"],
)
logger = logging.getLogger(__name__)


@router.post("/run", response_model=GenerationResult)
def run_rent_generation_now(db: Session = Depends(get_db), user: dict = Depends(require_role(["landlord"]))):
    """Generate this month's rent charges for the caller's properties now.

    Safe to repeat: tenancies already billed for the month are skipped.
    """
    scope = resolve_scope(get_user_identifier(user), user.get("role"))
    result = generate_monthly_rent(db, scope=scope)
    logger.info(f"Manual rent generation by user {scope.identity_id}: {result.created} created")
    return result
