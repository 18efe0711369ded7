"""Court price rule endpoints.

Rules are read and written in the club's local time. They are stored in
UTC and converted back on the way out.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.price_rule import (
    PriceRuleCreate,
    PriceRuleUpdate,
    PriceRuleLocal,
    RuleValidationResult,
)
from app.services.pricing_service import (
    RuleConflictError,
    RuleValidationFailed,
    pricing_service,
)

router = APIRouter(prefix="/courts/{court_id}/price-rules", tags=["price-rules"])


@router.get("", response_model=List[PriceRuleLocal])
async def list_price_rules(
    court_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    List a court's price rules.

    Args:
        court_id: Court ID
        db: Database session

    Returns:
        Rules with start and end times in club-local time
    """
    try:
        return await pricing_service.list_rules(db, court_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/validate", response_model=RuleValidationResult)
async def validate_price_rule(
    court_id: int,
    rule: PriceRuleCreate,
    rule_id: Optional[int] = Query(default=None, description="Rule being edited, if any"),
    db: AsyncSession = Depends(get_db),
):
    """
    Check a rule as it is being edited without storing it.

    Runs the same checks as create and update, so forms can show field
    errors before submitting.
    """
    try:
        error = await pricing_service.validate_rule(db, court_id, rule, exclude_id=rule_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return RuleValidationResult(valid=error is None, error=error)


@router.post("", response_model=PriceRuleLocal, status_code=201)
async def create_price_rule(
    court_id: int,
    rule: PriceRuleCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a price rule.

    Args:
        court_id: Court ID
        rule: Rule with club-local start and end times
        db: Database session

    Returns:
        Created rule
    """
    try:
        return await pricing_service.create_rule(db, court_id, rule)
    except RuleValidationFailed as e:
        raise HTTPException(status_code=422, detail=e.error.model_dump())
    except RuleConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{rule_id}", response_model=PriceRuleLocal)
async def get_price_rule(
    court_id: int,
    rule_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific price rule."""
    try:
        return await pricing_service.get_rule(db, court_id, rule_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{rule_id}", response_model=PriceRuleLocal)
async def update_price_rule(
    court_id: int,
    rule_id: int,
    rule_update: PriceRuleUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a price rule.

    The updated rule is validated as a whole, together with the court's
    other rules.
    """
    try:
        return await pricing_service.update_rule(db, court_id, rule_id, rule_update)
    except RuleValidationFailed as e:
        raise HTTPException(status_code=422, detail=e.error.model_dump())
    except RuleConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{rule_id}", status_code=204)
async def delete_price_rule(
    court_id: int,
    rule_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a price rule."""
    try:
        await pricing_service.delete_rule(db, court_id, rule_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
